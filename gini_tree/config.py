# gini_tree/config.py
import numbers

from .datasets import PATTERNS

MAX_DEPTH_RANGE = (1, 6)
MIN_SAMPLES_SPLIT_RANGE = (2, 20)


def _check_int_range(name, value, bounds):
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}.")


class PlaygroundConfig:
    """
    Options recognized by the playground. show_decision_boundary and show_tree
    only gate what the session hands to a renderer; they never change a tree.
    """

    def __init__(
        self,
        pattern='xor',
        max_depth=3,
        min_samples_split=2,
        show_decision_boundary=True,
        show_tree=True,
        training_delay=0.5,
        canvas_width=600,
        canvas_height=400
    ):
        self.pattern = pattern
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.show_decision_boundary = show_decision_boundary
        self.show_tree = show_tree
        self.training_delay = training_delay
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.validate()

    def validate(self):
        if self.pattern not in PATTERNS:
            raise ValueError(f"Unknown pattern '{self.pattern}'. Expected one of {PATTERNS}.")
        _check_int_range('max_depth', self.max_depth, MAX_DEPTH_RANGE)
        _check_int_range('min_samples_split', self.min_samples_split, MIN_SAMPLES_SPLIT_RANGE)
        for name in ('show_decision_boundary', 'show_tree'):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a bool, got {getattr(self, name)!r}.")
        if not isinstance(self.training_delay, numbers.Real) or self.training_delay < 0:
            raise ValueError(f"training_delay must be a non-negative number, got {self.training_delay!r}.")
        for name in ('canvas_width', 'canvas_height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}.")

    @classmethod
    def from_dict(cls, config):
        unknown = set(config) - set(cls().get_params())
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**config)

    def get_params(self):
        return {
            'pattern': self.pattern,
            'max_depth': self.max_depth,
            'min_samples_split': self.min_samples_split,
            'show_decision_boundary': self.show_decision_boundary,
            'show_tree': self.show_tree,
            'training_delay': self.training_delay,
            'canvas_width': self.canvas_width,
            'canvas_height': self.canvas_height
        }

    def replace(self, **changes):
        params = self.get_params()
        params.update(changes)
        return PlaygroundConfig.from_dict(params)

    def __eq__(self, other):
        if not isinstance(other, PlaygroundConfig):
            return NotImplemented
        return self.get_params() == other.get_params()

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"PlaygroundConfig({params})"
