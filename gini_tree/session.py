# gini_tree/session.py
import asyncio
import enum
import random
from typing import NamedTuple, Tuple

from .boundary import rasterize_decision_boundary
from .config import PlaygroundConfig
from .datasets import generate_dataset
from .layout import layout_for_canvas
from .tree import build_tree
from .utils import Point, make_point


class TrainingState(enum.Enum):
    IDLE = 'idle'
    TRAINING = 'training'
    TRAINED = 'trained'


class TrainingTicket(NamedTuple):
    generation: int
    points: Tuple[Point, ...]
    max_depth: int
    min_samples_split: int


class PlaygroundSession:
    """
    Owns the displayed dataset/tree pair.

    Every regenerate, add_point or begin_training call starts a new generation.
    A training result is committed only if its ticket belongs to the current
    generation, so the most recent request always wins and a stale result is
    dropped instead of being paired with a newer dataset.
    """

    def __init__(self, config=None, seed=None, verbose=False):
        self.config = config if config is not None else PlaygroundConfig()
        self.verbose = verbose
        self._rng = random.Random(seed)
        self.generation = 0
        self.state = TrainingState.IDLE
        self.tree = None
        self.points = generate_dataset(self.config.pattern, seed=self._rng)

    def _invalidate(self, state):
        self.generation += 1
        self.tree = None
        self.state = state

    def update_config(self, **changes):
        """Applies validated option changes. A pattern change regenerates the dataset."""
        new_config = self.config.replace(**changes)
        pattern_changed = new_config.pattern != self.config.pattern
        self.config = new_config
        if pattern_changed:
            self.regenerate()
        return self.config

    def regenerate(self, pattern=None):
        if pattern is not None and pattern != self.config.pattern:
            self.config = self.config.replace(pattern=pattern)
        points = generate_dataset(self.config.pattern, seed=self._rng)
        self._invalidate(TrainingState.IDLE)
        self.points = points
        return self.points

    def add_point(self, x, y, label):
        point = make_point(x, y, label)
        self._invalidate(TrainingState.IDLE)
        self.points = self.points + (point,)
        return point

    def begin_training(self):
        self._invalidate(TrainingState.TRAINING)
        if self.verbose:
            print(f"Training requested (generation {self.generation}, {len(self.points)} points).")
        return TrainingTicket(
            generation=self.generation,
            points=self.points,
            max_depth=self.config.max_depth,
            min_samples_split=self.config.min_samples_split
        )

    def is_current(self, ticket):
        return ticket.generation == self.generation

    def complete_training(self, ticket):
        """
        Builds the tree for a ticket and commits it if the ticket is still current.

        Returns:
            The committed tree, or None when the ticket was superseded.
        """
        if not self.is_current(ticket):
            if self.verbose:
                print(f"Discarding stale training run (generation {ticket.generation} < {self.generation}).")
            return None

        tree = build_tree(
            ticket.points, max_depth=ticket.max_depth,
            min_samples_split=ticket.min_samples_split
        )
        self.tree = tree
        self.state = TrainingState.TRAINED
        return tree

    def train(self):
        return self.complete_training(self.begin_training())

    async def train_staged(self, delay=None):
        """Like train, with a pause between the request and the build so a UI can show progress."""
        ticket = self.begin_training()
        await asyncio.sleep(self.config.training_delay if delay is None else delay)
        return self.complete_training(ticket)

    def boundary_raster(self, block_size=2):
        if self.tree is None or not self.config.show_decision_boundary:
            return None
        return rasterize_decision_boundary(
            self.tree, self.config.canvas_width, self.config.canvas_height, block_size
        )

    def tree_layout(self):
        if self.tree is None or not self.config.show_tree:
            return None
        return layout_for_canvas(self.tree, self.config.canvas_width)
