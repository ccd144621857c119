# gini_tree/datasets.py
import math
import numbers
import random

from .utils import Point

PATTERNS = ('xor', 'circles', 'moons', 'linear')
DEFAULT_COUNT = 100
MOON_JITTER = 0.3


def _uniform_square(rng, half_width=5.0):
    return rng.uniform(-half_width, half_width), rng.uniform(-half_width, half_width)


def generate_xor_data(rng, count=DEFAULT_COUNT):
    """Uniform over [-5, 5]^2; label 1 iff x * y > 0."""
    points = []
    for _ in range(count):
        x, y = _uniform_square(rng)
        points.append(Point(x, y, 1 if x * y > 0 else 0))
    return points


def generate_circles_data(rng, count=DEFAULT_COUNT):
    """Polar sample with radius in [0, 4]; label 1 iff radius < 2."""
    points = []
    for _ in range(count):
        angle = rng.uniform(0.0, 2 * math.pi)
        radius = rng.uniform(0.0, 4.0)
        points.append(Point(radius * math.cos(angle), radius * math.sin(angle), 1 if radius < 2 else 0))
    return points


def generate_moons_data(rng, count=DEFAULT_COUNT):
    """
    Two jittered half-circle arcs: an upper lobe labeled 1 and a lower lobe,
    shifted right and down, labeled 0. Lobes are interleaved upper/lower and
    the upper lobe takes the extra point for an odd count.
    """
    points = []
    for i in range(count):
        angle = rng.uniform(0.0, math.pi)
        if i % 2 == 0:
            x = math.cos(angle) + rng.uniform(0.0, MOON_JITTER)
            y = math.sin(angle) + rng.uniform(0.0, MOON_JITTER) + 1
            points.append(Point(x, y, 1))
        else:
            x = math.cos(angle) + rng.uniform(0.0, MOON_JITTER) + 1
            y = -math.sin(angle) + rng.uniform(0.0, MOON_JITTER) - 1
            points.append(Point(x, y, 0))
    return points


def generate_linear_data(rng, count=DEFAULT_COUNT):
    """Uniform over [-5, 5]^2; label 1 iff x + y > 0."""
    points = []
    for _ in range(count):
        x, y = _uniform_square(rng)
        points.append(Point(x, y, 1 if x + y > 0 else 0))
    return points


_GENERATORS = {
    'xor': generate_xor_data,
    'circles': generate_circles_data,
    'moons': generate_moons_data,
    'linear': generate_linear_data,
}


def generate_dataset(pattern, count=None, seed=None):
    """
    Generates a synthetic labeled 2-D dataset.

    Args:
        pattern (str): One of PATTERNS.
        count (int, optional): Number of points. Defaults to 100 (50 per lobe for moons).
        seed (int or random.Random, optional): Seed or generator; None uses fresh entropy.

    Returns:
        tuple of Point: Exactly `count` points.

    Raises:
        ValueError: For an unknown pattern or a non-positive count.
    """
    if pattern not in _GENERATORS:
        raise ValueError(f"Unknown dataset pattern '{pattern}'. Expected one of {PATTERNS}.")
    if count is None:
        count = DEFAULT_COUNT
    if isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}.")

    rng = seed if isinstance(seed, random.Random) else random.Random(seed)
    return tuple(_GENERATORS[pattern](rng, int(count)))


if __name__ == '__main__':
    for name in PATTERNS:
        sample = generate_dataset(name, count=10, seed=0)
        ones = sum(p.label for p in sample)
        print(f"{name}: {len(sample)} points, {ones} labeled 1. First: {sample[0]}")
