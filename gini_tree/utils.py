# gini_tree/utils.py
from typing import NamedTuple

import numpy as np
import pandas as pd

FEATURES = ('x', 'y')
LABELS = (0, 1)


class Point(NamedTuple):
    x: float
    y: float
    label: int


def calculate_gini_from_counts(counts):
    """
    Gini impurity from a vector of per-class counts.
    Returns 0.0 for an empty population.
    """
    total = sum(counts)
    if total == 0:
        return 0.0
    impurity = 1.0
    for count in counts:
        prob = count / total
        impurity -= prob * prob
    return impurity


def count_labels(labels):
    """Returns (zeros, ones) for a sequence of binary labels."""
    ones = sum(1 for label in labels if label == 1)
    return len(labels) - ones, ones


def calculate_gini(labels):
    """
    Calculates the Gini impurity 1 - sum(p_c^2) of a sequence of 0/1 labels.

    Args:
        labels (sequence of int): Class labels, each 0 or 1.

    Returns:
        float: Impurity in [0, 0.5]. An empty or single-class sequence is 0.0.
    """
    labels = list(labels)
    if not labels:
        return 0.0
    return calculate_gini_from_counts(count_labels(labels))


def majority_label(labels):
    """
    Predicts 1 only when strictly more than half of the labels are 1.
    Ties and empty input resolve to 0.
    """
    labels = list(labels)
    if not labels:
        return 0
    _, ones = count_labels(labels)
    return 1 if ones > len(labels) / 2 else 0


def feature_value(point, feature):
    if feature == 'x':
        return point.x
    if feature == 'y':
        return point.y
    raise ValueError(f"Unknown feature '{feature}'. Expected one of {FEATURES}.")


def _coerce_label(label):
    if isinstance(label, (bool, np.bool_)):
        label = int(label)
    if isinstance(label, (int, np.integer)) and int(label) in LABELS:
        return int(label)
    if isinstance(label, (float, np.floating)) and float(label) in LABELS:
        return int(label)
    raise ValueError(f"Labels must be 0 or 1, got {label!r}.")


def make_point(x, y, label):
    return Point(float(x), float(y), _coerce_label(label))


# --- Pandas DataFrame Utilities ---

def is_pandas_dataframe(data):
    """Checks if the provided data is a Pandas DataFrame."""
    return isinstance(data, pd.DataFrame)


def convert_pandas_to_points(dataframe):
    """
    Converts a Pandas DataFrame with 'x', 'y' and 'label' columns to a tuple of Points.
    """
    if not is_pandas_dataframe(dataframe):
        raise TypeError("Input is not a Pandas DataFrame.")
    missing = [col for col in ('x', 'y', 'label') if col not in dataframe.columns]
    if missing:
        raise ValueError(f"DataFrame is missing required columns: {missing}")
    return tuple(
        make_point(row['x'], row['y'], row['label'])
        for row in dataframe.to_dict(orient='records')
    )


def points_to_dataframe(points):
    """Inverse of convert_pandas_to_points."""
    points = as_points(points)
    return pd.DataFrame(
        {
            'x': [p.x for p in points],
            'y': [p.y for p in points],
            'label': [p.label for p in points],
        },
        columns=['x', 'y', 'label'],
    )


def as_points(data):
    """
    Normalizes supported dataset containers to a tuple of Points.

    Accepts a Pandas DataFrame, a list of dicts with 'x', 'y', 'label' keys,
    or a sequence of Points / (x, y, label) tuples.
    """
    if is_pandas_dataframe(data):
        return convert_pandas_to_points(data)
    if isinstance(data, (str, bytes, dict)) or not hasattr(data, '__iter__'):
        raise TypeError("Input data must be a Pandas DataFrame, a list of dicts or a sequence of points.")

    points = []
    for row in data:
        if isinstance(row, dict):
            points.append(make_point(row['x'], row['y'], row['label']))
        elif len(row) == 3:
            points.append(make_point(*row))
        else:
            raise TypeError(f"Cannot interpret {row!r} as a point.")
    return tuple(points)


def points_to_arrays(points):
    """Returns (features, labels) numpy arrays with shapes (n, 2) and (n,)."""
    features = np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)
    labels = np.array([p.label for p in points], dtype=int)
    return features, labels
