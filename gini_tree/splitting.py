# gini_tree/splitting.py
import numpy as np

from .utils import FEATURES, feature_value


def find_best_split(
    points,
    feature: str,
    min_samples_split: int,
    verbose: bool = False,
    node_id_for_logs=None,
    node_depth_for_logs: int = 0
):
    """
    Exhaustive threshold search on a single feature axis.

    Candidate thresholds are the midpoints of consecutive distinct sorted values.
    Each candidate is scored by the weighted Gini impurity reduction
    gain = gini(parent) - |L|/|P| * gini(L) - |R|/|P| * gini(R).

    Returns:
        dict or None: {'feature', 'threshold', 'gain', 'left_count', 'right_count'} for
        the candidate with the strictly greatest gain (ties keep the smallest threshold),
        or None when there are fewer than min_samples_split points or no candidate.
    """
    indent = "  " * (node_depth_for_logs + 2)
    num_points = len(points)

    if num_points < min_samples_split:
        if verbose:
            print(f"{indent}Split '{feature}' (Node {node_id_for_logs}): Not enough samples ({num_points} < {min_samples_split}).")
        return None

    values = np.array([feature_value(p, feature) for p in points], dtype=float)
    labels = np.array([p.label for p in points], dtype=int)

    order = np.argsort(values, kind='mergesort')
    sorted_values = values[order]
    sorted_labels = labels[order]

    lower, upper = sorted_values[:-1], sorted_values[1:]
    thresholds = (lower + upper) / 2.0
    # A midpoint that rounds onto the upper value would move that value to the left side.
    valid = (upper > lower) & (thresholds < upper)

    if not np.any(valid):
        if verbose:
            print(f"{indent}Split '{feature}' (Node {node_id_for_logs}): Less than 2 distinct values, no split possible.")
        return None

    total_ones = int(sorted_labels.sum())

    # Candidate i puts sorted positions [0, i] on the left.
    left_counts = np.arange(1, num_points, dtype=np.int64)
    right_counts = num_points - left_counts
    left_ones = np.cumsum(sorted_labels, dtype=np.int64)[:-1]
    right_ones = total_ones - left_ones

    # For two classes the gain reduces to 2 * |L| * |R| * (p_L - p_R)^2 / |P|^2.
    # The integer cross term is exactly 0 when both sides keep the parent proportions.
    cross = left_ones * right_counts - right_ones * left_counts
    gains = 2.0 * (cross / num_points) ** 2 / (left_counts * right_counts)
    gains = np.where(valid, gains, -np.inf)

    # argmax returns the first maximum, i.e. the smallest threshold on ties.
    best_idx = int(np.argmax(gains))
    best_split = {
        'feature': feature,
        'threshold': float(thresholds[best_idx]),
        'gain': float(gains[best_idx]),
        'left_count': int(left_counts[best_idx]),
        'right_count': int(right_counts[best_idx]),
    }

    if verbose:
        print(f"{indent}Split '{feature}' (Node {node_id_for_logs}): {int(valid.sum())} candidate thresholds, "
              f"best {best_split['threshold']:.3f} (gain {best_split['gain']:.4f}, "
              f"L={best_split['left_count']}, R={best_split['right_count']}).")
    return best_split


def find_best_split_for_node(
    points,
    min_samples_split: int,
    verbose: bool = False,
    node_id_for_logs=None,
    node_depth_for_logs: int = 0
):
    """
    Evaluates every feature axis in order and keeps the split with the greatest gain.
    A later feature replaces an earlier one only on strictly greater gain, so 'x' wins ties.
    """
    indent = "  " * (node_depth_for_logs + 1)
    overall_best_split = None

    for feature in FEATURES:
        current_feature_best_split = find_best_split(
            points, feature, min_samples_split,
            verbose=verbose, node_id_for_logs=node_id_for_logs,
            node_depth_for_logs=node_depth_for_logs
        )
        if current_feature_best_split is None:
            continue
        if overall_best_split is None or current_feature_best_split['gain'] > overall_best_split['gain']:
            overall_best_split = current_feature_best_split

    if verbose:
        if overall_best_split is None:
            print(f"{indent}  No candidate split found for Node {node_id_for_logs}.")
        else:
            print(f"{indent}  Overall best split for Node {node_id_for_logs}: "
                  f"{overall_best_split['feature']} <= {overall_best_split['threshold']:.3f} "
                  f"(gain {overall_best_split['gain']:.4f})")
    return overall_best_split


def partition_points(points, feature, threshold):
    """Splits points into (left, right) with left holding value <= threshold."""
    left, right = [], []
    for point in points:
        if feature_value(point, feature) <= threshold:
            left.append(point)
        else:
            right.append(point)
    return tuple(left), tuple(right)


if __name__ == '__main__':
    from .utils import Point

    mock_points = [
        Point(-1.0, -1.0, 1), Point(-1.0, -1.0, 1), Point(1.0, 1.0, 1),
        Point(-1.0, 1.0, 0), Point(1.0, -1.0, 0),
    ]
    for feat in FEATURES:
        print(f"Best split on '{feat}': {find_best_split(mock_points, feat, 2)}")
    print(f"Overall: {find_best_split_for_node(mock_points, 2, verbose=True)}")
