# gini_tree/stopping.py
import numbers


def check_pre_split_stopping_conditions(
    node_num_samples,
    current_depth,
    min_samples_split,
    max_depth
    ):
    """
    Checks for basic stopping conditions before attempting to find a split.
    This avoids the cost of split-finding for nodes that are already terminal.

    Args:
        node_num_samples (int): Number of points in the current node.
        current_depth (int): Current depth of the node in the tree.
        min_samples_split (int): Minimum number of points required in a node to consider splitting.
        max_depth (int): Maximum allowed depth for the tree.

    Returns:
        str or None: A string describing the reason for stopping, or None if no stopping condition is met.
    """

    if current_depth >= max_depth:
        return f"max_depth ({current_depth} >= {max_depth})"

    if node_num_samples < min_samples_split:
        return f"min_samples_split ({node_num_samples} < {min_samples_split})"

    return None


def check_post_split_stopping_condition(best_split):
    """
    Decides whether the best split found for a node is worth taking.
    A split that does not strictly reduce impurity forces the node to be a leaf,
    even when max_depth has not been reached.

    Args:
        best_split (dict or None): Result of find_best_split_for_node.

    Returns:
        str or None: A string describing the reason for stopping, or None if splitting should proceed.
    """
    if best_split is None:
        return "no_valid_split"

    if best_split['gain'] <= 0:
        return f"non_positive_gain ({best_split['gain']:.4f} <= 0)"

    return None


def validate_hyperparameters(max_depth, min_samples_split):
    """Rejects hyperparameters that cannot produce a well-formed tree."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, numbers.Integral):
        raise ValueError(f"max_depth must be an integer, got {max_depth!r}.")
    if isinstance(min_samples_split, bool) or not isinstance(min_samples_split, numbers.Integral):
        raise ValueError(f"min_samples_split must be an integer, got {min_samples_split!r}.")
    if max_depth < 1:
        raise ValueError(f"max_depth must be >= 1, got {max_depth}.")
    if min_samples_split < 2:
        raise ValueError(f"min_samples_split must be >= 2, got {min_samples_split}.")
