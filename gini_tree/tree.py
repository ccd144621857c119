# gini_tree/tree.py
import time
from typing import NamedTuple, Optional, Union

import numpy as np

from .utils import as_points, calculate_gini, majority_label, points_to_arrays
from .stopping import (
    check_pre_split_stopping_conditions,
    check_post_split_stopping_condition,
    validate_hyperparameters
)
from .splitting import find_best_split_for_node, partition_points


class Leaf(NamedTuple):
    prediction: int
    samples: int
    impurity: float
    node_id: str = 'root'
    reason: Optional[str] = None

    @property
    def is_leaf(self):
        return True

    def __repr__(self):
        return (f"Leaf(id='{self.node_id}', prediction={self.prediction}, samples={self.samples}, "
                f"impurity={self.impurity:.4f}, reason='{self.reason}')")


class InternalNode(NamedTuple):
    feature: str
    threshold: float
    samples: int
    impurity: float
    left: 'TreeNode'
    right: 'TreeNode'
    node_id: str = 'root'
    gain: float = 0.0

    @property
    def is_leaf(self):
        return False

    def __repr__(self):
        return (f"InternalNode(id='{self.node_id}', rule='{self.feature} <= {self.threshold:.3f}', "
                f"samples={self.samples}, impurity={self.impurity:.4f})")


TreeNode = Union[Leaf, InternalNode]


def _make_leaf(points, node_id, reason):
    labels = [p.label for p in points]
    return Leaf(
        prediction=majority_label(labels),
        samples=len(labels),
        impurity=calculate_gini(labels),
        node_id=node_id,
        reason=reason
    )


def _build_node(points, depth, max_depth, min_samples_split, node_id, verbose):
    indent = "  " * (depth + 1)
    if verbose:
        print(f"{indent}Processing Node {node_id} (Depth {depth}): {len(points)} samples.")

    # 1. Check pre-split stopping conditions
    stop_reason = check_pre_split_stopping_conditions(
        node_num_samples=len(points), current_depth=depth,
        min_samples_split=min_samples_split, max_depth=max_depth
    )
    if stop_reason:
        if verbose: print(f"{indent}  Node {node_id} becomes LEAF. Reason: {stop_reason}")
        return _make_leaf(points, node_id, stop_reason)

    # 2. Find the best split across both axes
    best_split = find_best_split_for_node(
        points, min_samples_split, verbose=verbose,
        node_id_for_logs=node_id, node_depth_for_logs=depth
    )

    # 3. A split must strictly reduce impurity
    stop_reason = check_post_split_stopping_condition(best_split)
    if stop_reason:
        if verbose: print(f"{indent}  Node {node_id} becomes LEAF. Reason: {stop_reason}")
        return _make_leaf(points, node_id, stop_reason)

    # 4. Perform the split
    feature, threshold = best_split['feature'], best_split['threshold']
    if verbose: print(f"{indent}  Node {node_id} SPLIT on {feature} <= {threshold:.3f}.")
    left_points, right_points = partition_points(points, feature, threshold)

    return InternalNode(
        feature=feature,
        threshold=threshold,
        samples=len(points),
        impurity=calculate_gini([p.label for p in points]),
        left=_build_node(left_points, depth + 1, max_depth, min_samples_split, f"{node_id}-left", verbose),
        right=_build_node(right_points, depth + 1, max_depth, min_samples_split, f"{node_id}-right", verbose),
        node_id=node_id,
        gain=best_split['gain']
    )


def build_tree(points, max_depth=3, min_samples_split=2, depth=0, verbose=False):
    """
    Greedy, axis-aligned recursive partition of 2-D labeled points using Gini impurity.

    Args:
        points: Dataset in any form accepted by utils.as_points.
        max_depth (int): Absolute depth ceiling, >= 1.
        min_samples_split (int): Minimum population required to attempt a split, >= 2.
        depth (int): Depth assigned to the root of the returned subtree.
        verbose (bool): Print a per-node trace while building.

    Returns:
        Leaf or InternalNode: The root of the built tree.

    Raises:
        ValueError: If the hyperparameters are invalid. Nothing is built in that case.
    """
    validate_hyperparameters(max_depth, min_samples_split)
    points = as_points(points)
    return _build_node(points, depth, max_depth, min_samples_split, 'root', verbose)


def predict(tree, x, y):
    """Classifies (x, y) by walking from the root; value <= threshold routes left."""
    node = tree
    query = {'x': x, 'y': y}
    while not node.is_leaf:
        child = node.left if query[node.feature] <= node.threshold else node.right
        if child is None:
            raise RuntimeError(f"Malformed tree: node '{node.node_id}' is missing a child.")
        node = child
    return node.prediction


def predict_points(tree, points):
    features, _ = points_to_arrays(as_points(points))
    return np.array([predict(tree, x, y) for x, y in features], dtype=int)


def accuracy(tree, points):
    points = as_points(points)
    if not points:
        return 0.0
    predictions = predict_points(tree, points)
    _, labels = points_to_arrays(points)
    return float(np.mean(predictions == labels))


def iter_nodes(tree):
    """Pre-order traversal of every node."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def count_nodes(tree):
    return sum(1 for _ in iter_nodes(tree))


def count_leaves(tree):
    return sum(1 for node in iter_nodes(tree) if node.is_leaf)


def tree_depth(tree):
    """Number of edges on the longest root-to-leaf path."""
    if tree.is_leaf:
        return 0
    return 1 + max(tree_depth(tree.left), tree_depth(tree.right))


def format_tree(node, indent=""):
    if node.is_leaf:
        lines = [f"{indent}Leaf: predict {node.prediction} | N={node.samples} | "
                 f"gini={node.impurity:.3f} (Reason: {node.reason})"]
    else:
        lines = [f"{indent}Split: {node.feature} <= {node.threshold:.3f} (gain={node.gain:.4f}) | "
                 f"N={node.samples} | gini={node.impurity:.3f}"]
        lines.extend(format_tree(node.left, indent + "  |--L: "))
        lines.extend(format_tree(node.right, indent + "  +--R: "))
    return lines


class GiniDecisionTree:
    def __init__(
        self,
        max_depth=3,
        min_samples_split=2,
        verbose=False
    ):
        validate_hyperparameters(max_depth, min_samples_split)
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.verbose = verbose

        self.root = None
        self.n_training_samples = 0

    def fit(self, data):
        points = as_points(data)
        if self.verbose:
            fit_start_time = time.time()
            print(f"GiniDecisionTree.fit started. Data has {len(points)} points.")

        self.root = build_tree(
            points, max_depth=self.max_depth,
            min_samples_split=self.min_samples_split, verbose=self.verbose
        )
        self.n_training_samples = len(points)

        if self.verbose:
            fit_end_time = time.time()
            print(f"GiniDecisionTree.fit completed in {fit_end_time - fit_start_time:.4f}s. "
                  f"Total nodes: {count_nodes(self.root)}")
        return self

    def _check_fitted(self):
        if self.root is None: raise ValueError("Tree has not been fitted yet.")

    def predict_one(self, x, y):
        self._check_fitted()
        return predict(self.root, x, y)

    def predict(self, data):
        self._check_fitted()
        return predict_points(self.root, data)

    def score(self, data):
        self._check_fitted()
        return accuracy(self.root, data)

    def summary(self):
        """The values shown in the tree info panel."""
        self._check_fitted()
        return {
            'samples': self.root.samples,
            'depth': tree_depth(self.root),
            'max_depth': self.max_depth,
            'num_nodes': count_nodes(self.root),
            'num_leaves': count_leaves(self.root),
            'root_impurity': self.root.impurity,
        }

    def get_params(self, deep=True):
        return {
            'max_depth': self.max_depth,
            'min_samples_split': self.min_samples_split,
            'verbose': self.verbose
        }

    def print_tree(self):
        self._check_fitted()
        print("\n".join(format_tree(self.root)))


if __name__ == '__main__':
    from .datasets import generate_dataset

    demo_points = generate_dataset('xor', seed=0)
    demo_tree = GiniDecisionTree(max_depth=3, verbose=True).fit(demo_points)
    demo_tree.print_tree()
    print(demo_tree.summary())
    print(f"Training accuracy: {demo_tree.score(demo_points):.3f}")
