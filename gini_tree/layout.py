# gini_tree/layout.py
import warnings
from typing import NamedTuple, Optional

ROW_HEIGHT = 60.0
ROOT_MARGIN_TOP = 30.0


class LaidOutNode(NamedTuple):
    """A tree node paired with its draw coordinates. The wrapped node is never modified."""
    node: object
    x: float
    y: float
    left: Optional['LaidOutNode'] = None
    right: Optional['LaidOutNode'] = None

    @property
    def is_leaf(self):
        return self.node.is_leaf


def layout_tree(tree, x, y, spread, row_height=ROW_HEIGHT):
    """
    Assigns top-down drawing coordinates to every node of a tree.

    The root sits at (x, y). Children are placed one row lower at x - spread (left)
    and x + spread (right), and spread is halved at each level, so a given tree
    shape always produces the same diagram.

    Args:
        tree (Leaf or InternalNode): Root of the tree to lay out.
        x, y (float): Root position.
        spread (float): Horizontal offset of the root's children.
        row_height (float): Vertical distance between levels.

    Returns:
        LaidOutNode: Parallel structure carrying the coordinates.
    """
    if tree.is_leaf:
        return LaidOutNode(tree, float(x), float(y))

    if spread == 0:
        warnings.warn(
            f"Layout spread underflowed to zero at node '{tree.node_id}'; sibling nodes will overlap.",
            UserWarning
        )

    child_y = y + row_height
    return LaidOutNode(
        tree, float(x), float(y),
        left=layout_tree(tree.left, x - spread, child_y, spread / 2, row_height),
        right=layout_tree(tree.right, x + spread, child_y, spread / 2, row_height),
    )


def layout_for_canvas(tree, width=600, row_height=ROW_HEIGHT):
    """Lays out a tree centered on a canvas of the given width."""
    return layout_tree(tree, width / 2, ROOT_MARGIN_TOP, width / 4, row_height)


def iter_laid_out_nodes(laid_out):
    """Pre-order traversal of a laid-out tree."""
    yield laid_out
    if laid_out.left is not None:
        yield from iter_laid_out_nodes(laid_out.left)
    if laid_out.right is not None:
        yield from iter_laid_out_nodes(laid_out.right)


def iter_edges(laid_out):
    """Yields ((x0, y0), (x1, y1)) for every parent-child connection."""
    for parent in iter_laid_out_nodes(laid_out):
        for child in (parent.left, parent.right):
            if child is not None:
                yield (parent.x, parent.y), (child.x, child.y)


def node_caption(node):
    """Text drawn inside a node circle: the prediction for a leaf, feature and threshold otherwise."""
    if node.is_leaf:
        return (str(node.prediction),)
    return (node.feature, f"{node.threshold:.1f}")
