# gini_tree/__init__.py

"""
Gini Decision Tree Package

A binary decision-tree trainer and predictor for 2-D labeled points, with the
layout and rasterization helpers needed to draw the learned tree and its
decision boundary.
"""

from .utils import Point, calculate_gini, as_points
from .datasets import PATTERNS, generate_dataset
from .splitting import find_best_split, find_best_split_for_node
from .tree import Leaf, InternalNode, GiniDecisionTree, build_tree, predict
from .layout import LaidOutNode, layout_tree
from .boundary import rasterize_decision_boundary
from .config import PlaygroundConfig
from .session import PlaygroundSession, TrainingState

VERSION = "0.1.0"
