# tests/test_harness.py
import random
import time
import traceback

import numpy as np
import xgboost as xgb

from gini_tree.tree import GiniDecisionTree, count_leaves, tree_depth
from gini_tree.utils import Point, as_points, points_to_dataframe


def _format_metric(value):
    """Formats a float for printing, using scientific notation if it is very small."""
    if isinstance(value, (float, np.floating)):
        if 0 < abs(value) < 0.0001:
            return f"{value:.4e}"
        return f"{value:.6f}"
    return value


def flip_labels(points, flip_prob, seed=0):
    """Returns a copy of the dataset with a fraction of labels flipped."""
    rng = random.Random(seed)
    return tuple(
        Point(p.x, p.y, 1 - p.label) if rng.random() < flip_prob else p
        for p in as_points(points)
    )


def calculate_accuracy(true_labels, predicted_labels):
    """Fraction of matching labels."""
    if len(true_labels) != len(predicted_labels):
        raise ValueError("Length of true_labels and predicted_labels must be the same.")
    if len(true_labels) == 0:
        return 0.0
    return float(np.mean(np.asarray(true_labels) == np.asarray(predicted_labels)))


def calculate_class_recall(true_labels, predicted_labels, label):
    """Recall for one class; None when the class is absent."""
    true_labels = np.asarray(true_labels)
    predicted_labels = np.asarray(predicted_labels)
    mask = true_labels == label
    if not mask.any():
        return None
    return float(np.mean(predicted_labels[mask] == label))


def evaluate_predictions(tree, test_data):
    """
    Evaluates the tree's predictions on test data.

    Args:
        tree (GiniDecisionTree): The trained tree.
        test_data (sequence of Point): The test dataset.

    Returns:
        dict: A dictionary of evaluation metrics.
    """
    test_points = as_points(test_data)
    structure = {
        "num_leaf_nodes": count_leaves(tree.root),
        "max_depth_reached": tree_depth(tree.root),
    }
    if not test_points:
        return {"accuracy": None, "recall_class_0": None, "recall_class_1": None,
                "num_test_samples": 0, **structure}

    true_labels = [p.label for p in test_points]
    predicted = tree.predict(test_points)
    return {
        "accuracy": calculate_accuracy(true_labels, predicted),
        "recall_class_0": calculate_class_recall(true_labels, predicted, 0),
        "recall_class_1": calculate_class_recall(true_labels, predicted, 1),
        "num_test_samples": len(test_points),
        **structure,
    }


def run_test_scenario(dataset_name, train_data, test_data, tree_params, verbose=False):
    """
    Trains a GiniDecisionTree on train_data and evaluates it on test_data.

    Args:
        dataset_name (str): Name used in printed output.
        train_data, test_data: Datasets accepted by gini_tree.utils.as_points.
        tree_params (dict): Keyword arguments for GiniDecisionTree.
        verbose (bool): If True, prints information during the run.

    Returns:
        dict: {"tree", "training_time", "train_accuracy", "evaluation", "error"}.
    """
    if verbose:
        print(f"--- Running Test Scenario: {dataset_name} ---")
        print(f"Tree Params: {tree_params}")
        print(f"Training data size: {len(train_data)}, Test data size: {len(test_data)}")

    tree = GiniDecisionTree(**tree_params)
    start_time = time.time()
    try:
        tree.fit(train_data)
    except Exception as e:
        print(f"!!!!!! ERROR during tree.fit for scenario: {dataset_name} !!!!!!")
        print(f"Error: {e}")
        traceback.print_exc()
        return {"tree": None, "training_time": None, "train_accuracy": None,
                "evaluation": None, "error": str(e)}
    training_time = time.time() - start_time

    evaluation = evaluate_predictions(tree, test_data)
    results = {
        "tree": tree,
        "training_time": training_time,
        "train_accuracy": tree.score(train_data),
        "evaluation": evaluation,
        "error": None,
    }

    if verbose:
        print(f"Training completed in {training_time:.4f} seconds.")
        print("Evaluation Results:")
        for key, value in evaluation.items():
            print(f"  {key}: {_format_metric(value)}")
        print("--- Scenario End ---")
    return results


def prepare_data_for_xgboost(points):
    """Splits a dataset into an (x, y) feature frame and a label array."""
    frame = points_to_dataframe(points)
    return frame[['x', 'y']], frame['label'].to_numpy()


def run_xgboost_peer_test(dataset_name, train_data, test_data, xgboost_params=None, verbose=False):
    """
    Trains an XGBClassifier on the same data as a reference point.

    Returns:
        dict: {"training_time", "evaluation", "error"} where evaluation holds "accuracy".
    """
    params = {
        "n_estimators": 50,
        "max_depth": 3,
        "learning_rate": 0.3,
        "objective": "binary:logistic",
    }
    if xgboost_params:
        params.update(xgboost_params)

    if verbose:
        print(f"--- Running XGBoost Peer Test Scenario: {dataset_name} ---")
        print(f"XGBoost Params: {params}")

    X_train, y_train = prepare_data_for_xgboost(train_data)
    X_test, y_test = prepare_data_for_xgboost(test_data)

    model = xgb.XGBClassifier(**params)
    start_time = time.time()
    try:
        model.fit(X_train, y_train)
    except Exception as e:
        print(f"!!!!!! ERROR during XGBoost model.fit for scenario: {dataset_name} !!!!!!")
        print(f"Error: {e}")
        traceback.print_exc()
        return {"training_time": None, "evaluation": None, "error": str(e)}
    training_time = time.time() - start_time

    predicted = model.predict(X_test)
    evaluation = {
        "accuracy": calculate_accuracy(y_test, predicted),
        "n_estimators": params["n_estimators"],
        "max_depth_reached": params["max_depth"],
        "num_test_samples": len(y_test),
    }

    if verbose:
        print(f"Training in {training_time:.4f}s.")
        print("XGBoost Evaluation Results:")
        for key, value in evaluation.items():
            print(f"  {key}: {_format_metric(value)}")
        print("--- XGBoost Scenario End ---")
    return {"training_time": training_time, "evaluation": evaluation, "error": None}


def test_harness_self_check():
    train = [Point(-2.0, 0.0, 0), Point(-1.0, 0.0, 0), Point(1.0, 0.0, 1), Point(2.0, 0.0, 1)]
    results = run_test_scenario("Harness_Self_Check", train, train, {"max_depth": 2})
    assert results["error"] is None
    assert results["evaluation"]["accuracy"] == 1.0
    assert results["evaluation"]["num_test_samples"] == 4
    assert results["evaluation"]["num_leaf_nodes"] == 2


def test_flip_labels_is_reproducible():
    train = [Point(float(i), 0.0, i % 2) for i in range(50)]
    assert flip_labels(train, 0.3, seed=4) == flip_labels(train, 0.3, seed=4)
    assert flip_labels(train, 0.0) == tuple(train)
    assert all(p.label != q.label for p, q in zip(train, flip_labels(train, 1.0)))


if __name__ == '__main__':
    print("Test Harness Self-Test (Illustrative)")
    from gini_tree.datasets import generate_dataset

    mock_train = generate_dataset('xor', count=200, seed=1)
    mock_test = generate_dataset('xor', count=100, seed=2)
    results = run_test_scenario("Mock_XOR", mock_train, mock_test, {"max_depth": 4}, verbose=True)
    assert results["evaluation"]["num_test_samples"] == len(mock_test)

    print("\n--- Running XGBoost Peer Test ---")
    xgb_results = run_xgboost_peer_test("Mock_XOR", mock_train, mock_test, {"max_depth": 4}, verbose=True)
    assert xgb_results["error"] is None
    print("\nTest Harness Self-Test Completed.")
