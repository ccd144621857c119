# tests/__init__.py

"""
Testing Package for the Gini Decision Tree
"""

# This file makes the `tests` directory a Python package so that test modules
# can import the scenario harness, e.g. `from tests.test_harness import run_test_scenario`.
