"""
Pytest fixtures for symdiff tests.

Numeric checks compare symbolic derivatives against central finite
differences of the evaluated function.
"""

import pytest

from symdiff.expression.functions import variables
from symdiff.evaluation.evaluator import evaluate


@pytest.fixture
def x():
    """Get the variable x."""
    return variables("x")[0]


@pytest.fixture
def xy():
    """Get the variables x and y."""
    return variables("x y")


@pytest.fixture
def finite_difference():
    """
    Get a central finite-difference estimator.

    Returns a function (f, point, index) -> approximate partial derivative of
    the curried function f by its `index`-th parameter at `point`.
    """

    def estimate(f, point, index=0, h=1e-5):
        if isinstance(point, (int, float)):
            point = [point]
        upper = list(point)
        lower = list(point)
        upper[index] += h
        lower[index] -= h
        return (evaluate(f, upper).value - evaluate(f, lower).value) / (2 * h)

    return estimate
