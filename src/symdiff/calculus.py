"""Derivative operators evaluated at a point.

Every operator here differentiates a curried function symbolically and
then evaluates the derivative trees numerically. Multi-variable functions
take their variables in curried form, one binder per variable:

    x, y = variables("x y")
    f = curry([x, y], x ** 2 * y)
    grad(f, [2.0, 3.0])          # array([12., 4.])

The `value_and_*` variants also return the function value at the point.
No sub-derivatives are shared between calls.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from symdiff.differentiation.config import DifferentiationConfig
from symdiff.differentiation.driver import differentiate_n
from symdiff.differentiation.engine import differentiate
from symdiff.errors import ArityMismatchError
from symdiff.evaluation.evaluator import (
    Shape,
    as_point,
    evaluate,
    evaluate_scalar,
    evaluate_vector,
    evaluate_vector_scalar,
)
from symdiff.expression.nodes import Node, Variable
from symdiff.expression.tree import ExpressionTree, as_root, get_parameters

logger = logging.getLogger(__name__)

Function = ExpressionTree | Node


def _prepare(f: Function) -> tuple[Node, tuple[Variable, ...]]:
    root = as_root(f)
    return root, get_parameters(root)


def _first_parameter(f: Function) -> tuple[Node, Variable]:
    root, params = _prepare(f)
    if not params:
        raise ArityMismatchError("Function has no parameter to differentiate by")
    return root, params[0]


def _copy_upper(m: np.ndarray) -> np.ndarray:
    """Mirror the upper triangle of a square matrix into its lower triangle."""
    return np.triu(m) + np.triu(m, 1).T


# =============================================================================
# Scalar-to-scalar functions
# =============================================================================

def diff(f: Function, x: float, config: DifferentiationConfig | None = None) -> float:
    """First derivative of a scalar-to-scalar function `f` at point `x`.

    Powers built with `**` differentiate to nan at points where their base
    is zero or negative (see `power`).

    Examples:
        >>> from symdiff.expression.functions import curry, variables
        >>> x, = variables("x")
        >>> diff(curry([x], x ** 2), 3.0)
        6.0

    """
    root, param = _first_parameter(f)
    return evaluate_scalar(differentiate(param, root, config), x)


def value_and_diff(
    f: Function, x: float, config: DifferentiationConfig | None = None
) -> tuple[float, float]:
    """Value and first derivative of a scalar-to-scalar function `f` at `x`."""
    return evaluate_scalar(f, x), diff(f, x, config)


def diffn(
    n: int, f: Function, x: float, config: DifferentiationConfig | None = None
) -> float:
    """`n`-th derivative of a scalar-to-scalar function `f` at point `x`.

    Raises:
        InvalidOrderError: If `n` is negative
    """
    root, param = _first_parameter(f)
    return evaluate_scalar(differentiate_n(param, n, root, config), x)


def value_and_diffn(
    n: int, f: Function, x: float, config: DifferentiationConfig | None = None
) -> tuple[float, float]:
    """Value and `n`-th derivative of a scalar-to-scalar function `f` at `x`."""
    return evaluate_scalar(f, x), diffn(n, f, x, config)


def diff2(f: Function, x: float, config: DifferentiationConfig | None = None) -> float:
    """Second derivative of a scalar-to-scalar function `f` at point `x`."""
    return diffn(2, f, x, config)


def value_and_diff2(
    f: Function, x: float, config: DifferentiationConfig | None = None
) -> tuple[float, float]:
    return evaluate_scalar(f, x), diff2(f, x, config)


def value_diff_diff2(
    f: Function, x: float, config: DifferentiationConfig | None = None
) -> tuple[float, float, float]:
    """Value, first derivative and second derivative of `f` at point `x`."""
    return evaluate_scalar(f, x), diff(f, x, config), diff2(f, x, config)


# =============================================================================
# Vector-to-scalar functions
# =============================================================================

def grad(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> np.ndarray:
    """Gradient of a multi-variable scalar function `f` at point `x`.

    Args:
        f: Curried function of k scalar variables
        x: Point with k coordinates, in parameter order
        config: Differentiation settings (None = defaults)

    Returns:
        Array of the k partial derivatives, in parameter order
    """
    root, params = _prepare(f)
    logger.debug(f"Gradient over {len(params)} parameters")
    partials = [differentiate(p, root, config) for p in params]
    return np.array([evaluate_vector_scalar(d, x) for d in partials], dtype=float)


def value_and_grad(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[float, np.ndarray]:
    """Value and gradient of a multi-variable scalar function `f` at `x`."""
    return evaluate_vector_scalar(f, x), grad(f, x, config)


def laplacian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> float:
    """Laplacian of a multi-variable scalar function `f` at point `x`.

    Sum over all parameters of the second partial derivative by that
    parameter.
    """
    root, params = _prepare(f)
    logger.debug(f"Laplacian over {len(params)} parameters")
    total = 0.0
    for p in params:
        second = differentiate(p, differentiate(p, root, config), config)
        total += evaluate_vector_scalar(second, x)
    return total


def value_and_laplacian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[float, float]:
    return evaluate_vector_scalar(f, x), laplacian(f, x, config)


def hessian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> np.ndarray:
    """Hessian of a multi-variable scalar function `f` at point `x`.

    Only the upper triangle (i <= j) is differentiated and evaluated; the
    lower triangle is its mirror image.

    Raises:
        ArityMismatchError: If `x` does not have one coordinate per parameter
    """
    root, params = _prepare(f)
    x = np.atleast_1d(np.asarray(x, dtype=float))
    k = len(params)
    if len(x) != k:
        raise ArityMismatchError(f"Expected a point with {k} coordinates, got {len(x)}")

    logger.debug(f"Hessian over {k} parameters ({k * (k + 1) // 2} entries)")
    result = np.zeros((k, k))
    for i in range(k):
        di = differentiate(params[i], root, config)
        for j in range(i, k):
            result[i, j] = evaluate_vector_scalar(differentiate(params[j], di, config), x)
    return _copy_upper(result)


def value_and_hessian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[float, np.ndarray]:
    return evaluate_vector_scalar(f, x), hessian(f, x, config)


def value_grad_hessian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[float, np.ndarray, np.ndarray]:
    """Value, gradient and Hessian of `f` at point `x`."""
    value, g = value_and_grad(f, x, config)
    return value, g, hessian(f, x, config)


def grad_hessian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[np.ndarray, np.ndarray]:
    """Gradient and Hessian of `f` at point `x`."""
    _, g, h = value_grad_hessian(f, x, config)
    return g, h


# =============================================================================
# Vector-to-vector functions
# =============================================================================

def _jacobian_rows(
    root: Node,
    params: tuple[Variable, ...],
    x: Sequence[float],
    width: int,
    config: DifferentiationConfig | None,
) -> np.ndarray:
    # A component that does not depend on the parameters differentiates to a
    # scalar Zero; it is broadcast to the output width.
    rows = []
    for p in params:
        result = evaluate(differentiate(p, root, config), as_point(x))
        if result.shape == Shape.SCALAR:
            rows.append(np.full(width, result.value))
        else:
            rows.append(result.as_vector())
    return np.vstack(rows)


def jacobian_t(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> np.ndarray:
    """Transposed Jacobian of a vector-valued function `f` at point `x`.

    Row i holds the derivative of every output component by parameter i.

    Raises:
        TypeMismatchError: If `f` is not vector-valued
    """
    _, jt = value_and_jacobian_t(f, x, config)
    return jt


def value_and_jacobian_t(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[np.ndarray, np.ndarray]:
    root, params = _prepare(f)
    value = evaluate_vector(root, x)
    logger.debug(f"Jacobian over {len(params)} parameters, {len(value)} outputs")
    if not params:
        return value, np.empty((0, len(value)))
    return value, _jacobian_rows(root, params, x, len(value), config)


def jacobian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> np.ndarray:
    """Jacobian of a vector-valued function `f` at point `x`.

    Row i holds the gradient of output component i.
    """
    return jacobian_t(f, x, config).T


def value_and_jacobian(
    f: Function, x: Sequence[float], config: DifferentiationConfig | None = None
) -> tuple[np.ndarray, np.ndarray]:
    value, jt = value_and_jacobian_t(f, x, config)
    return value, jt.T
