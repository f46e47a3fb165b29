"""Order and partial-derivative driver.

Builds higher-order derivatives by repeated differentiation, and resolves
differentiation targets by name through an explicit binding environment
(the outermost curried parameters of an expression).
"""

from __future__ import annotations

import logging
from typing import Iterator

from symdiff.differentiation.config import DEFAULT_CONFIG, DifferentiationConfig
from symdiff.differentiation.engine import differentiate
from symdiff.errors import InvalidOrderError, TreeSizeExceededError, VariableNotFoundError
from symdiff.expression.nodes import Node, Variable, count_nodes
from symdiff.expression.tree import get_parameters
from symdiff.expression.types import DataType

logger = logging.getLogger(__name__)


class ParameterList:
    """Ordered, immutable list of the curried parameters of an expression."""

    def __init__(self, params: tuple[Variable, ...] = ()):
        self._params = tuple(params)

    @classmethod
    def of(cls, expr: Node) -> "ParameterList":
        """Get the parameter list of a curried expression."""
        return cls(get_parameters(expr))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self._params)

    def index(self, name: str) -> int:
        """Get the position of a named parameter, or -1 if absent."""
        for i, param in enumerate(self._params):
            if param.name == name:
                return i
        return -1

    def lookup(self, name: str) -> Variable | None:
        """Get the parameter with the given name, or None if absent."""
        i = self.index(name)
        return self._params[i] if i >= 0 else None

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._params)

    def __getitem__(self, index: int) -> Variable:
        return self._params[index]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.index(name) >= 0

    def __repr__(self) -> str:
        return f"ParameterList({', '.join(self.names)})"


def _check_order(n: int, config: DifferentiationConfig) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Derivative order must be an int, got {type(n).__name__}")
    if n < 0:
        raise InvalidOrderError(f"Order of derivative cannot be negative, got {n}")
    if config.max_order is not None and n > config.max_order:
        raise InvalidOrderError(
            f"Order of derivative {n} exceeds the configured maximum {config.max_order}"
        )


def _check_size(expr: Node, order: int, config: DifferentiationConfig) -> None:
    if config.max_tree_size is None and config.warn_tree_size is None:
        return
    size = count_nodes(expr)
    if config.max_tree_size is not None and size > config.max_tree_size:
        raise TreeSizeExceededError(
            f"Derivative of order {order} has {size} nodes "
            f"(limit: {config.max_tree_size})"
        )
    if config.warn_tree_size is not None and size > config.warn_tree_size:
        logger.warning(f"Derivative of order {order} has {size} nodes")


def differentiate_n(
    target: Variable,
    n: int,
    expr: Node,
    config: DifferentiationConfig | None = None,
) -> Node:
    """Compute the n-th derivative of an expression with respect to a variable.

    Order zero returns `expr` itself. Each further order differentiates the
    previous result, so the tree may grow quickly with `n`.

    Args:
        target: Variable to differentiate by
        n: Derivative order (non-negative)
        expr: Expression to differentiate
        config: Differentiation settings (None = defaults)

    Returns:
        Expression tree of the n-th derivative
    """
    config = config or DEFAULT_CONFIG
    _check_order(n, config)

    result = expr
    for order in range(1, n + 1):
        result = differentiate(target, result, config)
        logger.debug(f"Order {order} w.r.t. {target.name} done")
        _check_size(result, order, config)
    return result


def differentiate_by_name(
    name: str,
    expr: Node,
    config: DifferentiationConfig | None = None,
) -> Node:
    """Differentiate an expression by the parameter with the given name.

    If no outermost parameter has that name, a variable of that name (and of
    the first parameter's data type) is used instead, which gives a zero
    derivative unless the body refers to a free variable of that name. In
    strict mode a missing name raises VariableNotFoundError.
    """
    config = config or DEFAULT_CONFIG
    params = ParameterList.of(expr)
    var = params.lookup(name)
    if var is None:
        if config.strict_names:
            raise VariableNotFoundError(name, params.names)
        data_type = params[0].dtype if len(params) else DataType.FLOAT
        var = Variable(name, data_type)
        logger.debug(f"'{name}' is not a parameter of {params}; using a free variable")
    return differentiate(var, expr, config)
