"""Evaluator for expression trees.

Binds numeric values to the curried parameters of an expression and reduces
it to a tagged numeric result (scalar, vector or matrix). Operators are
computed with numpy ufuncs, so IEEE special values (nan, inf) propagate
instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Sequence

import numpy as np

from symdiff.errors import (
    ArityMismatchError,
    TypeMismatchError,
    UnboundVariableError,
    UnsupportedConstructError,
)
from symdiff.expression.heads import find_head
from symdiff.expression.nodes import (
    Binder,
    BinaryOp,
    Constant,
    Generic,
    Node,
    One,
    UnaryOp,
    Variable,
    Zero,
)
from symdiff.expression.tree import ExpressionTree, as_root, get_parameters
from symdiff.expression.types import DataType, Operator

logger = logging.getLogger(__name__)


class Shape(Enum):
    """Shape of a numeric result."""

    SCALAR = auto()
    VECTOR = auto()
    MATRIX = auto()


_SHAPE_BY_NDIM = {0: Shape.SCALAR, 1: Shape.VECTOR, 2: Shape.MATRIX}


@dataclass(frozen=True)
class NumericResult:
    """Result of evaluating an expression.

    Attributes:
        shape: Scalar, vector or matrix
        value: float for scalars, np.ndarray otherwise
    """

    shape: Shape
    value: Any

    @classmethod
    def from_value(cls, value: Any) -> "NumericResult":
        """Tag a raw evaluation result with its shape."""
        arr = np.asarray(value)
        if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == np.bool_):
            raise TypeMismatchError(f"Expression evaluated to non-numeric {type(value).__name__}")
        shape = _SHAPE_BY_NDIM.get(arr.ndim)
        if shape is None:
            raise TypeMismatchError(f"Expression evaluated to an array of {arr.ndim} dimensions")
        if shape == Shape.SCALAR:
            return cls(shape, float(arr))
        return cls(shape, arr.astype(float))

    def _expect(self, shape: Shape) -> Any:
        if self.shape != shape:
            raise TypeMismatchError(
                f"Expected a {shape.name.lower()} result, got {self.shape.name.lower()}"
            )
        return self.value

    def as_scalar(self) -> float:
        return self._expect(Shape.SCALAR)

    def as_vector(self) -> np.ndarray:
        return self._expect(Shape.VECTOR)

    def as_matrix(self) -> np.ndarray:
        return self._expect(Shape.MATRIX)


@dataclass
class CompiledExpression:
    """An expression bound to an evaluator, ready to be called.

    Attributes:
        root: Expression that will be evaluated
        evaluate: Function from positional arguments to a NumericResult
        parameters: Curried parameters, in argument order
    """

    root: Node
    evaluate: Callable[..., NumericResult]
    parameters: tuple[Variable, ...]

    def __call__(self, *args: Any) -> NumericResult:
        """Evaluate the expression at the given arguments."""
        return self.evaluate(*args)


class Evaluator:
    """Reduces expression trees to numbers.

    Holds the numeric implementation of every operator. Generic heads are
    evaluated through the head registry.
    """

    # Operator implementations
    OPERATORS: dict[Operator, Callable[..., Any]] = {}

    def __init__(self) -> None:
        self._register_operators()

    def _register_operators(self) -> None:
        """Register all operator implementations."""
        self.OPERATORS = {
            # Binary arithmetic
            Operator.ADD: np.add,
            Operator.SUB: np.subtract,
            Operator.MUL: np.multiply,
            Operator.DIV: np.true_divide,
            Operator.POW: np.power,
            Operator.ATAN2: np.arctan2,

            # Unary
            Operator.NEG: np.negative,
            Operator.LOG: np.log,
            Operator.EXP: np.exp,
            Operator.SQRT: np.sqrt,

            # Trigonometric
            Operator.SIN: np.sin,
            Operator.COS: np.cos,
            Operator.TAN: np.tan,
            Operator.ASIN: np.arcsin,
            Operator.ACOS: np.arccos,
            Operator.ATAN: np.arctan,

            # Hyperbolic
            Operator.SINH: np.sinh,
            Operator.COSH: np.cosh,
            Operator.TANH: np.tanh,
        }

    def compile(self, expr: ExpressionTree | Node) -> CompiledExpression:
        """Bind an expression to this evaluator.

        Args:
            expr: Curried expression to evaluate

        Returns:
            CompiledExpression taking one argument per parameter
        """
        root = as_root(expr)

        def evaluate(*args: Any) -> NumericResult:
            return self.evaluate(root, args)

        return CompiledExpression(
            root=root,
            evaluate=evaluate,
            parameters=get_parameters(root),
        )

    def evaluate(self, expr: ExpressionTree | Node, args: Sequence[Any] = ()) -> NumericResult:
        """Evaluate a curried expression at the given arguments.

        Arguments are bound to parameters left to right; the count must match
        the number of curried parameters exactly.
        Evaluation recurses once per tree level, so it shares the depth limit
        of the differentiation engine.
        """
        body, env = self._bind(as_root(expr), args)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            value = self._evaluate_node(body, env)
        result = NumericResult.from_value(value)
        if logger.isEnabledFor(logging.DEBUG) and not np.all(np.isfinite(result.value)):
            logger.debug(f"Non-finite result at {list(args)}: {body.to_string()}")
        return result

    def _bind(self, root: Node, args: Sequence[Any]) -> tuple[Node, dict[Variable, Any]]:
        """Peel the outermost binders, binding one argument to each."""
        env: dict[Variable, Any] = {}
        node = root
        for arg in args:
            if not isinstance(node, Binder):
                raise ArityMismatchError(
                    f"Expected {len(get_parameters(root))} arguments, got {len(args)}"
                )
            env[node.param] = self._convert_argument(node.param, arg)
            node = node.body
        if isinstance(node, Binder):
            raise ArityMismatchError(
                f"Expected {len(get_parameters(root))} arguments, got {len(args)}"
            )
        return node, env

    @staticmethod
    def _convert_argument(param: Variable, arg: Any) -> Any:
        if param.dtype == DataType.INTEGER:
            return int(arg)
        if param.dtype == DataType.VECTOR:
            return np.asarray(arg, dtype=float)
        return float(arg)

    def _evaluate_node(self, node: Node, env: dict[Variable, Any]) -> Any:
        """Recursively evaluate a node."""
        if isinstance(node, Constant):
            if node.dtype == DataType.VECTOR:
                return np.asarray(node.value, dtype=float)
            return node.value

        elif isinstance(node, Zero):
            return 0 if node.dtype == DataType.INTEGER else 0.0

        elif isinstance(node, One):
            return 1 if node.dtype == DataType.INTEGER else 1.0

        elif isinstance(node, Variable):
            try:
                return env[node]
            except KeyError:
                raise UnboundVariableError(f"No value bound to variable '{node.name}'") from None

        elif isinstance(node, (UnaryOp, BinaryOp)):
            args = [self._evaluate_node(child, env) for child in node.children]
            return self.OPERATORS[node.op](*args)

        elif isinstance(node, Generic):
            spec = find_head(node.head)
            if spec is None:
                raise UnsupportedConstructError(f"Cannot evaluate unknown head '{node.head}'")
            args = [self._evaluate_node(child, env) for child in node.args]
            return spec.evaluate(*args)

        elif isinstance(node, Binder):
            raise TypeMismatchError(
                f"Nested function of '{node.param.name}' cannot be reduced to a number"
            )

        else:
            raise TypeError(f"Unknown node type: {type(node)}")


# =============================================================================
# Evaluator singleton - avoids re-initialization overhead
# =============================================================================

_EVALUATOR: Evaluator | None = None


def get_evaluator() -> Evaluator:
    """Get the singleton evaluator instance."""
    global _EVALUATOR
    if _EVALUATOR is None:
        _EVALUATOR = Evaluator()
    return _EVALUATOR


def evaluate(expr: ExpressionTree | Node, args: Sequence[Any] = ()) -> NumericResult:
    """Evaluate a curried expression using the singleton evaluator."""
    return get_evaluator().evaluate(expr, args)


def evaluate_scalar(expr: ExpressionTree | Node, x: float) -> float:
    """Evaluate a scalar-to-scalar function at `x`."""
    return evaluate(expr, [x]).as_scalar()


def as_point(x: Sequence[float]) -> list[float]:
    """Convert a scalar or a sequence of coordinates to a list of floats."""
    return np.atleast_1d(np.asarray(x, dtype=float)).tolist()


def evaluate_vector_scalar(expr: ExpressionTree | Node, x: Sequence[float]) -> float:
    """Evaluate a function of several scalars at the point `x`."""
    return evaluate(expr, as_point(x)).as_scalar()


def evaluate_vector(expr: ExpressionTree | Node, x: Sequence[float]) -> np.ndarray:
    """Evaluate a vector-valued function of several scalars at the point `x`."""
    return evaluate(expr, as_point(x)).as_vector()
