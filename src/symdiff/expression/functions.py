"""Builders for expression trees.

Python arithmetic covers add, sub, mul, div, pow and neg. The functions
here cover the remaining operators, aggregates, and curried functions:

    x, y = variables("x y")
    f = curry([x, y], sin(x) * y ** 2)
"""

from __future__ import annotations

from typing import Any, Iterable

from symdiff.expression.nodes import (
    Binder,
    BinaryOp,
    Generic,
    Node,
    UnaryOp,
    Variable,
    as_node,
)
from symdiff.expression.types import DataType, Operator


def _unary(op: Operator):
    def build(f: Any) -> Node:
        return UnaryOp(op, as_node(f))
    build.__name__ = op.value
    build.__doc__ = f"Build {op.value}(f)."
    return build


log = _unary(Operator.LOG)
exp = _unary(Operator.EXP)
sin = _unary(Operator.SIN)
cos = _unary(Operator.COS)
tan = _unary(Operator.TAN)
sqrt = _unary(Operator.SQRT)
sinh = _unary(Operator.SINH)
cosh = _unary(Operator.COSH)
tanh = _unary(Operator.TANH)
asin = _unary(Operator.ASIN)
acos = _unary(Operator.ACOS)
atan = _unary(Operator.ATAN)
neg = _unary(Operator.NEG)


def power(f: Any, g: Any) -> Node:
    """Build pow(f, g).

    The derivative of pow always carries a `log(f)` factor, so it evaluates
    to nan wherever `f <= 0`, even when `g` is a constant. Use `f * f` for
    squares that must be differentiable at non-positive points.
    """
    return BinaryOp(Operator.POW, as_node(f), as_node(g))


def atan2(f: Any, g: Any) -> Node:
    """Build atan2(f, g)."""
    return BinaryOp(Operator.ATAN2, as_node(f), as_node(g))


def vector(*elements: Any) -> Node:
    """Build a vector-valued expression from scalar elements."""
    return Generic("vector", tuple(as_node(e) for e in elements))


def total(*terms: Any) -> Node:
    """Build the n-ary sum of the given terms."""
    return Generic("sum", tuple(as_node(t) for t in terms))


def variables(names: str | Iterable[str], data_type: DataType = DataType.FLOAT,
              scope: str | None = None) -> tuple[Variable, ...]:
    """Create variables from a whitespace/comma separated string or a list of names.

    Examples:
        >>> x, y = variables("x y")
        >>> x.name, y.name
        ('x', 'y')

    """
    if isinstance(names, str):
        names = names.replace(",", " ").split()
    return tuple(Variable(name, data_type, scope) for name in names)


def curry(params: Iterable[Variable | str], body: Any) -> Node:
    """Wrap `body` in nested binders, outermost parameter first.

    String parameters are turned into FLOAT variables of the same name.
    """
    result = as_node(body)
    params = [Variable(p) if isinstance(p, str) else p for p in params]
    for param in reversed(params):
        result = Binder(param, result)
    return result
