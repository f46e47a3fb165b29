"""Differentiation engine.

Rewrites an expression tree into the tree of its partial derivative with
respect to one variable. The rewrite is a structural recursion; the first
matching case wins:

1. Constants, identities and nullary applications -> Zero
2. Operator applications -> rule table applied to the operands and their
   derivatives (chain rule)
3. Variables -> One for the target, Zero for any other variable
4. Binders -> binder over the differentiated body
5. Generic heads -> head rule, or child-by-child for linear heads

The input tree is never modified. The rewrite recurses once per tree level,
so trees nested deeper than the interpreter recursion limit (about a
thousand levels, e.g. a long chain of `+`) raise RecursionError; build long
sums with `total()` instead, which nests only one level.
"""

from __future__ import annotations

import logging

from symdiff.differentiation.config import DEFAULT_CONFIG, DifferentiationConfig
from symdiff.differentiation.rules import RULES
from symdiff.errors import UnsupportedConstructError
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

logger = logging.getLogger(__name__)


def differentiate(
    target: Variable,
    expr: Node,
    config: DifferentiationConfig | None = None,
) -> Node:
    """Differentiate an expression with respect to a variable.

    Args:
        target: Variable to differentiate by; all other variables are
            treated as constants
        expr: Expression (or curried function) to differentiate
        config: Differentiation settings (None = defaults)

    Returns:
        New expression tree of the partial derivative, unsimplified

    Examples:
        >>> from symdiff.expression.functions import curry, sin
        >>> from symdiff.expression.nodes import Variable
        >>> x = Variable("x")
        >>> differentiate(x, curry([x], sin(x))).to_string()
        'lambda x: mul(1, cos(x))'

    """
    if not isinstance(target, Variable):
        raise TypeError(f"Differentiation target must be a Variable, got {type(target).__name__}")
    config = config or DEFAULT_CONFIG
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Differentiating w.r.t. {target.name}: {expr.to_string()}")
    return _diff(target, expr, config)


def _diff(v: Variable, expr: Node, config: DifferentiationConfig) -> Node:
    """Recursively differentiate a node."""
    if isinstance(expr, (Constant, Zero, One)):
        return Zero(expr.dtype)

    if isinstance(expr, Generic) and not expr.args:
        return Zero(expr.dtype)

    if isinstance(expr, (UnaryOp, BinaryOp)):
        args = expr.children
        dargs = tuple(_diff(v, a, config) for a in args)
        return RULES[expr.op](args, dargs)

    if isinstance(expr, Variable):
        return One(expr.dtype) if expr == v else Zero(expr.dtype)

    if isinstance(expr, Binder):
        return Binder(expr.param, _diff(v, expr.body, config))

    if isinstance(expr, Generic):
        return _diff_generic(v, expr, config)

    raise UnsupportedConstructError(f"Unknown node type: {type(expr).__name__}")


def _diff_generic(v: Variable, expr: Generic, config: DifferentiationConfig) -> Node:
    """Differentiate a Generic node through its registered head."""
    spec = find_head(expr.head)
    if (spec is None or not spec.is_differentiable) and config.strict_heads:
        reason = "not registered" if spec is None else "neither linear nor given a rule"
        raise UnsupportedConstructError(
            f"Cannot differentiate head '{expr.head}': {reason}"
        )

    dargs = tuple(_diff(v, a, config) for a in expr.args)

    if spec is not None and spec.derivative is not None:
        return spec.derivative(expr.args, dargs)

    if spec is not None and spec.linear:
        return Generic(expr.head, dargs)

    logger.warning(
        f"Differentiating unsupported head '{expr.head}' child by child; "
        "the result is only correct if the head is linear"
    )
    return Generic(expr.head, dargs)
