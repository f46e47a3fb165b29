"""Operator rule table.

Each rule receives the operands of an operator application and their
derivatives with respect to the target variable, and builds the derivative
expression by the standard calculus identities. Rules never simplify: the
result is correct but unsimplified.

The table is read-only and covers every member of Operator.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from symdiff.expression.heads import Rule
from symdiff.expression.nodes import BinaryOp, Node, One, UnaryOp
from symdiff.expression.types import Operator


def _add(a: Node, b: Node) -> Node:
    return BinaryOp(Operator.ADD, a, b)


def _sub(a: Node, b: Node) -> Node:
    return BinaryOp(Operator.SUB, a, b)


def _mul(a: Node, b: Node) -> Node:
    return BinaryOp(Operator.MUL, a, b)


def _div(a: Node, b: Node) -> Node:
    return BinaryOp(Operator.DIV, a, b)


def _call(op: Operator, f: Node) -> Node:
    return UnaryOp(op, f)


def _one_minus_square(f: Node) -> Node:
    # 1 - f*f
    return _sub(One(f.dtype), _mul(f, f))


# =============================================================================
# Binary operators
# =============================================================================

def _add_rule(args, dargs):
    (f, g), (df, dg) = args, dargs
    return _add(df, dg)


def _sub_rule(args, dargs):
    (f, g), (df, dg) = args, dargs
    return _sub(df, dg)


def _mul_rule(args, dargs):
    (f, g), (df, dg) = args, dargs
    return _add(_mul(df, g), _mul(f, dg))


def _div_rule(args, dargs):
    (f, g), (df, dg) = args, dargs
    return _div(_sub(_mul(df, g), _mul(f, dg)), _mul(g, g))


def _pow_rule(args, dargs):
    # f^(g-1) * (g f' + f log(f) g')
    (f, g), (df, dg) = args, dargs
    t = f.dtype
    return _mul(
        BinaryOp(Operator.POW, f, _sub(g, One(t))),
        _add(_mul(g, df), _mul(_mul(f, _call(Operator.LOG, f)), dg)),
    )


def _atan2_rule(args, dargs):
    (f, g), (df, dg) = args, dargs
    return _div(_sub(_mul(g, df), _mul(f, dg)), _add(_mul(f, f), _mul(g, g)))


# =============================================================================
# Unary operators
# =============================================================================

def _neg_rule(args, dargs):
    return _call(Operator.NEG, dargs[0])


def _log_rule(args, dargs):
    return _div(dargs[0], args[0])


def _exp_rule(args, dargs):
    return _mul(dargs[0], _call(Operator.EXP, args[0]))


def _sin_rule(args, dargs):
    return _mul(dargs[0], _call(Operator.COS, args[0]))


def _cos_rule(args, dargs):
    return _mul(dargs[0], _call(Operator.NEG, _call(Operator.SIN, args[0])))


def _tan_rule(args, dargs):
    f = args[0]
    return _div(dargs[0], _mul(_call(Operator.COS, f), _call(Operator.COS, f)))


def _sqrt_rule(args, dargs):
    f = args[0]
    two = _add(One(f.dtype), One(f.dtype))
    return _div(dargs[0], _mul(two, _call(Operator.SQRT, f)))


def _sinh_rule(args, dargs):
    return _mul(dargs[0], _call(Operator.COSH, args[0]))


def _cosh_rule(args, dargs):
    return _mul(dargs[0], _call(Operator.SINH, args[0]))


def _tanh_rule(args, dargs):
    f = args[0]
    return _div(dargs[0], _mul(_call(Operator.COSH, f), _call(Operator.COSH, f)))


def _asin_rule(args, dargs):
    return _div(dargs[0], _call(Operator.SQRT, _one_minus_square(args[0])))


def _acos_rule(args, dargs):
    sqrt_term = _call(Operator.SQRT, _one_minus_square(args[0]))
    return _div(dargs[0], _call(Operator.NEG, sqrt_term))


def _atan_rule(args, dargs):
    f = args[0]
    return _div(dargs[0], _add(One(f.dtype), _mul(f, f)))


RULES: Mapping[Operator, Rule] = MappingProxyType({
    Operator.ADD: _add_rule,
    Operator.SUB: _sub_rule,
    Operator.MUL: _mul_rule,
    Operator.DIV: _div_rule,
    Operator.POW: _pow_rule,
    Operator.ATAN2: _atan2_rule,
    Operator.NEG: _neg_rule,
    Operator.LOG: _log_rule,
    Operator.EXP: _exp_rule,
    Operator.SIN: _sin_rule,
    Operator.COS: _cos_rule,
    Operator.TAN: _tan_rule,
    Operator.SQRT: _sqrt_rule,
    Operator.SINH: _sinh_rule,
    Operator.COSH: _cosh_rule,
    Operator.TANH: _tanh_rule,
    Operator.ASIN: _asin_rule,
    Operator.ACOS: _acos_rule,
    Operator.ATAN: _atan_rule,
})


def get_rule(op: Operator) -> Rule:
    """Get the derivative rule of an operator."""
    return RULES[op]
