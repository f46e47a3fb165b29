"""Tests for the operator rule table."""

import pytest

from symdiff.differentiation.engine import differentiate
from symdiff.differentiation.rules import RULES, get_rule
from symdiff.evaluation.evaluator import evaluate
from symdiff.expression import functions as fn
from symdiff.expression.nodes import BinaryOp, One, UnaryOp, Variable, Zero
from symdiff.expression.types import Operator

UNARY_BUILDERS = {
    Operator.NEG: fn.neg,
    Operator.LOG: fn.log,
    Operator.EXP: fn.exp,
    Operator.SIN: fn.sin,
    Operator.COS: fn.cos,
    Operator.TAN: fn.tan,
    Operator.SQRT: fn.sqrt,
    Operator.SINH: fn.sinh,
    Operator.COSH: fn.cosh,
    Operator.TANH: fn.tanh,
    Operator.ASIN: fn.asin,
    Operator.ACOS: fn.acos,
    Operator.ATAN: fn.atan,
}

BINARY_OPERATORS = [
    Operator.ADD,
    Operator.SUB,
    Operator.MUL,
    Operator.DIV,
    Operator.POW,
    Operator.ATAN2,
]

POINTS = [0.2, 0.5, 0.7]


class TestRuleTable:
    """Test the shape of the rule table."""

    def test_covers_every_operator(self):
        """Test every operator has exactly one rule."""
        assert set(RULES) == set(Operator)

    def test_read_only(self):
        """Test the table cannot be modified."""
        with pytest.raises(TypeError):
            RULES[Operator.ADD] = RULES[Operator.SUB]

    def test_get_rule(self):
        """Test lookup by operator."""
        assert get_rule(Operator.SIN) is RULES[Operator.SIN]


class TestRuleShapes:
    """Test the trees built by individual rules."""

    def test_product_rule(self):
        """Test d/dx (x*y) = 1*y + x*0."""
        x, y = Variable("x"), Variable("y")
        expected = BinaryOp(
            Operator.ADD,
            BinaryOp(Operator.MUL, One(), y),
            BinaryOp(Operator.MUL, x, Zero()),
        )
        assert differentiate(x, x * y) == expected

    def test_sqrt_rule(self):
        """Test d sqrt(f) = f' / ((1 + 1) * sqrt(f))."""
        f, df = Variable("f"), Variable("df")
        result = RULES[Operator.SQRT]((f,), (df,))
        two = BinaryOp(Operator.ADD, One(), One())
        assert result == BinaryOp(
            Operator.DIV, df, BinaryOp(Operator.MUL, two, UnaryOp(Operator.SQRT, f))
        )

    def test_cos_rule(self):
        """Test d cos(f) = f' * -sin(f)."""
        f, df = Variable("f"), Variable("df")
        result = RULES[Operator.COS]((f,), (df,))
        assert result.to_string() == "mul(df, neg(sin(f)))"

    def test_rules_do_not_simplify(self):
        """Test constant factors survive in the result."""
        x = Variable("x")
        assert differentiate(x, fn.exp(x)).to_string() == "mul(1, exp(x))"


def _derivative_at(expr, x, point):
    return evaluate(differentiate(x, fn.curry([x], expr)), [point]).value


class TestRuleValues:
    """Test each rule against central finite differences."""

    @pytest.mark.parametrize("op", list(UNARY_BUILDERS), ids=lambda op: op.value)
    @pytest.mark.parametrize("point", POINTS)
    def test_unary_chain_rule(self, op, point, finite_difference):
        """Test d/dx op(0.5x + 0.1) numerically."""
        x = Variable("x")
        expr = UNARY_BUILDERS[op](0.5 * x + 0.1)
        expected = finite_difference(fn.curry([x], expr), point)
        assert _derivative_at(expr, x, point) == pytest.approx(expected, rel=1e-5, abs=1e-7)

    @pytest.mark.parametrize("op", BINARY_OPERATORS, ids=lambda op: op.value)
    @pytest.mark.parametrize("point", POINTS)
    def test_binary_chain_rule(self, op, point, finite_difference):
        """Test d/dx op(x*x + 1, sin(x) + 2) numerically."""
        x = Variable("x")
        expr = BinaryOp(op, x * x + 1, fn.sin(x) + 2)
        expected = finite_difference(fn.curry([x], expr), point)
        assert _derivative_at(expr, x, point) == pytest.approx(expected, rel=1e-5, abs=1e-7)
