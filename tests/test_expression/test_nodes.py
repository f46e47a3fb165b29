"""Tests for expression tree nodes."""

import dataclasses

import pytest

from symdiff.expression.nodes import (
    Binder,
    BinaryOp,
    Constant,
    Generic,
    One,
    UnaryOp,
    Variable,
    Zero,
    as_node,
    collect_nodes,
    count_nodes,
    free_variables,
    get_depth,
)
from symdiff.expression.functions import curry, sin, variables, vector, total
from symdiff.expression.types import (
    OPERATOR_SIGNATURES,
    DataType,
    NodeType,
    Operator,
    OperatorSignature,
)


class TestLeaves:
    """Test constant, identity and variable nodes."""

    def test_constant_float(self):
        """Test float constants are stored as floats."""
        c = Constant(3)
        assert c.value == 3.0
        assert isinstance(c.value, float)
        assert c.dtype == DataType.FLOAT
        assert c.node_type == NodeType.CONSTANT

    def test_constant_integer(self):
        """Test integer constants are truncated to int."""
        c = Constant(3.7, DataType.INTEGER)
        assert c.value == 3
        assert c.to_string() == "3"

    def test_identities(self):
        """Test Zero and One carry their data type."""
        assert Zero(DataType.INTEGER).dtype == DataType.INTEGER
        assert One().dtype == DataType.FLOAT
        assert Zero().to_string() == "0"
        assert One().to_string() == "1"
        assert Zero() != One()

    def test_variable_identity(self):
        """Test variables are equal iff name and scope match."""
        assert Variable("x") == Variable("x")
        assert Variable("x") == Variable("x", DataType.INTEGER)
        assert Variable("x") != Variable("y")
        assert Variable("x", scope="f") != Variable("x", scope="g")
        assert hash(Variable("x")) == hash(Variable("x", DataType.INTEGER))

    def test_variable_requires_name(self):
        """Test empty variable names are rejected."""
        with pytest.raises(ValueError):
            Variable("")

    def test_nodes_are_immutable(self):
        """Test nodes cannot be modified after construction."""
        x = Variable("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            x.name = "y"


class TestOperatorSignatures:
    """Test the operator signature table."""

    def test_every_operator_has_signature(self):
        """Test signature names match operator values."""
        assert set(OPERATOR_SIGNATURES) == set(Operator)
        for op in Operator:
            assert op.signature.name == op.value

    def test_arity_counts(self):
        """Test six binary and thirteen unary operators."""
        assert sum(op.arity == 2 for op in Operator) == 6
        assert sum(op.arity == 1 for op in Operator) == 13

    def test_invalid_arity(self):
        """Test signatures only allow one or two operands."""
        with pytest.raises(ValueError):
            OperatorSignature("ternary", 3)


class TestOperatorNodes:
    """Test unary and binary operator nodes."""

    def test_arity_checked(self):
        """Test operators are rejected at the wrong arity."""
        x = Variable("x")
        with pytest.raises(ValueError):
            UnaryOp(Operator.ADD, x)
        with pytest.raises(ValueError):
            BinaryOp(Operator.SIN, x, x)

    def test_python_arithmetic(self):
        """Test Python operators build operator nodes."""
        x, y = variables("x y")
        assert x + y == BinaryOp(Operator.ADD, x, y)
        assert x - y == BinaryOp(Operator.SUB, x, y)
        assert x / y == BinaryOp(Operator.DIV, x, y)
        assert x ** y == BinaryOp(Operator.POW, x, y)
        assert -x == UnaryOp(Operator.NEG, x)

    def test_numbers_wrapped(self):
        """Test plain numbers become float constants on either side."""
        x = Variable("x")
        assert 2 * x == BinaryOp(Operator.MUL, Constant(2.0), x)
        assert x ** 2 == BinaryOp(Operator.POW, x, Constant(2.0))
        assert 1 - x == BinaryOp(Operator.SUB, Constant(1.0), x)

    def test_non_numbers_rejected(self):
        """Test strings and booleans are not converted."""
        x = Variable("x")
        with pytest.raises(TypeError):
            x + "a"
        with pytest.raises(TypeError):
            as_node(True)

    def test_dtype_follows_first_operand(self):
        """Test operator nodes take the data type of their first operand."""
        n = Variable("n", DataType.INTEGER)
        assert (n * Variable("x")).dtype == DataType.INTEGER
        assert sin(n).dtype == DataType.INTEGER

    def test_to_string(self):
        """Test prefix string form of a curried function."""
        x, y = variables("x y")
        f = curry([x, y], x ** 2 * y)
        assert f.to_string() == "lambda x: lambda y: mul(pow(x, 2.0), y)"
        assert str(sin(x)) == "sin(x)"


class TestBinderAndGeneric:
    """Test binder and generic nodes."""

    def test_curry_nests_binders(self):
        """Test curry builds one binder per parameter, outermost first."""
        x, y = variables("x y")
        f = curry([x, y], x * y)
        assert isinstance(f, Binder)
        assert f.param == x
        assert isinstance(f.body, Binder)
        assert f.body.param == y
        assert f.body.body == x * y

    def test_curry_accepts_names(self):
        """Test string parameters become variables."""
        f = curry(["t"], 1.0)
        assert f == Binder(Variable("t"), Constant(1.0))

    def test_generic_args_tuple(self):
        """Test generic children are stored as a hashable tuple."""
        x = Variable("x")
        g = Generic("vector", [x, x])
        assert g.args == (x, x)
        assert hash(g) == hash(Generic("vector", (x, x)))

    def test_generic_dtype(self):
        """Test generic data type comes from the head registry."""
        x = Variable("x")
        assert vector(x, x).dtype == DataType.VECTOR
        assert total(x, 1.0).dtype == DataType.FLOAT
        assert Generic("unknown_head").dtype == DataType.FLOAT

    def test_generic_to_string(self):
        """Test nullary generics print as their head."""
        x = Variable("x")
        assert Generic("pi").to_string() == "pi"
        assert vector(x, 1.0).to_string() == "vector(x, 1.0)"


class TestTraversal:
    """Test traversal helpers."""

    def test_count_and_depth(self):
        """Test node count and depth of add(mul(x, x), 1.0)."""
        x = Variable("x")
        expr = x * x + 1
        assert count_nodes(expr) == 5
        assert get_depth(expr) == 3

    def test_collect_preorder(self):
        """Test nodes are collected in pre-order."""
        x, y = variables("x y")
        expr = x + y
        assert collect_nodes(expr) == [expr, x, y]

    def test_free_variables(self):
        """Test binder parameters are not free."""
        x, a = variables("x a")
        assert free_variables(curry([x], x * a)) == {a}
        assert free_variables(x * a) == {x, a}

    def test_metrics_of_long_chain(self):
        """Test size and depth of a chain deeper than the recursion limit."""
        x = Variable("x")
        expr = x
        for _ in range(4999):
            expr = expr + x
        assert count_nodes(expr) == 9999
        assert get_depth(expr) == 5000
