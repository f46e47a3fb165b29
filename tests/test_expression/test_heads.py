"""Tests for the Generic head registry."""

import numpy as np
import pytest

from symdiff.expression.heads import (
    HeadSpec,
    find_head,
    get_head,
    register_head,
    registered_heads,
    unregister_head,
)
from symdiff.expression.types import DataType


@pytest.fixture
def cube_head():
    """Register a temporary 'cube' head and remove it afterwards."""
    spec = register_head(HeadSpec("cube", lambda v: v ** 3))
    yield spec
    unregister_head("cube")


class TestHeadSpec:
    """Test HeadSpec validation."""

    def test_empty_name(self):
        """Test heads need a name."""
        with pytest.raises(ValueError):
            HeadSpec("", np.abs)

    def test_rule_and_linear(self):
        """Test a head cannot be both linear and given a rule."""
        with pytest.raises(ValueError):
            HeadSpec("h", np.abs, derivative=lambda a, d: d[0], linear=True)

    def test_is_differentiable(self):
        """Test differentiability follows the rule or linear tag."""
        assert HeadSpec("h", np.abs, linear=True).is_differentiable
        assert HeadSpec("h", np.abs, derivative=lambda a, d: d[0]).is_differentiable
        assert not HeadSpec("h", np.abs).is_differentiable


class TestRegistry:
    """Test registration and lookup."""

    def test_builtin_heads(self):
        """Test the built-in heads are registered."""
        names = registered_heads()
        for name in ("vector", "sum", "abs", "sign", "pi", "e"):
            assert name in names
        assert get_head("vector").data_type == DataType.VECTOR
        assert get_head("sum").linear

    def test_register_and_find(self, cube_head):
        """Test a registered head can be found."""
        assert find_head("cube") is cube_head
        assert get_head("cube").evaluate(2.0) == 8.0

    def test_duplicate_rejected(self, cube_head):
        """Test registering a name twice needs replace=True."""
        with pytest.raises(ValueError):
            register_head(HeadSpec("cube", np.abs))
        replacement = register_head(HeadSpec("cube", np.abs), replace=True)
        assert find_head("cube") is replacement

    def test_unknown_head(self):
        """Test lookups of unknown heads."""
        assert find_head("no_such_head") is None
        with pytest.raises(KeyError, match="no_such_head"):
            get_head("no_such_head")

    def test_unregister(self):
        """Test unregistering returns the removed spec."""
        spec = register_head(HeadSpec("tmp_head", np.abs))
        assert unregister_head("tmp_head") is spec
        assert unregister_head("tmp_head") is None
