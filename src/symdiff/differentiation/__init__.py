"""Symbolic differentiation of expression trees.

Rule table, recursive differentiation engine, and the higher-order /
by-name driver.
"""

from symdiff.differentiation.config import DifferentiationConfig
from symdiff.differentiation.rules import RULES, get_rule
from symdiff.differentiation.engine import differentiate
from symdiff.differentiation.driver import (
    ParameterList,
    differentiate_by_name,
    differentiate_n,
)

__all__ = [
    "DifferentiationConfig",
    "RULES",
    "get_rule",
    "differentiate",
    "differentiate_n",
    "differentiate_by_name",
    "ParameterList",
]
