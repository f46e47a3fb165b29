"""Expression tree representation for closed-form functions."""

from symdiff.expression.types import DataType, NodeType, Operator
from symdiff.expression.nodes import (
    Node,
    Constant,
    Zero,
    One,
    Variable,
    UnaryOp,
    BinaryOp,
    Binder,
    Generic,
)
from symdiff.expression.heads import HeadSpec, register_head
from symdiff.expression.tree import ExpressionTree

__all__ = [
    "DataType",
    "NodeType",
    "Operator",
    "Node",
    "Constant",
    "Zero",
    "One",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Binder",
    "Generic",
    "HeadSpec",
    "register_head",
    "ExpressionTree",
]
