"""Expression tree for curried closed-form functions.

An ExpressionTree wraps a root node of the form

    lambda x: lambda y: mul(pow(x, 2.0), y)

and exposes its parameters, body, and structural metrics. Trees are
immutable: differentiation always produces new trees.
"""

from dataclasses import dataclass, field
from typing import Any
import hashlib

from symdiff.expression.types import DataType
from symdiff.expression.nodes import (
    Binder,
    BinaryOp,
    Node,
    UnaryOp,
    Variable,
    collect_nodes,
    count_nodes,
    free_variables,
    get_depth,
    iter_variables,
)


def get_parameters(node: Node) -> tuple[Variable, ...]:
    """Get the outermost curried parameters of an expression, in order."""
    params = []
    while isinstance(node, Binder):
        params.append(node.param)
        node = node.body
    return tuple(params)


def get_body(node: Node) -> Node:
    """Get the expression below the outermost curried binders."""
    while isinstance(node, Binder):
        node = node.body
    return node


@dataclass(eq=False)
class ExpressionTree:
    """Expression tree representing a curried function.

    Attributes:
        root: The root node of the tree
        metadata: Optional metadata (e.g., name, origin)
    """

    root: Node
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate tree structure."""
        if not isinstance(self.root, Node):
            raise TypeError(f"Tree root must be a Node, got {type(self.root).__name__}")
        if not self.is_valid():
            raise ValueError("Invalid expression tree structure")

    @property
    def parameters(self) -> tuple[Variable, ...]:
        """Get the curried parameters in declaration order."""
        return get_parameters(self.root)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def body(self) -> Node:
        """Get the function body below the parameters."""
        return get_body(self.root)

    @property
    def size(self) -> int:
        """Get total number of nodes."""
        return count_nodes(self.root)

    @property
    def depth(self) -> int:
        """Get tree depth."""
        return get_depth(self.root)

    @property
    def return_type(self) -> DataType:
        """Get the data type of the function's result."""
        return self.root.dtype

    @property
    def formula(self) -> str:
        """Get string representation of the function."""
        return self.root.to_string()

    @property
    def hash(self) -> str:
        """Get a short hash of the formula."""
        return hashlib.md5(self.formula.encode()).hexdigest()[:12]

    def is_valid(self) -> bool:
        """Check if tree is structurally valid.

        Parameters must be distinct, and all occurrences of a variable must
        agree on its data type.
        """
        params = self.parameters
        if len(set(params)) != len(params):
            return False

        seen: dict[Variable, DataType] = {}
        for var in iter_variables(self.root):
            if seen.setdefault(var, var.dtype) != var.dtype:
                return False
        return True

    def get_nodes(self) -> list[Node]:
        """Get all nodes in the tree."""
        return collect_nodes(self.root)

    def get_free_variables(self) -> list[str]:
        """Get names of variables not bound by any binder."""
        return sorted(v.name for v in free_variables(self.root))

    def get_operators(self) -> list[str]:
        """Get list of operator names used in tree."""
        return [
            node.op.signature.name for node in self.get_nodes()
            if isinstance(node, (UnaryOp, BinaryOp))
        ]

    def __str__(self) -> str:
        return self.formula

    def __repr__(self) -> str:
        return f"ExpressionTree({self.formula}, size={self.size}, depth={self.depth})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpressionTree):
            return False
        return self.root == other.root

    def __hash__(self) -> int:
        return hash(self.root)


def as_tree(expr: "ExpressionTree | Node") -> ExpressionTree:
    """Wrap a node in an ExpressionTree; trees are returned unchanged."""
    if isinstance(expr, ExpressionTree):
        return expr
    return ExpressionTree(root=expr)


def as_root(expr: "ExpressionTree | Node") -> Node:
    """Get the root node of a tree or node."""
    if isinstance(expr, ExpressionTree):
        return expr.root
    if not isinstance(expr, Node):
        raise TypeError(f"Expected an expression, got {type(expr).__name__}")
    return expr
