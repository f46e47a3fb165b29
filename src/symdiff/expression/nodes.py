"""Expression tree nodes for closed-form functions.

Implements the node variants of the expression tree:
- Constant, Zero, One: literal values and the two identities
- Variable: named leaf standing for an independent quantity
- UnaryOp, BinaryOp: application of one of the fixed operators
- Binder: function of one variable (nested binders give curried functions)
- Generic: any other head applied to children

All nodes are immutable; structural equality is dataclass equality.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Iterator

from symdiff.expression.types import DataType, NodeType, Operator


class Node(ABC):
    """Abstract base class for expression tree nodes.

    Python arithmetic on nodes builds new operator nodes, so trees can be
    written as ``x * x + sin(y)``. Plain numbers are wrapped as constants.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def node_type(self) -> NodeType:
        """Get the variant of this node."""
        pass

    @property
    @abstractmethod
    def dtype(self) -> DataType:
        """Get the data type this node evaluates to."""
        pass

    @property
    def children(self) -> tuple[Node, ...]:
        """Get the direct sub-expressions of this node."""
        return ()

    @abstractmethod
    def to_string(self) -> str:
        """Convert node to string representation."""
        pass

    def __str__(self) -> str:
        return self.to_string()

    def __add__(self, other: Any) -> Node:
        return _binary(Operator.ADD, self, other)

    def __radd__(self, other: Any) -> Node:
        return _binary(Operator.ADD, other, self)

    def __sub__(self, other: Any) -> Node:
        return _binary(Operator.SUB, self, other)

    def __rsub__(self, other: Any) -> Node:
        return _binary(Operator.SUB, other, self)

    def __mul__(self, other: Any) -> Node:
        return _binary(Operator.MUL, self, other)

    def __rmul__(self, other: Any) -> Node:
        return _binary(Operator.MUL, other, self)

    def __truediv__(self, other: Any) -> Node:
        return _binary(Operator.DIV, self, other)

    def __rtruediv__(self, other: Any) -> Node:
        return _binary(Operator.DIV, other, self)

    def __pow__(self, other: Any) -> Node:
        return _binary(Operator.POW, self, other)

    def __rpow__(self, other: Any) -> Node:
        return _binary(Operator.POW, other, self)

    def __neg__(self) -> Node:
        return UnaryOp(Operator.NEG, self)

    def __pos__(self) -> Node:
        return self


def as_node(value: Any) -> Node:
    """Return `value` as a node, wrapping plain numbers in a Constant."""
    if isinstance(value, Node):
        return value
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"Cannot convert {type(value).__name__} to an expression node")
    return Constant(float(value))


def _binary(op: Operator, left: Any, right: Any) -> Node:
    try:
        return BinaryOp(op, as_node(left), as_node(right))
    except TypeError:
        return NotImplemented


@dataclass(frozen=True, eq=True)
class Constant(Node):
    """Literal numeric value."""

    value: float | int = 0.0
    data_type: DataType = DataType.FLOAT

    def __post_init__(self) -> None:
        if self.data_type == DataType.INTEGER:
            object.__setattr__(self, "value", int(self.value))
        elif self.data_type == DataType.FLOAT:
            object.__setattr__(self, "value", float(self.value))

    @property
    def node_type(self) -> NodeType:
        return NodeType.CONSTANT

    @property
    def dtype(self) -> DataType:
        return self.data_type

    def to_string(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, eq=True)
class Zero(Node):
    """Additive identity of a data type."""

    data_type: DataType = DataType.FLOAT

    @property
    def node_type(self) -> NodeType:
        return NodeType.ZERO

    @property
    def dtype(self) -> DataType:
        return self.data_type

    def to_string(self) -> str:
        return "0"


@dataclass(frozen=True, eq=True)
class One(Node):
    """Multiplicative identity of a data type."""

    data_type: DataType = DataType.FLOAT

    @property
    def node_type(self) -> NodeType:
        return NodeType.ONE

    @property
    def dtype(self) -> DataType:
        return self.data_type

    def to_string(self) -> str:
        return "1"


@dataclass(frozen=True, eq=True)
class Variable(Node):
    """Named, typed leaf.

    Two variables are the same entity iff their names and scopes coincide;
    the data type does not take part in the comparison.
    """

    name: str = ""
    data_type: DataType = field(default=DataType.FLOAT, compare=False)
    scope: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name must not be empty")

    @property
    def node_type(self) -> NodeType:
        return NodeType.VARIABLE

    @property
    def dtype(self) -> DataType:
        return self.data_type

    def to_string(self) -> str:
        return self.name


@dataclass(frozen=True, eq=True)
class UnaryOp(Node):
    """Application of a one-argument operator, e.g. sin(x)."""

    op: Operator
    operand: Node

    def __post_init__(self) -> None:
        if self.op.arity != 1:
            raise ValueError(f"Operator {self.op.value} is not unary")

    @property
    def node_type(self) -> NodeType:
        return NodeType.UNARY

    @property
    def dtype(self) -> DataType:
        return self.operand.dtype

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.operand,)

    def to_string(self) -> str:
        return f"{self.op.signature.name}({self.operand.to_string()})"


@dataclass(frozen=True, eq=True)
class BinaryOp(Node):
    """Application of a two-argument operator, e.g. mul(x, y)."""

    op: Operator
    left: Node
    right: Node

    def __post_init__(self) -> None:
        if self.op.arity != 2:
            raise ValueError(f"Operator {self.op.value} is not binary")

    @property
    def node_type(self) -> NodeType:
        return NodeType.BINARY

    @property
    def dtype(self) -> DataType:
        return self.left.dtype

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)

    def to_string(self) -> str:
        return f"{self.op.signature.name}({self.left.to_string()}, {self.right.to_string()})"


@dataclass(frozen=True, eq=True)
class Binder(Node):
    """Function of one variable over a body expression.

    Multi-argument functions are nested binders (curried form).
    """

    param: Variable
    body: Node

    @property
    def node_type(self) -> NodeType:
        return NodeType.BINDER

    @property
    def dtype(self) -> DataType:
        return self.body.dtype

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.body,)

    def to_string(self) -> str:
        return f"lambda {self.param.name}: {self.body.to_string()}"


@dataclass(frozen=True, eq=True)
class Generic(Node):
    """Any other head applied to children, e.g. vector(x, y).

    Heads are looked up in the head registry for evaluation and
    differentiation.
    """

    head: str
    args: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    @property
    def node_type(self) -> NodeType:
        return NodeType.GENERIC

    @property
    def dtype(self) -> DataType:
        from symdiff.expression.heads import find_head

        spec = find_head(self.head)
        if spec is not None and spec.data_type is not None:
            return spec.data_type
        if self.args:
            return self.args[0].dtype
        return DataType.FLOAT

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def to_string(self) -> str:
        if not self.args:
            return self.head
        child_strs = [c.to_string() for c in self.args]
        return f"{self.head}({', '.join(child_strs)})"


def count_nodes(node: Node) -> int:
    """Count total nodes in a subtree."""
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(current.children)
    return count


def get_depth(node: Node) -> int:
    """Get the depth of a subtree."""
    depth = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        depth = max(depth, level)
        stack.extend((c, level + 1) for c in current.children)
    return depth


def collect_nodes(node: Node) -> list[Node]:
    """Collect all nodes in a subtree (pre-order traversal)."""
    result = [node]
    for child in node.children:
        result.extend(collect_nodes(child))
    return result


def iter_variables(node: Node) -> Iterator[Variable]:
    """Yield every variable occurrence in a subtree, including binder parameters."""
    if isinstance(node, Variable):
        yield node
    elif isinstance(node, Binder):
        yield node.param
    for child in node.children:
        yield from iter_variables(child)


def free_variables(node: Node, bound: frozenset[Variable] = frozenset()) -> set[Variable]:
    """Get the variables of a subtree not bound by an enclosing binder."""
    if isinstance(node, Variable):
        return set() if node in bound else {node}
    if isinstance(node, Binder):
        return free_variables(node.body, bound | {node.param})
    result: set[Variable] = set()
    for child in node.children:
        result |= free_variables(child, bound)
    return result
