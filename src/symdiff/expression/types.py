"""Type tags and the closed operator set for expression trees."""

from enum import Enum, auto
from dataclasses import dataclass


class DataType(Enum):
    """Data types carried by expression tree nodes."""

    FLOAT = auto()       # Scalar floating point value
    INTEGER = auto()     # Integer literal
    VECTOR = auto()      # Aggregate of floats (vector-valued functions)

    def is_scalar(self) -> bool:
        """Check if type is a scalar numeric type."""
        return self in (DataType.FLOAT, DataType.INTEGER)


class NodeType(Enum):
    """Variants of expression tree nodes."""

    CONSTANT = auto()    # Literal value
    ZERO = auto()        # Additive identity
    ONE = auto()         # Multiplicative identity
    VARIABLE = auto()    # Named independent quantity
    UNARY = auto()       # One-argument operator application
    BINARY = auto()      # Two-argument operator application
    BINDER = auto()      # Function of one variable
    GENERIC = auto()     # Any other head with children


class Operator(Enum):
    """The fixed set of differentiable operators."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    ATAN2 = "atan2"
    NEG = "neg"
    LOG = "log"
    EXP = "exp"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"

    @property
    def signature(self) -> "OperatorSignature":
        """Get the operator signature."""
        return OPERATOR_SIGNATURES[self]

    @property
    def arity(self) -> int:
        return self.signature.arity


@dataclass(frozen=True)
class OperatorSignature:
    """Signature of an operator."""

    name: str
    arity: int

    def __post_init__(self) -> None:
        if self.arity not in (1, 2):
            raise ValueError(f"Operator arity must be 1 or 2, got {self.arity}")


OPERATOR_SIGNATURES: dict[Operator, OperatorSignature] = {
    # Binary arithmetic
    Operator.ADD: OperatorSignature("add", 2),
    Operator.SUB: OperatorSignature("sub", 2),
    Operator.MUL: OperatorSignature("mul", 2),
    Operator.DIV: OperatorSignature("div", 2),
    Operator.POW: OperatorSignature("pow", 2),
    Operator.ATAN2: OperatorSignature("atan2", 2),

    # Unary
    Operator.NEG: OperatorSignature("neg", 1),
    Operator.LOG: OperatorSignature("log", 1),
    Operator.EXP: OperatorSignature("exp", 1),
    Operator.SQRT: OperatorSignature("sqrt", 1),

    # Trigonometric
    Operator.SIN: OperatorSignature("sin", 1),
    Operator.COS: OperatorSignature("cos", 1),
    Operator.TAN: OperatorSignature("tan", 1),
    Operator.ASIN: OperatorSignature("asin", 1),
    Operator.ACOS: OperatorSignature("acos", 1),
    Operator.ATAN: OperatorSignature("atan", 1),

    # Hyperbolic
    Operator.SINH: OperatorSignature("sinh", 1),
    Operator.COSH: OperatorSignature("cosh", 1),
    Operator.TANH: OperatorSignature("tanh", 1),
}
