"""
symdiff: Symbolic differentiation of closed-form expression trees.

Builds exact derivative trees of any order with respect to any variable,
and evaluates them to scalars, vectors or matrices:
- Expression trees with curried multi-variable functions
- Recursive chain-rule engine over a fixed operator rule table
- Gradient, Jacobian, Laplacian and Hessian operators
"""

__version__ = "0.1.0"

from symdiff.expression import (
    Binder,
    BinaryOp,
    Constant,
    DataType,
    ExpressionTree,
    Generic,
    HeadSpec,
    Node,
    One,
    Operator,
    UnaryOp,
    Variable,
    Zero,
    register_head,
)
from symdiff.expression.functions import (
    acos,
    asin,
    atan,
    atan2,
    cos,
    cosh,
    curry,
    exp,
    log,
    power,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
    total,
    variables,
    vector,
)
from symdiff.differentiation import (
    DifferentiationConfig,
    ParameterList,
    differentiate,
    differentiate_by_name,
    differentiate_n,
)
from symdiff.evaluation import NumericResult, Shape, evaluate
from symdiff.calculus import (
    diff,
    diff2,
    diffn,
    grad,
    grad_hessian,
    hessian,
    jacobian,
    jacobian_t,
    laplacian,
    value_and_diff,
    value_and_diff2,
    value_and_diffn,
    value_and_grad,
    value_and_hessian,
    value_and_jacobian,
    value_and_jacobian_t,
    value_and_laplacian,
    value_diff_diff2,
    value_grad_hessian,
)
from symdiff.errors import (
    ArityMismatchError,
    InvalidOrderError,
    SymdiffError,
    TreeSizeExceededError,
    TypeMismatchError,
    UnboundVariableError,
    UnsupportedConstructError,
    VariableNotFoundError,
)

__all__ = [
    "__version__",
    # Expression trees
    "Node",
    "Constant",
    "Zero",
    "One",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "Binder",
    "Generic",
    "DataType",
    "Operator",
    "ExpressionTree",
    "HeadSpec",
    "register_head",
    "variables",
    "curry",
    "vector",
    "total",
    "power",
    "atan2",
    "log",
    "exp",
    "sin",
    "cos",
    "tan",
    "sqrt",
    "sinh",
    "cosh",
    "tanh",
    "asin",
    "acos",
    "atan",
    # Differentiation
    "DifferentiationConfig",
    "ParameterList",
    "differentiate",
    "differentiate_n",
    "differentiate_by_name",
    # Evaluation
    "NumericResult",
    "Shape",
    "evaluate",
    # Derivative operators
    "diff",
    "value_and_diff",
    "diff2",
    "value_and_diff2",
    "value_diff_diff2",
    "diffn",
    "value_and_diffn",
    "grad",
    "value_and_grad",
    "jacobian_t",
    "value_and_jacobian_t",
    "jacobian",
    "value_and_jacobian",
    "laplacian",
    "value_and_laplacian",
    "hessian",
    "value_and_hessian",
    "grad_hessian",
    "value_grad_hessian",
    # Errors
    "SymdiffError",
    "TreeSizeExceededError",
    "InvalidOrderError",
    "VariableNotFoundError",
    "ArityMismatchError",
    "TypeMismatchError",
    "UnsupportedConstructError",
    "UnboundVariableError",
]
