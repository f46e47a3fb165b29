"""Registry of Generic node heads.

A Generic node is differentiable only when its head is registered here
with either a derivative rule or the explicit `linear` tag. Heads not in
the registry (or nonlinear heads without a rule) are rejected by the
differentiation engine in strict mode.

Heads are meant to be registered at import time, before any
differentiation call.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable

import numpy as np

from symdiff.expression.nodes import Generic, Node, Zero
from symdiff.expression.types import DataType

# (operands, derivatives of operands) -> derivative expression
Rule = Callable[[tuple[Node, ...], tuple[Node, ...]], Node]


@dataclass(frozen=True)
class HeadSpec:
    """Evaluation and differentiation behavior of a Generic head.

    Attributes:
        name: Head name as used in Generic nodes
        evaluate: Function reducing evaluated children to a value
        derivative: Optional chain-rule construction for the head
        linear: Whether the head is linear in its children, which allows
            differentiating it child by child
        data_type: Data type of the head's result (None = first child's)
    """

    name: str
    evaluate: Callable[..., Any]
    derivative: Rule | None = None
    linear: bool = False
    data_type: DataType | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Head name must not be empty")
        if self.derivative is not None and self.linear:
            raise ValueError(f"Head '{self.name}' cannot have both a rule and the linear tag")

    @property
    def is_differentiable(self) -> bool:
        return self.linear or self.derivative is not None


_HEADS: dict[str, HeadSpec] = {}


def register_head(spec: HeadSpec, replace: bool = False) -> HeadSpec:
    """Add a head to the registry.

    Args:
        spec: Head specification
        replace: Allow overwriting an existing head of the same name

    Returns:
        The registered spec
    """
    if spec.name in _HEADS and not replace:
        raise ValueError(f"Head already registered: {spec.name}")
    _HEADS[spec.name] = spec
    return spec


def unregister_head(name: str) -> HeadSpec | None:
    """Remove a head from the registry, returning its spec if it was registered."""
    return _HEADS.pop(name, None)


def find_head(name: str) -> HeadSpec | None:
    """Get a registered head, or None."""
    return _HEADS.get(name)


def get_head(name: str) -> HeadSpec:
    """Get a registered head, raising KeyError if it is unknown."""
    try:
        return _HEADS[name]
    except KeyError:
        raise KeyError(f"Unknown head: {name}. Registered: {sorted(_HEADS)}") from None


def registered_heads() -> list[str]:
    """Get the names of all registered heads."""
    return sorted(_HEADS)


def _vector(*values: Any) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _total(*values: Any) -> Any:
    if not values:
        return 0.0
    return reduce(np.add, values)


def _abs_rule(args: tuple[Node, ...], dargs: tuple[Node, ...]) -> Node:
    f, = args
    df, = dargs
    return df * Generic("sign", (f,))


def _sign_rule(args: tuple[Node, ...], dargs: tuple[Node, ...]) -> Node:
    return Zero(args[0].dtype)


# Built-in heads
register_head(HeadSpec("vector", _vector, linear=True, data_type=DataType.VECTOR))
register_head(HeadSpec("sum", _total, linear=True))
register_head(HeadSpec("abs", np.abs, derivative=_abs_rule))
register_head(HeadSpec("sign", np.sign, derivative=_sign_rule))
register_head(HeadSpec("pi", lambda: np.pi, data_type=DataType.FLOAT))
register_head(HeadSpec("e", lambda: np.e, data_type=DataType.FLOAT))
