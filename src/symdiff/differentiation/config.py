"""Configuration for the differentiation engine and order driver."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int | None = None) -> int | None:
    # unset keeps the default, blank clears the limit
    value = os.environ.get(name)
    if value is None:
        return default
    if not value.strip():
        return None
    return int(value)


@dataclass(frozen=True)
class DifferentiationConfig:
    """Configuration for differentiation calls.

    Attributes:
        strict_names: Raise VariableNotFoundError when differentiating by a
            name that is not a parameter (instead of a zero derivative)
        strict_heads: Raise UnsupportedConstructError for Generic heads
            without a rule or linear tag (instead of differentiating child
            by child)
        max_order: Largest derivative order accepted (None = unbounded)
        max_tree_size: Largest derivative tree accepted, in nodes
            (None = unbounded)
        warn_tree_size: Log a warning for derivative trees above this size
            (None = never)
    """

    strict_names: bool = False
    strict_heads: bool = True
    max_order: int | None = None
    max_tree_size: int | None = None
    warn_tree_size: int | None = 10_000

    def __post_init__(self) -> None:
        if self.max_order is not None and self.max_order < 0:
            raise ValueError(f"max_order must be non-negative, got {self.max_order}")
        if self.max_tree_size is not None and self.max_tree_size < 1:
            raise ValueError(f"max_tree_size must be positive, got {self.max_tree_size}")

    @classmethod
    def from_env(cls) -> "DifferentiationConfig":
        """Build a configuration from SYMDIFF_* environment variables."""
        return cls(
            strict_names=_env_flag("SYMDIFF_STRICT_NAMES", cls.strict_names),
            strict_heads=_env_flag("SYMDIFF_STRICT_HEADS", cls.strict_heads),
            max_order=_env_int("SYMDIFF_MAX_ORDER"),
            max_tree_size=_env_int("SYMDIFF_MAX_TREE_SIZE"),
            warn_tree_size=_env_int("SYMDIFF_WARN_TREE_SIZE", cls.warn_tree_size),
        )


DEFAULT_CONFIG = DifferentiationConfig()
