"""Error taxonomy for differentiation and evaluation.

Every error derives from SymdiffError and from the builtin exception that
best matches it, so callers may catch either.
"""


class SymdiffError(Exception):
    """Base class for all symdiff errors."""

    pass


class InvalidOrderError(SymdiffError, ValueError):
    """Raised when a derivative order is negative or above the configured limit."""

    pass


class VariableNotFoundError(SymdiffError, LookupError):
    """Raised in strict mode when a named parameter is not bound by the expression."""

    def __init__(self, name: str, available: tuple[str, ...] = ()):
        self.name = name
        self.available = available
        super().__init__(f"Variable '{name}' not found. Parameters: {list(available)}")


class ArityMismatchError(SymdiffError, TypeError):
    """Raised when the number of arguments does not match the bound parameters."""

    pass


class TypeMismatchError(SymdiffError, TypeError):
    """Raised when an evaluation result does not have the expected shape."""

    pass


class UnsupportedConstructError(SymdiffError, NotImplementedError):
    """Raised when a node head has no derivative rule and is not tagged linear."""

    pass


class UnboundVariableError(SymdiffError, NameError):
    """Raised when evaluation reaches a variable with no bound value."""

    pass


class TreeSizeExceededError(SymdiffError, RuntimeError):
    """Raised when a derivative tree grows past the configured size limit."""

    pass
