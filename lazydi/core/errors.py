"""
Exception taxonomy for registration and resolution failures.
"""

from __future__ import annotations

from typing import Any


def describe(identifier: Any) -> str:
    """Human-readable name for an identifier in error messages."""
    if isinstance(identifier, str):
        return identifier
    name = getattr(identifier, "__qualname__", None) or getattr(identifier, "__name__", None)
    if name:
        return name
    return repr(identifier)


class DependencyError(Exception):
    """Base class for every error raised by lazydi."""


class NotRegisteredError(DependencyError, LookupError):
    """Raised when an identifier is neither a registered class nor a stored value."""

    known = False

    def __init__(self, identifier: Any, message: str | None = None):
        self.identifier = identifier
        self.message = message or (
            f"{describe(identifier)} is not registered. "
            f"Add it with context.register({describe(identifier)})"
        )
        super().__init__(self.message)


class NotInstantiatedError(DependencyError, LookupError):
    """Raised when a registered class has no cached instance yet."""

    known = True

    def __init__(self, identifier: Any, message: str | None = None):
        self.identifier = identifier
        self.message = message or (
            f"{describe(identifier)} is registered but has not been instantiated. "
            f"Call context.resolve({describe(identifier)}) first"
        )
        super().__init__(self.message)


class CyclicDependencyError(DependencyError):
    """Raised when resolution re-enters an identifier it is still building."""

    def __init__(self, chain: list[Any]):
        self.chain = list(chain)
        self.message = "Cyclic dependency: " + " -> ".join(describe(i) for i in self.chain)
        super().__init__(self.message)


class UnkeyableValueError(DependencyError, TypeError):
    """Raised when a value without a custom key cannot be serialized for hashing."""

    def __init__(self, value: Any, cause: Exception | None = None):
        self.value = value
        self.message = (
            f"Cannot derive a key for value of type {type(value).__name__}; "
            "pass an explicit key"
        )
        if cause is not None:
            self.message += f" ({cause})"
        super().__init__(self.message)
