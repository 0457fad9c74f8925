"""Failure kinds raised by adapters and the schema engine."""

from __future__ import annotations


class TypeforgeError(RuntimeError):
    """Base class for typeforge failures."""


class MalformedInputError(TypeforgeError):
    """Raised when sample input cannot be turned into a raw value tree."""


class NamingCollisionExhaustedError(TypeforgeError):
    """Raised when no collision-free name can be derived for an object type."""

    def __init__(self, base_name: str, path: str) -> None:
        self.base_name = base_name
        self.path = path
        super().__init__(f"No unique type name available for {base_name!r} at path {path or '<root>'!r}")
