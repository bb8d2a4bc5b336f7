"""Exception types raised by the emulated database layer."""

from __future__ import annotations

from typing import Any
from uuid import UUID


class OfflineDbError(RuntimeError):
    """Base class for errors raised by the emulation layer."""


class UnrecognizedStatement(OfflineDbError):
    """Raised when no registered statement shape matches a command."""

    def __init__(self, command_text: str | None, mode: Any) -> None:
        self.command_text = command_text
        self.mode = mode
        mode_name = getattr(mode, "name", mode)
        super().__init__(
            f"No statement shape matched for mode {mode_name} with command text: {command_text}"
        )


class ContextLookupFailure(OfflineDbError):
    """Raised when a handler cannot find an entity in the loaded package."""

    def __init__(self, identifier: UUID, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message or f"Cannot find '{identifier}' in current package context")


class SchemaNotFoundInContext(ContextLookupFailure):
    def __init__(self, schema_uid: UUID) -> None:
        super().__init__(schema_uid, f"Cannot find schema '{schema_uid}' in current package context")


class PackageNotFoundInContext(ContextLookupFailure):
    def __init__(self, package_uid: UUID) -> None:
        super().__init__(package_uid, f"Cannot find package '{package_uid}' in current package context")


class UnsupportedOperation(OfflineDbError, NotImplementedError):
    """Raised for driver capabilities that are intentionally not emulated."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"'{operation}' is not supported by the emulated driver")


class PackageContextNotSet(OfflineDbError):
    """Raised when the package context is read before one was registered."""

    def __init__(self) -> None:
        super().__init__("Current package context is not set; call PackageContextAccessor.set() first")


class PackageDescriptorError(OfflineDbError, ValueError):
    """Raised when a descriptor document is missing or malformed."""


class ShapeRegistrationError(OfflineDbError):
    """Raised when the statement shape registry is built inconsistently."""


class ShapeConflictError(ShapeRegistrationError):
    """Raised when two registered shapes recognize the same statement."""

    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Statement shapes '{first}' and '{second}' both match the same command text")


class ParameterNotFoundError(KeyError):
    """Raised when a parameter name is not bound on a command."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Parameter '{self.name}' not found in collection"


__all__ = [
    "ContextLookupFailure",
    "OfflineDbError",
    "PackageContextNotSet",
    "PackageDescriptorError",
    "PackageNotFoundInContext",
    "ParameterNotFoundError",
    "SchemaNotFoundInContext",
    "ShapeConflictError",
    "ShapeRegistrationError",
    "UnrecognizedStatement",
    "UnsupportedOperation",
]
