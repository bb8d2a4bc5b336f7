"""Building blocks shared by every statement shape.

A shape couples a parser, which recognizes one statement issued by the rules
engine and extracts its parameters into a typed request, with a handler that
turns that request into a synthetic result set.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Protocol, TypeVar
from uuid import UUID

from offline_db.core.text_matching import text_contains, text_starts_with, texts_equal
from offline_db.integrations.parameters import ParameterCollection
from offline_db.integrations.result_set import ResultSet

RequestT = TypeVar("RequestT", bound="Request")
RequestT_co = TypeVar("RequestT_co", bound="Request", covariant=True)
RequestT_contra = TypeVar("RequestT_contra", bound="Request", contravariant=True)


class ExecutionMode(Enum):
    NON_QUERY = "ExecuteNonQuery"
    SCALAR = "ExecuteScalar"
    READER = "ExecuteReader"


class StatementCommand(Protocol):
    """The parts of a command that parsers inspect."""

    @property
    def text(self) -> str | None:  # pragma: no cover - interface
        ...

    @property
    def parameters(self) -> ParameterCollection:  # pragma: no cover - interface
        ...


@dataclass(frozen=True, slots=True)
class Request:
    """Base class for the typed values extracted from a matched statement."""


class Parser(Protocol[RequestT_co]):
    """Recognizes one statement shape and extracts its request."""

    @property
    def sample_text(self) -> str:  # pragma: no cover - interface
        ...

    def matches(self, text: str | None) -> bool:  # pragma: no cover - interface
        ...

    def parse(self, command: StatementCommand) -> RequestT_co:  # pragma: no cover - interface
        ...


class Handler(Protocol[RequestT_contra]):
    """Produces the synthetic answer for one request type."""

    def handle(self, request: RequestT_contra) -> ResultSet:  # pragma: no cover - interface
        ...


def try_parse(parser: Parser[RequestT], command: StatementCommand) -> RequestT | None:
    """Return the parsed request, or None when *command* is not this shape."""

    if not parser.matches(command.text):
        return None
    return parser.parse(command)


class ExactTextParser(ABC, Generic[RequestT]):
    """Parser for statements whose whole text is fixed."""

    reference_text: ClassVar[str]

    @property
    def sample_text(self) -> str:
        return self.reference_text

    def matches(self, text: str | None) -> bool:
        return texts_equal(self.reference_text, text)

    @abstractmethod
    def parse(self, command: StatementCommand) -> RequestT:
        """Extract the typed request from a matching *command*."""


class FragmentTextParser(ABC, Generic[RequestT]):
    """Parser for statements identified by a prefix and contained fragments.

    Used where trailing clauses vary between calls but the listed fragments
    still single the statement out.
    """

    prefix: ClassVar[str]
    fragments: ClassVar[tuple[str, ...]]

    @property
    def sample_text(self) -> str:
        return "\n".join((self.prefix, *self.fragments))

    def matches(self, text: str | None) -> bool:
        if not text_starts_with(text, self.prefix):
            return False
        return all(text_contains(text, fragment) for fragment in self.fragments)

    @abstractmethod
    def parse(self, command: StatementCommand) -> RequestT:
        """Extract the typed request from a matching *command*."""


def uuid_parameter(command: StatementCommand, name: str) -> UUID:
    value = command.parameters.get_value(name)
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    raise TypeError(f"Parameter '{name}' must be a UUID, got {type(value).__name__}")


def str_parameter(command: StatementCommand, name: str) -> str:
    value = command.parameters.get_value(name)
    if not isinstance(value, str):
        raise TypeError(f"Parameter '{name}' must be a string, got {type(value).__name__}")
    return value


def int_parameter(command: StatementCommand, name: str) -> int:
    value = command.parameters.get_value(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Parameter '{name}' must be an integer, got {type(value).__name__}")
    return value


def defaults_expected(logger: logging.Logger, message: str, *args: Any) -> ResultSet:
    """Log why no rows are returned and hand back an empty result.

    The rules engine falls back to its defaults when these lookups come back
    empty.
    """

    logger.debug(message, *args)
    return ResultSet.empty()


__all__ = [
    "ExactTextParser",
    "ExecutionMode",
    "FragmentTextParser",
    "Handler",
    "Parser",
    "Request",
    "StatementCommand",
    "defaults_expected",
    "int_parameter",
    "str_parameter",
    "try_parse",
    "uuid_parameter",
]
