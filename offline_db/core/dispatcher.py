"""Routes every command executed on the mock driver to a statement shape.

The registry is an ordered, immutable list of shapes. Dispatch scans it in
registration order, lets the first parser that recognizes the command build a
request, then hands that request to the handler registered for its type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from offline_db.core.errors import ShapeConflictError, ShapeRegistrationError, UnrecognizedStatement
from offline_db.core.observability import DispatchObservationSink
from offline_db.integrations.result_set import ResultSet
from offline_db.shapes.base import (
    ExecutionMode,
    Handler,
    Parser,
    Request,
    StatementCommand,
    try_parse,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Shape:
    """One recognized statement: its request type, parser and handler."""

    name: str
    request_type: type[Request]
    parser: Parser[Any]
    handler: Handler[Any]


class ShapeRegistry:
    """Immutable, ordered collection of statement shapes.

    With ``strict`` enabled, construction fails when any parser recognizes the
    sample text of another shape, so dispatch never depends on registration
    order to pick between two matching shapes.
    """

    def __init__(self, shapes: Iterable[Shape], *, strict: bool = True) -> None:
        ordered = tuple(shapes)
        handlers: dict[type[Request], Shape] = {}
        names: set[str] = set()
        for shape in ordered:
            if shape.request_type in handlers:
                raise ShapeRegistrationError(
                    f"Request type {shape.request_type.__name__} is registered by both "
                    f"'{handlers[shape.request_type].name}' and '{shape.name}'"
                )
            if shape.name in names:
                raise ShapeRegistrationError(f"Statement shape '{shape.name}' is registered twice")
            handlers[shape.request_type] = shape
            names.add(shape.name)

        if strict:
            _check_conflicts(ordered)

        self._shapes = ordered
        self._by_request_type: Mapping[type[Request], Shape] = MappingProxyType(handlers)

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return self._shapes

    def shape_for(self, request: Request) -> Shape:
        """Return the shape registered for the concrete type of *request*."""

        try:
            return self._by_request_type[type(request)]
        except KeyError:
            raise ShapeRegistrationError(
                f"No handler registered for request type {type(request).__name__}"
            ) from None

    def resolve(self, command: StatementCommand) -> tuple[Shape, Request] | None:
        """Return the first shape recognizing *command* with its parsed request."""

        for shape in self._shapes:
            request = try_parse(shape.parser, command)
            if request is not None:
                return self.shape_for(request), request
        return None

    def __iter__(self):
        return iter(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)


def _check_conflicts(shapes: tuple[Shape, ...]) -> None:
    for index, shape in enumerate(shapes):
        sample = shape.parser.sample_text
        for other_index, other in enumerate(shapes):
            if other_index == index:
                continue
            if other.parser.matches(sample):
                first, second = sorted((index, other_index))
                raise ShapeConflictError(shapes[first].name, shapes[second].name)


@dataclass
class RequestDispatcher:
    """Execution hook of the mock driver."""

    registry: ShapeRegistry
    logger: DispatchObservationSink | None = None

    def handle(self, command: StatementCommand, mode: ExecutionMode) -> ResultSet:
        """Answer *command* executed in *mode* with a synthetic result set."""

        resolved = self.registry.resolve(command)
        if resolved is None:
            self._log_event(
                "statement_unrecognized",
                {"mode": mode.name, "command_text": command.text},
            )
            raise UnrecognizedStatement(command.text, mode)

        shape, request = resolved
        LOGGER.debug("Executing statement shape %s with %r", shape.name, request)
        self._log_event(
            "statement_dispatched",
            {"mode": mode.name, "shape": shape.name, "request": _describe(request)},
        )
        return shape.handler.handle(request)

    __call__ = handle

    def _log_event(self, event: str, payload: dict[str, Any]) -> None:
        if self.logger is None:
            return
        try:
            self.logger.log_event(event, payload)
        except Exception:
            # Observability failures must not impact statement handling.
            LOGGER.debug("Failed to record %s event", event, exc_info=True)


def _describe(request: Request) -> dict[str, Any]:
    fields = getattr(request, "__dataclass_fields__", {})
    return {name: getattr(request, name) for name in fields}


__all__ = ["RequestDispatcher", "Shape", "ShapeRegistry"]
