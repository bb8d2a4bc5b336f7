"""Dispatch events emitted as JSON lines through the standard logging machinery.

The dispatcher hands each event to a sink. ``LoggingDispatchSink`` forwards it
to a dedicated logger, and ``attach_jsonl_file`` gives that logger a
``FileHandler`` whose formatter writes one JSON object per record.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

EVENT_LOGGER_NAME = "offline_db.dispatch.events"
DISPATCH_LOG_FILENAME = "dispatch.jsonl"


class DispatchObservationSink(Protocol):
    """Records lifecycle events emitted by the request dispatcher."""

    def log_event(self, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Records logged with ``extra={"event": ..., "payload": {...}}`` have their
    payload merged into the object; ``None`` values are left out. Values that
    are not JSON serializable (UUIDs, enums, bytes) are written using ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "event": getattr(record, "event", None) or record.getMessage(),
        }
        payload = getattr(record, "payload", None) or {}
        for key, value in payload.items():
            if value is not None:
                entry.setdefault(key, value)
        return json.dumps(entry, ensure_ascii=False, default=str)


@dataclass(slots=True)
class LoggingDispatchSink:
    """Forwards dispatch events to the event logger at INFO level."""

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(EVENT_LOGGER_NAME))

    def log_event(self, event: str, payload: dict[str, Any]) -> None:
        self.logger.info(event, extra={"event": event, "payload": payload})


def attach_jsonl_file(base_dir: Path, logger_name: str = EVENT_LOGGER_NAME) -> logging.FileHandler:
    """Route *logger_name* records to ``<base_dir>/dispatch.jsonl``.

    Calling it again for the same file returns the handler already attached.
    Event records stop propagating so they do not also reach the console.
    """

    base_dir.mkdir(parents=True, exist_ok=True)
    target = (base_dir / DISPATCH_LOG_FILENAME).resolve()
    logger = logging.getLogger(logger_name)
    for existing in logger.handlers:
        if isinstance(existing, logging.FileHandler) and Path(existing.baseFilename) == target:
            return existing

    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(JsonLineFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return handler


def detach_jsonl_file(handler: logging.Handler, logger_name: str = EVENT_LOGGER_NAME) -> None:
    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)
    handler.close()
    if not logger.handlers:
        logger.propagate = True


__all__ = [
    "DISPATCH_LOG_FILENAME",
    "EVENT_LOGGER_NAME",
    "DispatchObservationSink",
    "JsonLineFormatter",
    "LoggingDispatchSink",
    "attach_jsonl_file",
    "detach_jsonl_file",
]
