"""Factory helpers for wiring the emulated driver from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from offline_db.core.config import Settings
from offline_db.core.dispatcher import RequestDispatcher, ShapeRegistry
from offline_db.core.logging_utils import configure_logging
from offline_db.core.observability import LoggingDispatchSink, attach_jsonl_file, detach_jsonl_file
from offline_db.integrations.mock_driver import MockConnection
from offline_db.integrations.package_context import FilePackageContext, PackageContextAccessor
from offline_db.shapes.catalog import default_shapes


@dataclass(slots=True)
class DriverDependencies:
    """Objects shared by every connection handed to the rules engine."""

    context_accessor: PackageContextAccessor
    registry: ShapeRegistry
    dispatcher: RequestDispatcher
    event_log_handler: logging.FileHandler | None = None

    def new_connection(self, connection_string: str = "") -> MockConnection:
        return MockConnection(self.dispatcher, connection_string)

    def close(self) -> None:
        """Detach and close the dispatch event log, if one was configured."""

        if self.event_log_handler is not None:
            detach_jsonl_file(self.event_log_handler)
            self.event_log_handler = None


def build_dependencies(
    settings: Settings,
    *,
    context_accessor: PackageContextAccessor | None = None,
) -> DriverDependencies:
    """Create the dispatcher and its collaborators based on *settings*.

    When no accessor is supplied the package directory named by the settings is
    loaded; otherwise the caller decides which package is current.
    """

    configure_logging(settings.logging.level)

    if context_accessor is None:
        context_accessor = PackageContextAccessor(
            FilePackageContext(base_path=settings.package.resolve_path())
        )

    registry = ShapeRegistry(
        default_shapes(
            context_accessor,
            process_default_schema_uid=settings.dispatch.process_default_schema_uid,
        ),
        strict=settings.dispatch.strict_shapes,
    )

    handler = _attach_event_log(settings)
    dispatcher = RequestDispatcher(
        registry=registry,
        logger=LoggingDispatchSink() if handler is not None else None,
    )
    return DriverDependencies(
        context_accessor=context_accessor,
        registry=registry,
        dispatcher=dispatcher,
        event_log_handler=handler,
    )


def _attach_event_log(settings: Settings) -> logging.FileHandler | None:
    if settings.paths is None or not settings.paths.dispatch_logs_dir:
        return None
    return attach_jsonl_file(Path(settings.paths.dispatch_logs_dir).expanduser())
