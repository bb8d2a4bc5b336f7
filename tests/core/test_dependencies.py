"""Tests for wiring the driver from settings."""

from __future__ import annotations

import json
from pathlib import Path
from uuid import UUID

import pytest

from fixture_package import PACKAGE_UID, SCHEMA_ONE_UID
from offline_db.core.config import DispatchSettings, LoggingSettings, PackageSettings, PathsSettings, Settings
from offline_db.core.dependencies import build_dependencies
from offline_db.core.errors import PackageContextNotSet
from offline_db.core.observability import DISPATCH_LOG_FILENAME, LoggingDispatchSink
from offline_db.integrations.mock_driver import ConnectionState
from offline_db.integrations.package_context import FilePackageContext, PackageContextAccessor


def _settings(package_dir: Path | None, logs_dir: Path | None = None) -> Settings:
    return Settings(
        package=PackageSettings(path_env="OFFLINE_DB_TEST_UNSET", path=str(package_dir) if package_dir else None),
        dispatch=DispatchSettings(),
        paths=PathsSettings(dispatch_logs_dir=str(logs_dir)) if logs_dir else None,
        logging=LoggingSettings(level="INFO"),
    )


def test_build_dependencies_loads_package_from_settings(package_dir: Path) -> None:
    deps = build_dependencies(_settings(package_dir))

    assert len(deps.registry) == 11
    assert deps.dispatcher.logger is None
    assert deps.context_accessor.descriptor.uid == PACKAGE_UID


def test_build_dependencies_configures_dispatch_log(package_dir: Path, tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs" / "dispatch"

    deps = build_dependencies(_settings(package_dir, logs_dir))
    try:
        assert isinstance(deps.dispatcher.logger, LoggingDispatchSink)
        command = deps.new_connection().create_command(
            'SELECT "PackageUId" FROM "public"."VwSysSchemaInWorkspace" WHERE "SysWorkspaceId" = @P1 AND "Id" = @P2',
            {"P1": UUID(int=1), "P2": SCHEMA_ONE_UID},
        )
        command.execute_scalar()
    finally:
        deps.close()

    lines = (logs_dir / DISPATCH_LOG_FILENAME).read_text(encoding="utf-8").splitlines()
    event = json.loads(lines[0])
    assert event["event"] == "statement_dispatched"
    assert event["shape"] == "PackageUIdBySchemaId"
    assert event["mode"] == "SCALAR"
    assert deps.event_log_handler is None


def test_new_connection_answers_schema_lookup(package_dir: Path) -> None:
    deps = build_dependencies(_settings(package_dir))

    with deps.new_connection() as connection:
        assert connection.state is ConnectionState.OPEN
        command = connection.create_command(
            'SELECT "PackageUId" FROM "public"."VwSysSchemaInWorkspace" WHERE "SysWorkspaceId" = @P1 AND "Id" = @P2',
            {"P1": UUID(int=1), "P2": SCHEMA_ONE_UID},
        )
        assert command.execute_scalar() == PACKAGE_UID

    assert connection.state is ConnectionState.CLOSED


def test_external_accessor_can_be_set_later(package_dir: Path) -> None:
    accessor = PackageContextAccessor()
    deps = build_dependencies(_settings(None), context_accessor=accessor)
    command = deps.new_connection().create_command(
        'SELECT "PackageUId" FROM "public"."VwSysSchemaInWorkspace" WHERE "SysWorkspaceId" = @P1 AND "Id" = @P2',
        {"P1": UUID(int=1), "P2": SCHEMA_ONE_UID},
    )

    with pytest.raises(PackageContextNotSet):
        command.execute_scalar()

    accessor.set(FilePackageContext(base_path=package_dir))
    assert command.execute_scalar() == PACKAGE_UID
