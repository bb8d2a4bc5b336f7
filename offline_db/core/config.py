"""Utilities for loading emulation settings from YAML configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import UUID

import yaml

DEFAULT_PACKAGE_PATH_ENV = "OFFLINE_DB_PACKAGE_PATH"


@dataclass(slots=True)
class PackageSettings:
    path_env: str = DEFAULT_PACKAGE_PATH_ENV
    path: str | None = None

    def resolve_path(self) -> Path:
        value = os.getenv(self.path_env) or self.path
        if not value:
            raise OSError(
                f"Environment variable '{self.path_env}' or package.path is required to locate the package"
            )
        path = Path(value).expanduser()
        if not path.is_dir():
            raise FileNotFoundError(f"Package directory not found at '{path}'")
        return path


@dataclass(slots=True)
class DispatchSettings:
    strict_shapes: bool = True
    process_default_schema_uid: UUID | None = None


@dataclass(slots=True)
class PathsSettings:
    dispatch_logs_dir: str | None = None


@dataclass(slots=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(slots=True)
class Settings:
    package: PackageSettings
    dispatch: DispatchSettings
    paths: PathsSettings | None
    logging: LoggingSettings


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _parse_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    raw = _load_yaml(config_path)

    package_raw = raw.get("package") or {}
    package_path = package_raw.get("path")
    package = PackageSettings(
        path_env=str(package_raw.get("path_env", DEFAULT_PACKAGE_PATH_ENV)),
        path=str(package_path) if package_path else None,
    )

    dispatch_raw = raw.get("dispatch") or {}
    process_uid = dispatch_raw.get("process_default_schema_uid")
    try:
        parsed_process_uid = UUID(str(process_uid)) if process_uid else None
    except ValueError as exc:
        raise ValueError(
            f"dispatch.process_default_schema_uid is not a valid UUID: {process_uid!r}"
        ) from exc
    dispatch = DispatchSettings(
        strict_shapes=_parse_bool(dispatch_raw.get("strict_shapes"), True),
        process_default_schema_uid=parsed_process_uid,
    )

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        dispatch_logs_dir = paths_raw.get("dispatch_logs_dir")
        paths = PathsSettings(
            dispatch_logs_dir=str(dispatch_logs_dir) if dispatch_logs_dir else None,
        )

    logging_raw = raw.get("logging") or {}
    logging_settings = LoggingSettings(level=str(logging_raw.get("level", "INFO")).upper())

    return Settings(
        package=package,
        dispatch=dispatch,
        paths=paths,
        logging=logging_settings,
    )
