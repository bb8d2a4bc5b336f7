"""Read-only view of the package directory being processed.

A package directory looks like::

    <package>/descriptor.json
    <package>/Schemas/<SchemaName>/descriptor.json
    <package>/Schemas/<SchemaName>/metadata.json

Descriptor documents wrap their payload in a top-level ``Descriptor`` property.
Everything is read lazily on first access and cached for the lifetime of the
context.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Protocol, Sequence
from uuid import UUID

from offline_db.core.errors import (
    PackageContextNotSet,
    PackageDescriptorError,
    PackageNotFoundInContext,
    SchemaNotFoundInContext,
)

DESCRIPTOR_FILENAME = "descriptor.json"
METADATA_FILENAME = "metadata.json"
SCHEMAS_DIRNAME = "Schemas"


class PackageType(IntEnum):
    GENERAL = 0
    ASSEMBLY = 1


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    uid: UUID
    name: str
    type: PackageType = PackageType.GENERAL
    maintainer: str | None = None


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    uid: UUID
    name: str
    manager_name: str
    caption: str | None = None


class PackageSchemaContext(Protocol):
    """One schema of the loaded package."""

    @property
    def descriptor(self) -> SchemaDescriptor:  # pragma: no cover - interface
        ...

    def get_metadata(self) -> bytes:  # pragma: no cover - interface
        ...


class PackageContext(Protocol):
    """Package descriptor plus its schemas."""

    @property
    def descriptor(self) -> PackageDescriptor:  # pragma: no cover - interface
        ...

    @property
    def schemas(self) -> Sequence[PackageSchemaContext]:  # pragma: no cover - interface
        ...


def find_schema(context: PackageContext, schema_uid: UUID) -> PackageSchemaContext | None:
    """Return the schema with *schema_uid* or None."""

    for schema in context.schemas:
        if schema.descriptor.uid == schema_uid:
            return schema
    return None


def get_schema(context: PackageContext, schema_uid: UUID) -> PackageSchemaContext:
    """Return the schema with *schema_uid* or raise ``SchemaNotFoundInContext``."""

    schema = find_schema(context, schema_uid)
    if schema is None:
        raise SchemaNotFoundInContext(schema_uid)
    return schema


def package_type_for(context: PackageContext, package_uid: UUID) -> PackageType:
    """Return the package type when *package_uid* is the loaded package."""

    if context.descriptor.uid != package_uid:
        raise PackageNotFoundInContext(package_uid)
    return context.descriptor.type


def _read_descriptor(path: Path) -> dict[str, Any]:
    # Descriptors exported by the platform frequently carry a UTF-8 BOM.
    with path.open("r", encoding="utf-8-sig") as handle:
        payload = json.load(handle)
    descriptor = payload.get("Descriptor") if isinstance(payload, dict) else None
    if not isinstance(descriptor, dict):
        raise PackageDescriptorError(f"$.Descriptor property was not found in '{path}'")
    return descriptor


def _require(descriptor: dict[str, Any], key: str, path: Path) -> Any:
    value = descriptor.get(key)
    if value in (None, ""):
        raise PackageDescriptorError(f"$.Descriptor.{key} is missing in '{path}'")
    return value


def _parse_uuid(value: Any, key: str, path: Path) -> UUID:
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise PackageDescriptorError(f"$.Descriptor.{key} is not a valid UUID in '{path}'") from exc


def parse_package_descriptor(path: Path) -> PackageDescriptor:
    raw = _read_descriptor(path)
    raw_type = raw.get("Type", PackageType.GENERAL)
    try:
        package_type = PackageType(int(raw_type))
    except (TypeError, ValueError) as exc:
        raise PackageDescriptorError(f"Unknown package type {raw_type!r} in '{path}'") from exc
    return PackageDescriptor(
        uid=_parse_uuid(_require(raw, "UId", path), "UId", path),
        name=str(_require(raw, "Name", path)),
        type=package_type,
        maintainer=raw.get("Maintainer"),
    )


def parse_schema_descriptor(path: Path) -> SchemaDescriptor:
    raw = _read_descriptor(path)
    caption = raw.get("Caption")
    if isinstance(caption, list):
        # Localized captions are stored as [{"CultureName": ..., "Value": ...}]
        caption = next((item.get("Value") for item in caption if isinstance(item, dict)), None)
    return SchemaDescriptor(
        uid=_parse_uuid(_require(raw, "UId", path), "UId", path),
        name=str(_require(raw, "Name", path)),
        manager_name=str(_require(raw, "ManagerName", path)),
        caption=caption,
    )


@dataclass(slots=True)
class FileSchemaContext:
    """Schema backed by ``Schemas/<name>/`` inside a package directory."""

    base_path: Path
    _descriptor: SchemaDescriptor | None = field(init=False, default=None)

    @property
    def descriptor(self) -> SchemaDescriptor:
        if self._descriptor is None:
            self._descriptor = parse_schema_descriptor(self.base_path / DESCRIPTOR_FILENAME)
        return self._descriptor

    def get_metadata(self) -> bytes:
        return (self.base_path / METADATA_FILENAME).read_bytes()


@dataclass(slots=True)
class FilePackageContext:
    """Package context read from a package directory on disk."""

    base_path: Path
    _descriptor: PackageDescriptor | None = field(init=False, default=None)
    _schemas: tuple[FileSchemaContext, ...] | None = field(init=False, default=None)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path).expanduser()

    @property
    def descriptor(self) -> PackageDescriptor:
        if self._descriptor is None:
            with self._lock:
                if self._descriptor is None:
                    self._descriptor = parse_package_descriptor(self.base_path / DESCRIPTOR_FILENAME)
        return self._descriptor

    @property
    def schemas(self) -> tuple[FileSchemaContext, ...]:
        if self._schemas is None:
            with self._lock:
                if self._schemas is None:
                    self._schemas = self._read_schemas()
        return self._schemas

    def _read_schemas(self) -> tuple[FileSchemaContext, ...]:
        schemas_dir = self.base_path / SCHEMAS_DIRNAME
        if not schemas_dir.is_dir():
            return ()
        return tuple(
            FileSchemaContext(base_path=entry)
            for entry in sorted(schemas_dir.iterdir())
            if entry.is_dir()
        )


@dataclass(frozen=True, slots=True)
class InMemorySchemaContext:
    descriptor: SchemaDescriptor
    metadata: bytes = b""

    def get_metadata(self) -> bytes:
        return self.metadata


@dataclass(frozen=True, slots=True)
class InMemoryPackageContext:
    """Package context assembled in memory, used by tests and embedders."""

    descriptor: PackageDescriptor
    schemas: tuple[InMemorySchemaContext, ...] = ()


class PackageContextAccessor:
    """Holds the package context currently being processed.

    Handlers depend on the accessor rather than on a concrete context so the
    package can be chosen after the dispatcher has been wired.
    """

    def __init__(self, context: PackageContext | None = None) -> None:
        self._context = context

    @property
    def is_set(self) -> bool:
        return self._context is not None

    def get(self) -> PackageContext:
        if self._context is None:
            raise PackageContextNotSet()
        return self._context

    def set(self, context: PackageContext) -> None:
        self._context = context

    @property
    def descriptor(self) -> PackageDescriptor:
        return self.get().descriptor

    @property
    def schemas(self) -> Sequence[PackageSchemaContext]:
        return self.get().schemas


__all__ = [
    "FilePackageContext",
    "FileSchemaContext",
    "InMemoryPackageContext",
    "InMemorySchemaContext",
    "PackageContext",
    "PackageContextAccessor",
    "PackageDescriptor",
    "PackageSchemaContext",
    "PackageType",
    "SchemaDescriptor",
    "find_schema",
    "get_schema",
    "package_type_for",
    "parse_package_descriptor",
    "parse_schema_descriptor",
]
