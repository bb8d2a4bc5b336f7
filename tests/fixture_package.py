"""Builds a package directory with two schemas for tests."""

from __future__ import annotations

import json
from pathlib import Path
from uuid import UUID

PACKAGE_UID = UUID("6f0bd6a9-1d47-4f3a-8a1e-0c1e2b8d5a10")
SCHEMA_ONE_UID = UUID("0a1b2c3d-0000-4000-8000-000000000001")
SCHEMA_TWO_UID = UUID("0a1b2c3d-0000-4000-8000-000000000002")
UNKNOWN_UID = UUID("ffffffff-0000-4000-8000-00000000ffff")

SCHEMA_ONE_METADATA = b'{"MetaData": {"Schema": {"A2": "UsrOrder"}}}'
SCHEMA_TWO_METADATA = b'{"MetaData": {"Schema": {"A2": "UsrOrderService"}}}'


def _write_descriptor(path: Path, descriptor: dict[str, object], *, bom: bool = False) -> None:
    path.mkdir(parents=True, exist_ok=True)
    content = json.dumps({"Descriptor": descriptor})
    (path / "descriptor.json").write_text(content, encoding="utf-8-sig" if bom else "utf-8")


def build_package_dir(base: Path) -> Path:
    root = base / "UsrOrders"
    _write_descriptor(
        root,
        {"UId": str(PACKAGE_UID), "Name": "UsrOrders", "Type": 0, "Maintainer": "Customer"},
        bom=True,
    )

    schema_one = root / "Schemas" / "UsrOrder"
    _write_descriptor(
        schema_one,
        {
            "UId": str(SCHEMA_ONE_UID),
            "Name": "UsrOrder",
            "ManagerName": "EntitySchemaManager",
            "Caption": [{"CultureName": "en-US", "Value": "Order"}],
        },
    )
    (schema_one / "metadata.json").write_bytes(SCHEMA_ONE_METADATA)

    schema_two = root / "Schemas" / "UsrOrderService"
    _write_descriptor(
        schema_two,
        {"UId": str(SCHEMA_TWO_UID), "Name": "UsrOrderService", "ManagerName": "SourceCodeSchemaManager"},
    )
    (schema_two / "metadata.json").write_bytes(SCHEMA_TWO_METADATA)
    return root
