"""Shared fixtures for package-backed tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fixture_package import build_package_dir
from offline_db.integrations.package_context import FilePackageContext


@pytest.fixture()
def package_dir(tmp_path: Path) -> Path:
    return build_package_dir(tmp_path)


@pytest.fixture()
def package_context(package_dir: Path) -> FilePackageContext:
    return FilePackageContext(base_path=package_dir)
