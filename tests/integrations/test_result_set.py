"""Tests for the synthetic result set cursor."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

import pytest

from offline_db.integrations.result_set import Column, ResultSet

ROW_ID = UUID("a5420246-0a8e-e111-84a3-00155d054c03")


def _make_result() -> ResultSet:
    return ResultSet(
        [
            Column("Id", UUID),
            Column("Name", str),
            Column("Active", bool),
            Column("Level", int),
            Column("MetaData", bytes),
            Column("ModifiedOn", datetime),
            ("Note", str),
        ],
        [
            (ROW_ID, "en-US", True, 3, b"{}", datetime.min, None),
            (UUID(int=0), "ru-RU", False, 0, b"", datetime(2024, 1, 1), "second"),
        ],
    )


def test_read_walks_rows_forward_once() -> None:
    result = _make_result()

    assert result.has_rows
    assert result.read()
    assert result.get_uuid(0) == ROW_ID
    assert result.read()
    assert result.get_str(1) == "ru-RU"
    assert not result.read()
    assert not result.read()


def test_typed_accessors() -> None:
    result = _make_result()
    result.read()

    assert result.get_bool(2) is True
    assert result.get_int(3) == 3
    assert result.get_bytes(4) == b"{}"
    assert result.get_datetime(5) == datetime.min
    assert result.is_null(6)
    assert result["Name"] == "en-US"
    assert result[0] == ROW_ID
    assert result.get_values()[:2] == (ROW_ID, "en-US")


def test_typed_accessor_rejects_wrong_type() -> None:
    result = _make_result()
    result.read()

    with pytest.raises(TypeError):
        result.get_str(0)
    with pytest.raises(TypeError):
        result.get_int(2)


def test_column_lookup() -> None:
    result = _make_result()

    assert result.field_count == 7
    assert result.get_name(1) == "Name"
    assert result.get_ordinal("ModifiedOn") == 5
    assert result.get_ordinal("modifiedon") == 5
    with pytest.raises(IndexError):
        result.get_ordinal("Missing")


def test_values_require_current_row() -> None:
    result = _make_result()

    with pytest.raises(RuntimeError):
        result.get_value(0)
    result.fetchall()
    with pytest.raises(RuntimeError):
        result.get_value(0)


def test_closed_result_cannot_be_read() -> None:
    with _make_result() as result:
        assert result.read()

    assert result.is_closed
    with pytest.raises(RuntimeError):
        result.read()


def test_empty_result() -> None:
    result = ResultSet.empty()

    assert not result.has_rows
    assert result.field_count == 0
    assert result.description is None
    assert not result.read()
    assert result.fetchone() is None


def test_fetch_helpers() -> None:
    result = _make_result()

    assert result.fetchmany(1)[0][1] == "en-US"
    assert result.as_dicts()[0]["Note"] == "second"
    assert result.fetchall() == []


def test_description_follows_columns() -> None:
    description = _make_result().description

    assert description is not None
    assert [entry[0] for entry in description][:3] == ["Id", "Name", "Active"]
    assert description[0][1] is UUID


def test_rows_must_match_column_count() -> None:
    with pytest.raises(ValueError):
        ResultSet([Column("Id", UUID)], [(ROW_ID, "extra")])
