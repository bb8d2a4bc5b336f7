"""Tests for the mock connection, command and cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

import pytest

from offline_db.core.errors import UnsupportedOperation
from offline_db.integrations.mock_driver import (
    ConnectionState,
    MockCommand,
    MockConnection,
    connect,
)
from offline_db.integrations.parameters import Parameter
from offline_db.integrations.result_set import Column, ResultSet
from offline_db.shapes.base import ExecutionMode, StatementCommand


@dataclass
class _ExecutorStub:
    result: ResultSet | None = None
    calls: list[tuple[str | None, dict[str, Any], ExecutionMode]] = field(default_factory=list)

    def __call__(self, command: StatementCommand, mode: ExecutionMode) -> ResultSet:
        self.calls.append((command.text, command.parameters.as_dict(), mode))
        return self.result if self.result is not None else ResultSet.empty()


def _single(value: Any, type_: type = object) -> ResultSet:
    return ResultSet([Column("Value", type_)], [(value,)])


def test_connection_state_machine() -> None:
    connection = MockConnection(_ExecutorStub(), "Server=nowhere")

    assert connection.state is ConnectionState.CLOSED
    connection.open()
    assert connection.state is ConnectionState.OPEN
    connection.close()
    assert connection.state is ConnectionState.CLOSED
    assert connection.database == "creatio"
    assert connection.connection_string == "Server=nowhere"


def test_connect_returns_open_connection() -> None:
    assert connect(_ExecutorStub()).state is ConnectionState.OPEN


@pytest.mark.parametrize(
    "operation",
    ["begin_transaction", "commit", "rollback"],
)
def test_transactions_are_unsupported(operation: str) -> None:
    connection = connect(_ExecutorStub())

    with pytest.raises(UnsupportedOperation) as excinfo:
        getattr(connection, operation)()

    assert operation in excinfo.value.operation
    assert isinstance(excinfo.value, NotImplementedError)


def test_other_unsupported_capabilities() -> None:
    connection = connect(_ExecutorStub())
    command = connection.create_command("SELECT 1")

    with pytest.raises(UnsupportedOperation):
        connection.change_database("other")
    with pytest.raises(UnsupportedOperation):
        connection.get_schema("Tables")
    with pytest.raises(UnsupportedOperation):
        connection.server_version
    with pytest.raises(UnsupportedOperation):
        connection.data_source
    with pytest.raises(UnsupportedOperation):
        command.create_parameter()
    with pytest.raises(UnsupportedOperation):
        command.split_batches("SELECT 1; SELECT 2")
    with pytest.raises(UnsupportedOperation):
        connection.cursor().executemany("SELECT 1", [])


def test_command_binds_parameters() -> None:
    executor = _ExecutorStub()
    connection = connect(executor)

    command = connection.create_command("SELECT @P1", {"P1": 5}, timeout=30)
    command.parameters.add(Parameter("P2", "x"))
    command.execute_reader()

    assert command.timeout == 30
    assert command.connection is connection
    assert command.command_type == "Text"
    assert executor.calls == [("SELECT @P1", {"P1": 5, "P2": "x"}, ExecutionMode.READER)]


def test_execute_non_query_reads_first_cell() -> None:
    executor = _ExecutorStub(result=_single(1, int))
    command = MockCommand(executor=executor, text="UPDATE t SET x = 1")

    assert command.execute_non_query() == 1
    assert executor.calls[0][2] is ExecutionMode.NON_QUERY


def test_execute_non_query_defaults_to_zero() -> None:
    command = MockCommand(executor=_ExecutorStub(), text="UPDATE t SET x = 1")

    assert command.execute_non_query() == 0


def test_execute_non_query_rejects_non_integer_cell() -> None:
    command = MockCommand(executor=_ExecutorStub(result=_single(UUID(int=7), UUID)), text="UPDATE t SET x = 1")

    with pytest.raises(TypeError):
        command.execute_non_query()


def test_execute_scalar() -> None:
    value = UUID(int=7)
    executor = _ExecutorStub(result=_single(value, UUID))
    command = MockCommand(executor=executor, text="SELECT id FROM t")

    assert command.execute_scalar() == value
    assert executor.calls[0][2] is ExecutionMode.SCALAR
    assert MockCommand(executor=_ExecutorStub(), text="SELECT id FROM t").execute_scalar() is None


def test_prepare_and_cancel_are_noops() -> None:
    executor = _ExecutorStub()
    command = MockCommand(executor=executor, text="SELECT 1")

    command.prepare()
    command.cancel()

    assert executor.calls == []


def test_cursor_binds_positional_parameters() -> None:
    executor = _ExecutorStub(result=ResultSet([Column("Name", str)], [("a",), ("b",)]))
    connection = connect(executor)

    with connection.cursor() as cursor:
        cursor.execute("SELECT name FROM t WHERE a = @P1 AND b = @P2", ("x", 2))
        assert cursor.rowcount == 2
        assert cursor.description is not None and cursor.description[0][0] == "Name"
        assert cursor.fetchone() == ("a",)
        assert cursor.fetchall() == [("b",)]

    assert executor.calls[0][1] == {"P1": "x", "P2": 2}


def test_cursor_requires_execute_before_fetch() -> None:
    cursor = connect(_ExecutorStub()).cursor()

    assert cursor.description is None
    assert cursor.rowcount == -1
    with pytest.raises(RuntimeError):
        cursor.fetchone()
