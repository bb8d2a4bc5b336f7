"""Mock database driver whose execution is redirected to a Python callable.

No socket is ever opened. Every command, whatever execution mode it is run in,
is answered by a single ``execute(command, mode)`` hook, normally a
``RequestDispatcher``. Capabilities the rules engine never needs offline
(transactions, batches, schema introspection) raise ``UnsupportedOperation``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from offline_db.core.errors import UnsupportedOperation
from offline_db.integrations.parameters import Parameter, ParameterCollection
from offline_db.integrations.result_set import ResultSet
from offline_db.shapes.base import ExecutionMode, StatementCommand

LOGGER = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "creatio"

apilevel = "2.0"
threadsafety = 1
paramstyle = "named"


class CommandExecutor(Protocol):
    """Answers a command executed in the given mode."""

    def __call__(self, command: StatementCommand, mode: ExecutionMode) -> ResultSet:  # pragma: no cover - interface
        ...


class ConnectionState(Enum):
    CLOSED = "Closed"
    OPEN = "Open"


@dataclass(eq=False)
class MockCommand:
    """Statement text plus bindings, executed through the connection's hook."""

    executor: CommandExecutor
    text: str | None = None
    timeout: int = 0
    parameters: ParameterCollection = field(default_factory=ParameterCollection)
    connection: "MockConnection | None" = None
    command_type: str = "Text"

    def prepare(self) -> None:
        LOGGER.debug("MockCommand.prepare was called, no action taken")

    def cancel(self) -> None:
        LOGGER.debug("MockCommand.cancel was called, no action taken")

    def create_parameter(self) -> Parameter:
        raise UnsupportedOperation("MockCommand.create_parameter")

    def split_batches(self, text: str) -> list[str]:
        raise UnsupportedOperation("MockCommand.split_batches")

    def execute_non_query(self) -> int:
        """Return the affected-rows count from row 0, column 0 (0 when empty)."""

        LOGGER.debug("Executing non-query command: %s", self.text)
        with self.executor(self, ExecutionMode.NON_QUERY) as result:
            if result.read():
                return result.get_int(0)
            return 0

    def execute_scalar(self) -> Any:
        """Return row 0, column 0, or None when the result is empty."""

        LOGGER.debug("Executing scalar command: %s", self.text)
        with self.executor(self, ExecutionMode.SCALAR) as result:
            if result.read():
                return result.get_value(0)
            return None

    def execute_reader(self) -> ResultSet:
        LOGGER.debug("Executing reader command: %s", self.text)
        return self.executor(self, ExecutionMode.READER)


class MockConnection:
    """Connection with an open/closed state and nothing behind it."""

    def __init__(self, executor: CommandExecutor, connection_string: str = "") -> None:
        self._executor = executor
        self._state = ConnectionState.CLOSED
        self.connection_string = connection_string

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def database(self) -> str:
        return DEFAULT_DATABASE_NAME

    @property
    def data_source(self) -> str:
        raise UnsupportedOperation("MockConnection.data_source")

    @property
    def server_version(self) -> str:
        raise UnsupportedOperation("MockConnection.server_version")

    def open(self) -> None:
        self._state = ConnectionState.OPEN

    def close(self) -> None:
        self._state = ConnectionState.CLOSED

    def create_command(
        self,
        text: str | None = None,
        parameters: Mapping[str, Any] | Sequence[Parameter] | None = None,
        timeout: int = 0,
    ) -> MockCommand:
        command = MockCommand(executor=self._executor, text=text, timeout=timeout, connection=self)
        if parameters:
            _bind(command.parameters, parameters)
        return command

    def cursor(self) -> "MockCursor":
        return MockCursor(self)

    def begin_transaction(self, isolation_level: Any = None) -> Any:
        raise UnsupportedOperation("MockConnection.begin_transaction")

    def commit(self) -> None:
        raise UnsupportedOperation("MockConnection.commit")

    def rollback(self) -> None:
        raise UnsupportedOperation("MockConnection.rollback")

    def change_database(self, database_name: str) -> None:
        raise UnsupportedOperation("MockConnection.change_database")

    def get_schema(self, collection_name: str | None = None, restrictions: Any = None) -> Any:
        raise UnsupportedOperation("MockConnection.get_schema")

    def __enter__(self) -> "MockConnection":
        if self._state is ConnectionState.CLOSED:
            self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class MockCursor:
    """PEP 249 flavoured cursor over :class:`MockConnection`.

    Mapping parameters bind by name; sequence parameters bind as ``P1..Pn``,
    the rules engine's positional naming.
    """

    arraysize = 1

    def __init__(self, connection: MockConnection) -> None:
        self.connection = connection
        self._result: ResultSet | None = None
        self._closed = False

    @property
    def description(self) -> tuple[tuple[Any, ...], ...] | None:
        return None if self._result is None else self._result.description

    @property
    def rowcount(self) -> int:
        return -1 if self._result is None else self._result.row_count

    def execute(self, operation: str, parameters: Mapping[str, Any] | Sequence[Any] | None = None) -> "MockCursor":
        if self._closed:
            raise RuntimeError("Cursor is closed")
        command = self.connection.create_command(operation)
        if parameters:
            if isinstance(parameters, Mapping):
                _bind(command.parameters, parameters)
            else:
                for position, value in enumerate(parameters, start=1):
                    command.parameters.add(f"P{position}", value)
        self._result = command.execute_reader()
        return self

    def executemany(self, operation: str, seq_of_parameters: Sequence[Any]) -> None:
        raise UnsupportedOperation("MockCursor.executemany")

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._require_result().fetchone()

    def fetchmany(self, size: int | None = None) -> list[tuple[Any, ...]]:
        return self._require_result().fetchmany(size or self.arraysize)

    def fetchall(self) -> list[tuple[Any, ...]]:
        return self._require_result().fetchall()

    def close(self) -> None:
        if self._result is not None:
            self._result.close()
        self._closed = True

    def setinputsizes(self, sizes: Any) -> None:
        pass

    def setoutputsize(self, size: Any, column: Any = None) -> None:
        pass

    def _require_result(self) -> ResultSet:
        if self._result is None:
            raise RuntimeError("execute() must be called before fetching rows")
        return self._result

    def __enter__(self) -> "MockCursor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _bind(collection: ParameterCollection, parameters: Mapping[str, Any] | Sequence[Parameter]) -> None:
    if isinstance(parameters, Mapping):
        for name, value in parameters.items():
            collection.add(str(name), value)
    else:
        collection.add_range(parameters)


def connect(executor: CommandExecutor, connection_string: str = "") -> MockConnection:
    """Return an opened connection answered by *executor*."""

    connection = MockConnection(executor, connection_string)
    connection.open()
    return connection


__all__ = [
    "CommandExecutor",
    "ConnectionState",
    "MockCommand",
    "MockConnection",
    "MockCursor",
    "connect",
]
