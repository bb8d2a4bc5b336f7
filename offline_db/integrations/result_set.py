"""In-memory result set returned by every emulated statement.

A ``ResultSet`` is both the table and its forward-only cursor: callers advance
with :meth:`ResultSet.read` and pull values from the current row, the way the
rules engine consumes a data reader. DB-API style ``fetchone``/``fetchall`` are
provided for Python callers.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Column:
    name: str
    type: type = object


class ResultSet:
    """Forward-only, read-once table of synthetic rows."""

    def __init__(
        self,
        columns: Sequence[Column | tuple[str, type]] = (),
        rows: Sequence[Sequence[Any]] = (),
    ) -> None:
        self._columns: tuple[Column, ...] = tuple(
            column if isinstance(column, Column) else Column(*column) for column in columns
        )
        width = len(self._columns)
        prepared: list[tuple[Any, ...]] = []
        for row in rows:
            values = tuple(row)
            if len(values) != width:
                raise ValueError(f"Row has {len(values)} values but result set has {width} columns")
            prepared.append(values)
        self._rows: tuple[tuple[Any, ...], ...] = tuple(prepared)
        self._position = -1
        self._closed = False

    @classmethod
    def empty(cls) -> "ResultSet":
        """Result with no columns and no rows."""

        return cls()

    @classmethod
    def single_row(cls, columns: Sequence[Column | tuple[str, type]], values: Sequence[Any]) -> "ResultSet":
        return cls(columns, [values])

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def field_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def has_rows(self) -> bool:
        return bool(self._rows)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def description(self) -> tuple[tuple[Any, ...], ...] | None:
        """PEP 249 column description, or None when the result has no columns."""

        if not self._columns:
            return None
        return tuple((column.name, column.type, None, None, None, None, None) for column in self._columns)

    def read(self) -> bool:
        """Advance to the next row; return False once rows are exhausted."""

        self._ensure_open()
        if self._position < len(self._rows):
            self._position += 1
        return self._position < len(self._rows)

    def close(self) -> None:
        self._closed = True

    def get_name(self, ordinal: int) -> str:
        return self._columns[ordinal].name

    def get_ordinal(self, name: str) -> int:
        for index, column in enumerate(self._columns):
            if column.name == name:
                return index
        lowered = name.lower()
        for index, column in enumerate(self._columns):
            if column.name.lower() == lowered:
                return index
        raise IndexError(f"Column '{name}' not found in result set")

    def get_value(self, ordinal: int) -> Any:
        return self._current_row()[ordinal]

    def get_values(self) -> tuple[Any, ...]:
        return self._current_row()

    def is_null(self, ordinal: int) -> bool:
        return self.get_value(ordinal) is None

    def get_uuid(self, ordinal: int) -> UUID:
        return self._typed(ordinal, UUID)

    def get_str(self, ordinal: int) -> str:
        return self._typed(ordinal, str)

    def get_int(self, ordinal: int) -> int:
        value = self.get_value(ordinal)
        # bool is an int subclass but never a valid integer column value here
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Column {ordinal} holds {type(value).__name__}, not int")
        return value

    def get_bool(self, ordinal: int) -> bool:
        return self._typed(ordinal, bool)

    def get_bytes(self, ordinal: int) -> bytes:
        return self._typed(ordinal, bytes)

    def get_datetime(self, ordinal: int) -> datetime:
        return self._typed(ordinal, datetime)

    def fetchone(self) -> tuple[Any, ...] | None:
        if not self.read():
            return None
        return self.get_values()

    def fetchmany(self, size: int = 1) -> list[tuple[Any, ...]]:
        rows: list[tuple[Any, ...]] = []
        while len(rows) < size:
            row = self.fetchone()
            if row is None:
                break
            rows.append(row)
        return rows

    def fetchall(self) -> list[tuple[Any, ...]]:
        rows: list[tuple[Any, ...]] = []
        while self.read():
            rows.append(self.get_values())
        return rows

    def as_dicts(self) -> list[dict[str, Any]]:
        """Return the remaining rows as column-name keyed dictionaries."""

        names = [column.name for column in self._columns]
        return [dict(zip(names, row)) for row in self.fetchall()]

    def _typed(self, ordinal: int, expected: type) -> Any:
        value = self.get_value(ordinal)
        if not isinstance(value, expected):
            raise TypeError(
                f"Column {ordinal} holds {type(value).__name__}, not {expected.__name__}"
            )
        return value

    def _current_row(self) -> tuple[Any, ...]:
        self._ensure_open()
        if self._position < 0:
            raise RuntimeError("read() must be called before accessing row values")
        if self._position >= len(self._rows):
            raise RuntimeError("No current row; the result set is exhausted")
        return self._rows[self._position]

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Result set is closed")

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            key = self.get_ordinal(key)
        return self.get_value(key)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        while self.read():
            yield self.get_values()

    def __enter__(self) -> "ResultSet":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        names = ", ".join(column.name for column in self._columns)
        return f"ResultSet(columns=[{names}], rows={len(self._rows)})"


__all__ = ["Column", "ResultSet"]
