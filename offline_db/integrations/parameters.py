"""Parameter bindings attached to a single mock command."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from offline_db.core.errors import ParameterNotFoundError


@dataclass(slots=True, eq=False)
class Parameter:
    """Named, opaque value bound to a command."""

    name: str
    value: Any = None

    def __repr__(self) -> str:
        return f"Parameter(name={self.name!r}, value={self.value!r})"


class ParameterCollection:
    """Ordered collection of parameters addressable by ordinal or exact name.

    Name lookups are case-sensitive and uniqueness is not enforced; the first
    parameter with a matching name wins.
    """

    def __init__(self, parameters: Iterable[Parameter] | None = None) -> None:
        self._items: list[Parameter] = []
        if parameters is not None:
            self.add_range(parameters)

    def add(self, parameter: Parameter | str, value: Any = None) -> int:
        """Append *parameter* (or a new one named *parameter*) and return its ordinal."""

        if isinstance(parameter, str):
            parameter = Parameter(parameter, value)
        elif not isinstance(parameter, Parameter):
            raise TypeError(f"Expected Parameter, got {type(parameter).__name__}")
        self._items.append(parameter)
        return len(self._items) - 1

    def add_range(self, parameters: Iterable[Parameter]) -> None:
        for parameter in parameters:
            self.add(parameter)

    def insert(self, index: int, parameter: Parameter) -> None:
        self._items.insert(index, parameter)

    def remove(self, parameter: Parameter) -> None:
        self._items.remove(parameter)

    def remove_at(self, key: int | str) -> None:
        if isinstance(key, str):
            index = self._require_index(key)
        else:
            index = key
        del self._items[index]

    def clear(self) -> None:
        self._items.clear()

    def index_of(self, key: Parameter | str) -> int:
        if isinstance(key, Parameter):
            for index, item in enumerate(self._items):
                if item is key:
                    return index
            return -1
        for index, item in enumerate(self._items):
            if item.name == key:
                return index
        return -1

    def contains(self, key: Parameter | str) -> bool:
        return self.index_of(key) >= 0

    def get_value(self, name: str) -> Any:
        return self[name].value

    def as_dict(self) -> dict[str, Any]:
        """Return name/value pairs; later duplicates do not override earlier ones."""

        values: dict[str, Any] = {}
        for item in self._items:
            values.setdefault(item.name, item.value)
        return values

    def _require_index(self, name: str) -> int:
        index = self.index_of(name)
        if index < 0:
            raise ParameterNotFoundError(name)
        return index

    def __getitem__(self, key: int | str) -> Parameter:
        if isinstance(key, str):
            return self._items[self._require_index(key)]
        return self._items[key]

    def __setitem__(self, key: int | str, parameter: Parameter) -> None:
        if isinstance(key, str):
            self._items[self._require_index(key)] = parameter
        else:
            self._items[key] = parameter

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (Parameter, str)):
            return self.contains(key)
        return False

    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ParameterCollection({self._items!r})"


__all__ = ["Parameter", "ParameterCollection"]
