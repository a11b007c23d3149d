"""Data context shared by one template execution."""

import dataclasses
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Dict, Iterator, MutableMapping

from pyvue.exceptions import (
    NotSequenceError,
    SequenceNotFoundError,
    TypeMismatchError,
    UnknownDataFieldError,
)


class ValueKind(Enum):
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    SEQUENCE = "sequence"
    OPAQUE = "opaque"


def kind_of(value: Any) -> ValueKind:
    """Classify a data value."""
    # bool before numbers: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.SEQUENCE
    return ValueKind.OPAQUE


def fields_of(source: Any) -> Dict[str, Any]:
    """Snapshot the fields of a component data source as a dict.

    Accepts a mapping, a dataclass instance, any object with a `__dict__`, or
    a zero-argument factory returning one of those. Values are not copied.
    """
    if source is None:
        return {}
    if callable(source) and not isinstance(source, type):
        source = source()
    if isinstance(source, Mapping):
        return dict(source)
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return {f.name: getattr(source, f.name) for f in dataclasses.fields(source)}
    try:
        return {k: v for k, v in vars(source).items() if not k.startswith("_")}
    except TypeError:
        raise TypeError(
            f"Unsupported data source: {type(source).__name__}"
        ) from None


class DataContext(MutableMapping[str, Any]):
    """String-keyed data with typed accessors.

    Accessors raise `UnknownDataFieldError` for absent fields and
    `TypeMismatchError` for fields of the wrong kind, both naming the field.
    """

    def __init__(self, fields: Any = None) -> None:
        self._fields: Dict[str, Any] = fields_of(fields)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"DataContext({self._fields!r})"

    def lookup(self, field: str) -> Any:
        try:
            return self._fields[field]
        except KeyError:
            raise UnknownDataFieldError(field) from None

    def kind(self, field: str) -> ValueKind:
        return kind_of(self.lookup(field))

    def get_str(self, field: str) -> str:
        value = self.lookup(field)
        if kind_of(value) is not ValueKind.STRING:
            raise TypeMismatchError(field, "string", value)
        return value

    def get_bool(self, field: str) -> bool:
        value = self.lookup(field)
        if kind_of(value) is not ValueKind.BOOL:
            raise TypeMismatchError(field, "bool", value)
        return value

    def get_sequence(self, field: str) -> Sequence:
        if field not in self._fields:
            raise SequenceNotFoundError(field)
        value = self._fields[field]
        if kind_of(value) is not ValueKind.SEQUENCE:
            raise NotSequenceError(field, value)
        return value


def stringify(value: Any) -> str:
    """Text form of a data value: booleans as `true`/`false`, None as empty."""
    kind = kind_of(value)
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)
