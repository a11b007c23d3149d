from dataclasses import dataclass

import pytest

from pyvue.core.data import DataContext, ValueKind, fields_of, kind_of
from pyvue.exceptions import (
    NotSequenceError,
    SequenceNotFoundError,
    TypeMismatchError,
    UnknownDataFieldError,
)


@dataclass
class Todo:
    Text: str
    Done: bool = False


class Plain:
    def __init__(self):
        self.Message = "hi"
        self._private = "hidden"


@pytest.mark.parametrize(
    "value, kind",
    [
        ("a", ValueKind.STRING),
        (True, ValueKind.BOOL),
        (False, ValueKind.BOOL),
        (3, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ([1, 2], ValueKind.SEQUENCE),
        ((1,), ValueKind.SEQUENCE),
        ({"a": 1}, ValueKind.OPAQUE),
        (None, ValueKind.OPAQUE),
        (b"raw", ValueKind.OPAQUE),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_fields_of_sources():
    assert fields_of({"A": 1}) == {"A": 1}
    assert fields_of(Todo("x")) == {"Text": "x", "Done": False}
    assert fields_of(Plain()) == {"Message": "hi"}
    assert fields_of(lambda: {"B": 2}) == {"B": 2}
    assert fields_of(None) == {}


def test_fields_of_does_not_copy_source_mapping():
    source = {"A": 1}
    ctx = DataContext(source)
    ctx["B"] = 2
    assert "B" not in source


def test_typed_accessors():
    ctx = DataContext({"Name": "pyvue", "Show": True, "Items": ["a"], "Count": 2})
    assert ctx.get_str("Name") == "pyvue"
    assert ctx.get_bool("Show") is True
    assert ctx.get_sequence("Items") == ["a"]
    assert ctx.kind("Count") is ValueKind.NUMBER


def test_absent_field_names_the_field():
    ctx = DataContext({})
    with pytest.raises(UnknownDataFieldError) as exc:
        ctx.lookup("Missing")
    assert exc.value.field == "Missing"
    assert "Missing" in str(exc.value)


def test_type_mismatch_names_field_and_types():
    ctx = DataContext({"Count": 2})
    with pytest.raises(TypeMismatchError) as exc:
        ctx.get_str("Count")
    assert exc.value.field == "Count"
    assert exc.value.expected == "string"
    assert exc.value.actual == "int"


def test_sequence_errors():
    ctx = DataContext({"Name": "abc", "Map": {"a": 1}})
    with pytest.raises(SequenceNotFoundError):
        ctx.get_sequence("Items")
    # A string is not treated as a sequence of characters
    with pytest.raises(NotSequenceError):
        ctx.get_sequence("Name")
    with pytest.raises(NotSequenceError):
        ctx.get_sequence("Map")


def test_sequence_not_found_is_an_unknown_field():
    with pytest.raises(UnknownDataFieldError):
        DataContext({}).get_sequence("Items")
