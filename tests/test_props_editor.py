"""
Tests for the Props Editor Bridge.

Covers:
- Input coercion per coarse type
- Field edits merged into the JSON buffer
- Unparseable buffers (edit is a no-op)
- Decoding with fallback to defaults
"""

import json
import pytest
from dataclasses import dataclass, field
from typing import List

from catalog.cells import Cell, EventHandler
from catalog.schema import TypeTag, derive_schema
from explorer.props_editor import PropsEditor, coerce_input, format_value


@dataclass
class FormProps:
    name: str
    count: int
    ratio: float = 1.0
    active: bool = False
    tags: List[str] = field(default_factory=list)
    level: Cell[int] = field(default_factory=lambda: Cell(0))
    on_submit: EventHandler[str] = field(default_factory=EventHandler)


_SUBMIT = EventHandler(print)
DEFAULTS = FormProps(name="default", count=1, on_submit=_SUBMIT)


@pytest.fixture
def editor():
    schema = derive_schema(FormProps)
    return PropsEditor(schema, schema.encode(DEFAULTS))


# ===========================================================================
# Coercion
# ===========================================================================

class TestCoerce:

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("abc", "abc"),
        ("4.5", "4.5"),
        ("", ""),
        ("9223372036854775807", 2 ** 63 - 1),
        ("-9223372036854775808", -(2 ** 63)),
        ("9223372036854775808", "9223372036854775808"),
    ])
    def test_integer(self, raw, expected):
        assert coerce_input(raw, TypeTag.INTEGER) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("4.5", 4.5),
        ("3", 3.0),
        ("-1e3", -1000.0),
        (".5", 0.5),
        ("1e400", "1e400"),
        ("NaN", "NaN"),
        ("inf", "inf"),
        ("x", "x"),
    ])
    def test_number(self, raw, expected):
        assert coerce_input(raw, TypeTag.NUMBER) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("false", False),
        ("True", "True"),
        ("yes", "yes"),
    ])
    def test_boolean(self, raw, expected):
        assert coerce_input(raw, TypeTag.BOOLEAN) == expected

    def test_other_tags_parse_json(self):
        assert coerce_input('{"a": 1}', TypeTag.OBJECT) == {"a": 1}
        assert coerce_input("[1, 2]", TypeTag.ARRAY) == [1, 2]
        assert coerce_input("null", TypeTag.STRING) is None

    def test_other_tags_fall_back_to_raw(self):
        assert coerce_input("hello world", TypeTag.STRING) == "hello world"
        assert coerce_input("{broken", TypeTag.OBJECT) == "{broken"

    def test_json_constants_rejected(self):
        assert coerce_input("NaN", TypeTag.STRING) == "NaN"
        assert coerce_input("Infinity", None) == "Infinity"

    def test_format_value(self):
        assert format_value("plain") == "plain"
        assert format_value(3) == "3"
        assert format_value(True) == "true"
        assert format_value(None) == "null"
        assert format_value(["a"]) == '["a"]'


# ===========================================================================
# Edits
# ===========================================================================

class TestEdit:

    def test_integer_edit(self, editor):
        assert editor.edit("count", "42")
        assert editor.values()["count"] == 42

    def test_bad_integer_stored_as_string(self, editor):
        editor.edit("count", "abc")
        assert editor.values()["count"] == "abc"

    def test_buffer_stays_pretty_printed(self, editor):
        editor.edit("name", "Ada")
        assert editor.text == json.dumps(editor.values(), indent=2)
        assert '\n  "name": "Ada"' in editor.text

    def test_key_order_preserved(self, editor):
        before = list(editor.values())
        editor.edit("active", "true")
        assert list(editor.values()) == before

    def test_cell_field_edited_through_inner_type(self, editor):
        editor.edit("level", "5")
        assert editor.values()["level"] == 5

    def test_unknown_field_parsed_as_json(self, editor):
        editor.edit("extra", "[1]")
        assert editor.values()["extra"] == [1]

    def test_unparseable_buffer_is_noop(self, editor):
        editor.reset("{not json")
        assert editor.edit("count", "1") is False
        assert editor.text == "{not json"

    def test_non_object_buffer_is_noop(self, editor):
        editor.reset("[1, 2]")
        assert editor.edit("count", "1") is False
        assert editor.text == "[1, 2]"
        assert editor.values() == {}

    def test_rows_in_display_order(self, editor):
        rows = editor.rows()
        assert [f.name for f, _ in rows] == [
            "count", "name", "active", "level", "on_submit", "ratio", "tags",
        ]
        assert dict((f.name, v) for f, v in rows)["name"] == "default"


# ===========================================================================
# Decoding
# ===========================================================================

class TestDecoded:

    def test_edits_reach_props(self, editor):
        editor.edit("count", "9")
        editor.edit("level", "3")
        props = editor.decoded(defaults=DEFAULTS)
        assert props.count == 9
        assert props.level == Cell(3)
        assert props.on_submit is _SUBMIT

    def test_mismatch_falls_back_to_defaults(self, editor):
        editor.edit("count", "abc")
        assert editor.decoded(defaults=DEFAULTS) is DEFAULTS

    def test_broken_buffer_falls_back_to_defaults(self, editor):
        editor.reset("")
        assert editor.decoded(defaults=DEFAULTS) is DEFAULTS
