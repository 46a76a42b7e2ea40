"""
Props Editor Bridge: a live JSON props buffer edited field by field.

    editor = PropsEditor(schema, story.props_json)
    editor.edit("count", "42")      # buffer now holds "count": 42
    editor.edit("count", "abc")     # buffer now holds "count": "abc"
    props = editor.decoded(defaults=first_story_props)

The buffer lives in a reaktiv Signal so previews re-render on every edit.
Edits never raise: an unparseable buffer leaves the edit a no-op, and a
buffer that no longer matches the schema decodes to the defaults.
"""

import json
import logging
import re
from typing import Any, List, Optional, Tuple

from reaktiv import Signal

from catalog.schema import DecodeFailure, Schema, SchemaField, TypeTag


logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1
_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _reject_constant(name):
    raise ValueError(f"{name} is not valid JSON")


def _strict_loads(text: str):
    """JSON parse that rejects NaN / Infinity literals."""
    return json.loads(text, parse_constant=_reject_constant)


def coerce_input(raw: str, type_tag: Optional[TypeTag]) -> Any:
    """Turn raw editor text into a JSON value for a field of `type_tag`.

    boolean  exactly "true" / "false"
    integer  optional sign followed by digits, within 64-bit signed range
    number   a finite decimal literal
    other    strict JSON (objects, arrays, ...), else the raw string
    Every failed parse falls back to the raw string.
    """
    if type_tag is TypeTag.BOOLEAN:
        if raw == "true":
            return True
        if raw == "false":
            return False
        return raw
    if type_tag is TypeTag.INTEGER:
        if _INTEGER.fullmatch(raw):
            value = int(raw)
            if _INT64_MIN <= value <= _INT64_MAX:
                return value
        return raw
    if type_tag is TypeTag.NUMBER:
        if _NUMBER.fullmatch(raw):
            value = float(raw)
            if value not in (float("inf"), float("-inf")):
                return value
        return raw
    try:
        return _strict_loads(raw)
    except ValueError:
        return raw


def format_value(value: Any) -> str:
    """Editor text for a JSON value: strings bare, everything else as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class PropsEditor:
    """
    Owns one props buffer and applies field edits against a schema.

    `buffer` is a reaktiv Signal holding the pretty-printed JSON text.
    """

    def __init__(self, schema: Schema, props_json: str):
        self.schema = schema
        self.buffer = Signal(props_json)

    @property
    def text(self) -> str:
        return self.buffer()

    def reset(self, props_json: str) -> None:
        """Replace the buffer, e.g. when another story is selected."""
        self.buffer.set(props_json)

    def edit(self, field_name: str, raw: str) -> bool:
        """Coerce `raw` for `field_name` and merge it into the buffer.

        Returns False (buffer untouched) when the buffer is not a JSON object.
        """
        try:
            data = _strict_loads(self.buffer())
        except ValueError:
            logger.debug("Props buffer unparseable, ignoring edit of %s", field_name)
            return False
        if not isinstance(data, dict):
            logger.debug("Props buffer is not an object, ignoring edit of %s", field_name)
            return False

        field = self.schema.field(field_name)
        tag = field.type_tag if field is not None else None
        data[field_name] = coerce_input(raw, tag)
        self.buffer.set(json.dumps(data, indent=2, ensure_ascii=False))
        return True

    def values(self) -> dict:
        """Current buffer as a dict, or {} when it does not parse."""
        try:
            data = _strict_loads(self.buffer())
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def rows(self) -> List[Tuple[SchemaField, Any]]:
        """(field, current value) pairs in display order."""
        values = self.values()
        return [(f, values.get(f.name)) for f in self.schema.display_fields()]

    def decoded(self, defaults=None):
        """Decode the buffer against the schema, falling back to `defaults`."""
        try:
            return self.schema.decode(self.buffer(), defaults=defaults)
        except DecodeFailure as e:
            logger.debug("Props buffer rejected, using defaults: %s", e)
            return defaults
