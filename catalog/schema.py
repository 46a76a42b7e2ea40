"""
Schema Deriver: turns a props dataclass into an editable field schema and
a serializable shadow structure.

Every dataclass field is classified into one of three kinds:

  cell    Cell[T] / ReadCell[T] / WriteCell[T]. Editable through T.
          Encoding unwraps the current value, decoding re-wraps it.
  opaque  EventHandler, Callback, Element, ReadOnlyCell[T], Optional[...]
          of any cell/handler/Element, list[Attribute]. Not editable.
          Encoded as null, decoded from the defaults (the first story).
  value   Everything else. Editable, copied by value.

The shadow structure is a generated dataclass with one field per props
field: T for cells, None for opaque fields, the declared type otherwise.
A pydantic TypeAdapter over it does the JSON encoding, validation and
JSON Schema export. Schema.encode() / Schema.decode() are the round-trip
pair used by the props editor and the render path.
"""

import uuid
import types
import dataclasses
import functools
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, Optional, Union, get_args, get_origin, get_type_hints

from pydantic import ConfigDict, TypeAdapter, ValidationError

from catalog.cells import (
    Attribute, Callback, Cell, EDITABLE_CELLS, Element, EventHandler, ReadOnlyCell,
)


# Sentinel for "no default provided"
_MISSING = object()

_NONE_TYPE = type(None)


class DecodeFailure(Exception):
    """Raised when a props buffer does not match the shadow structure."""

    def __init__(self, props_type, reason, errors=()):
        self.props_type = props_type
        self.reason = reason
        self.errors = list(errors)
        name = getattr(props_type, "__name__", str(props_type))
        super().__init__(f"Cannot decode {name}: {reason}")


class FieldKind(str, Enum):
    VALUE = "value"
    CELL = "cell"
    OPAQUE = "opaque"


class TypeTag(str, Enum):
    """Coarse type of a field, as shown by the props editor."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True)
class SchemaField:
    """One editable (or placeholder) property of a component.

    `default` is the field's default value (a default_factory is called
    once to produce it); `has_default` tells it apart from a None default.
    """
    name: str
    type_tag: TypeTag
    required: bool
    kind: FieldKind = FieldKind.VALUE
    description: Optional[str] = None
    reference: Optional[str] = None
    type_name: str = ""
    shadow_type: Any = Any
    declared_type: Any = Any
    has_default: bool = False
    default: Any = None

    @property
    def editable(self) -> bool:
        return self.kind is not FieldKind.OPAQUE


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def _is_union(tp) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def _non_none_args(tp) -> list:
    return [a for a in get_args(tp) if a is not _NONE_TYPE]


def _is_optional(tp) -> bool:
    return _is_union(tp) and _NONE_TYPE in get_args(tp)


def _plain_class(tp):
    """Return the runtime class behind a (possibly parameterized) annotation."""
    origin = get_origin(tp)
    if origin is not None:
        return origin if isinstance(origin, type) else None
    return tp if isinstance(tp, type) else None


def _is_handle(tp) -> bool:
    cls = _plain_class(tp)
    return cls is not None and issubclass(cls, (EventHandler, Callback, Element))


def classify(declared) -> tuple:
    """Classify a declared annotation. Returns (FieldKind, shadow_type)."""
    if _is_union(declared):
        inner = _non_none_args(declared)
        if len(inner) == 1 and len(get_args(declared)) == 2:
            cls = _plain_class(inner[0])
            if cls is not None and (issubclass(cls, Cell) or _is_handle(inner[0])):
                return FieldKind.OPAQUE, _NONE_TYPE
        return FieldKind.VALUE, declared

    cls = _plain_class(declared)
    if cls is not None:
        if issubclass(cls, ReadOnlyCell):
            return FieldKind.OPAQUE, _NONE_TYPE
        if _is_handle(declared):
            return FieldKind.OPAQUE, _NONE_TYPE
        if cls in EDITABLE_CELLS:
            args = get_args(declared)
            return FieldKind.CELL, (args[0] if args else Any)
        if cls is list and get_args(declared) == (Attribute,):
            return FieldKind.OPAQUE, _NONE_TYPE
    return FieldKind.VALUE, declared


def _type_name(tp) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def describe_type(tp) -> tuple:
    """Walk a shadow type. Returns (TypeTag, reference name, display name)."""
    if tp is Any:
        return TypeTag.UNKNOWN, None, "unknown"
    if tp is _NONE_TYPE or tp is None:
        return TypeTag.NULL, None, "null"

    if _is_union(tp):
        members = [describe_type(a) for a in get_args(tp)]
        tagged = [m for m in members if m[0] is not TypeTag.NULL] or members
        tag, ref, _ = tagged[0]
        return tag, ref, " | ".join(m[2] for m in members)

    origin = get_origin(tp)
    if origin is Literal:
        return TypeTag.ENUM, None, "enum"
    if origin in (list, tuple, set, frozenset):
        return TypeTag.ARRAY, None, "array"
    if origin is dict:
        return TypeTag.OBJECT, None, "object"

    if isinstance(tp, type):
        if issubclass(tp, bool):
            return TypeTag.BOOLEAN, None, "bool"
        if issubclass(tp, Enum):
            return TypeTag.ENUM, tp.__name__, tp.__name__
        if issubclass(tp, int):
            return TypeTag.INTEGER, None, "integer"
        if issubclass(tp, (float, Decimal)):
            ref = "Decimal" if issubclass(tp, Decimal) else None
            return TypeTag.NUMBER, ref, ref or "number"
        if issubclass(tp, str):
            return TypeTag.STRING, None, "string"
        if issubclass(tp, (datetime, date, uuid.UUID)):
            return TypeTag.STRING, tp.__name__, tp.__name__
        if dataclasses.is_dataclass(tp):
            return TypeTag.OBJECT, tp.__name__, tp.__name__
        if issubclass(tp, (list, tuple, set, frozenset)):
            return TypeTag.ARRAY, None, "array"
        if issubclass(tp, dict):
            return TypeTag.OBJECT, None, "object"

    return TypeTag.UNKNOWN, _type_name(tp), _type_name(tp)


# ---------------------------------------------------------------------------
# Shadow type
# ---------------------------------------------------------------------------

def _absent():
    return _MISSING


def _shadow_dataclass(props_type, fields):
    """Generate the shadow dataclass pydantic encodes and validates.

    Fields the props type defaults are filled with _MISSING when the buffer
    omits them, so the props constructor applies its own default.
    """
    specs = []
    for f in fields:
        if f.kind is FieldKind.OPAQUE:
            specs.append((f.name, _NONE_TYPE, dataclasses.field(default=None)))
        elif f.has_default:
            specs.append((f.name, f.shadow_type, dataclasses.field(default_factory=_absent)))
        elif _is_optional(f.shadow_type):
            specs.append((f.name, f.shadow_type, dataclasses.field(default=None)))
        else:
            specs.append((f.name, f.shadow_type))
    return dataclasses.make_dataclass(
        props_type.__name__,
        specs,
        kw_only=True,
        namespace={"__pydantic_config__": ConfigDict(arbitrary_types_allowed=True)},
    )


def _describe_errors(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _hints(cls) -> dict:
    # get_type_hints resolves forward refs and includes parent annotations
    try:
        return get_type_hints(cls)
    except Exception:
        return dict(getattr(cls, "__annotations__", {}))


def _field_default(f):
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return _MISSING


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class Schema:
    """
    Ordered, immutable description of a props dataclass.

    Usage:
        schema = derive_schema(ButtonProps)
        text = schema.encode(ButtonProps(label="Hi"))
        props = schema.decode(text, defaults=first_story_props)
    """

    def __init__(self, props_type, fields):
        self.props_type = props_type
        self.fields = tuple(fields)
        self._by_name = {f.name: f for f in self.fields}
        self.shadow_type = _shadow_dataclass(props_type, self.fields)
        self._adapter = TypeAdapter(self.shadow_type)

    def __repr__(self):
        return f"Schema({self.props_type.__name__}, {[f.name for f in self.fields]})"

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def field(self, name: str) -> Optional[SchemaField]:
        return self._by_name.get(name)

    def names(self) -> list:
        return [f.name for f in self.fields]

    def display_fields(self) -> list:
        """Required fields first, then alphabetical. Display order only."""
        return sorted(self.fields, key=lambda f: (not f.required, f.name))

    # ── Shadow round-trip ─────────────────────────────────────────

    def shadow(self, props):
        """Project a props instance onto its shadow dataclass."""
        values = {}
        for f in self.fields:
            value = getattr(props, f.name)
            if f.kind is FieldKind.OPAQUE:
                values[f.name] = None
            elif f.kind is FieldKind.CELL and isinstance(value, Cell):
                values[f.name] = value.get()
            else:
                values[f.name] = value
        return self.shadow_type(**values)

    def encode(self, props) -> str:
        """Serialize props to the pretty-printed props buffer.

        Raises ValueError (PydanticSerializationError) if a field holds a
        value JSON cannot represent.
        """
        return self._adapter.dump_json(self.shadow(props), indent=2).decode("utf-8")

    def decode(self, text: str, defaults=None):
        """Rebuild a props instance from a props buffer.

        Opaque fields are always taken from `defaults` (the first story's
        props). Raises DecodeFailure when the buffer does not match.
        """
        try:
            shadow = self._adapter.validate_json(text)
        except ValidationError as e:
            raise DecodeFailure(self.props_type, _describe_errors(e), e.errors())

        kwargs = {}
        for f in self.fields:
            if f.kind is FieldKind.OPAQUE:
                if defaults is not None:
                    kwargs[f.name] = getattr(defaults, f.name)
                elif not f.has_default:
                    kwargs[f.name] = None
                continue

            value = getattr(shadow, f.name)
            if value is _MISSING:
                continue
            if f.kind is FieldKind.CELL:
                value = _plain_class(f.declared_type)(value)
            kwargs[f.name] = value

        try:
            return self.props_type(**kwargs)
        except TypeError as e:
            raise DecodeFailure(self.props_type, str(e))

    # ── JSON Schema export ────────────────────────────────────────

    def to_json_schema(self) -> dict:
        """Describe the shadow structure as a JSON Schema dict."""
        schema = self._adapter.json_schema()
        schema["title"] = self.props_type.__name__
        schema["required"] = [f.name for f in self.fields if f.required]
        properties = schema.get("properties", {})
        for f in self.fields:
            if f.description and f.name in properties:
                properties[f.name]["description"] = f.description
        return schema


def _derive_fields(props_type) -> list:
    hints = _hints(props_type)
    fields = []
    for f in dataclasses.fields(props_type):
        if not f.init or f.name.startswith("_"):
            continue
        declared = hints.get(f.name, Any)
        kind, shadow_type = classify(declared)
        if kind is FieldKind.OPAQUE:
            tag, ref, type_name = TypeTag.NULL, None, "null"
        else:
            tag, ref, type_name = describe_type(shadow_type)
        default = _field_default(f)
        fields.append(SchemaField(
            name=f.name,
            type_tag=tag,
            required=default is _MISSING,
            kind=kind,
            description=f.metadata.get("description") if f.metadata else None,
            reference=ref,
            type_name=type_name,
            shadow_type=shadow_type,
            declared_type=declared,
            has_default=default is not _MISSING,
            default=None if default is _MISSING else default,
        ))
    return fields


@functools.lru_cache(maxsize=None)
def derive_schema(props_type) -> Schema:
    """Derive the Schema of a props dataclass. Cached per type.

    Raises TypeError for a non-dataclass, or when pydantic cannot build a
    validator for one of its field types.
    """
    if not dataclasses.is_dataclass(props_type) or not isinstance(props_type, type):
        raise TypeError(f"{_type_name(props_type)} is not a dataclass")
    return Schema(props_type, _derive_fields(props_type))
