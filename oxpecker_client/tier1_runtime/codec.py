"""
oxpecker_client.tier1_runtime.codec
─────────────────────────────────────
Wire codec for the typed model. This is the only place where loosely typed
JSON is checked against declared types.

Wire forms:
    tagged union  {"type": "Circle", "radius": 5}     (flat, no "data" key)
    enum          "Brown"                              (the literal label)
    record        {"name": "Fluffy", ...}

Decoding rules:
    - a missing or undeclared ``type`` tag is an UnknownVariant
    - a missing required field, or a field of the wrong kind, inside a
      variant is a MalformedVariant naming the field
    - an enum value must equal a declared label exactly, same JSON type
    - unknown extra fields are ignored
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, get_args, get_origin

from pydantic import ValidationError as PydanticValidationError

from oxpecker_client.tier0_core.errors import (
    EncodingError,
    MalformedPayload,
    MalformedVariant,
    UnknownEnumLabel,
    UnknownVariant,
)
from oxpecker_client.tier1_runtime.types import (
    FieldKind,
    FieldSchema,
    Record,
    UnionSchema,
    Variant,
    enum_labels,
    kind_of,
    union_schema_for,
    unwrap,
)

DISCRIMINANT = UnionSchema.discriminant


# ── Tagged unions ─────────────────────────────────────────────────────────────

def encode_union(value: Variant, schema: UnionSchema | None = None) -> dict[str, Any]:
    """Flat-encode a variant: its tag under ``type`` plus its own fields."""
    if not isinstance(value, Variant):
        raise EncodingError(
            f"{type(value).__name__} is not a tagged-union variant.",
            value_type=type(value).__name__,
        )
    tag = value.type
    if tag != type(value).tag():
        raise EncodingError(
            f"{type(value).__name__} carries tag {tag!r}, expected {type(value).tag()!r}.",
            variant=tag,
        )
    if schema is not None and (tag not in schema or schema.variant_for(tag) is not type(value)):
        raise EncodingError(
            f"{schema.name}: variant {tag!r} is not one of {', '.join(schema.variant_names)}.",
            union=schema.name,
            variant=tag,
            accepted=schema.variant_names,
        )
    return {DISCRIMINANT: tag, **_encode_fields(value, skip=DISCRIMINANT)}


def decode_union(data: Any, schema: UnionSchema, *, path: str = "$") -> Variant:
    """Decode a flat-encoded union value against its declared variants."""
    if not isinstance(data, dict):
        raise MalformedPayload(
            "object",
            path=path,
            message=f"{schema.name}: expected an object with a {DISCRIMINANT!r} field.",
        )
    tag = data.get(DISCRIMINANT)
    if tag not in schema:
        raise UnknownVariant(tag, schema.variant_names, union=schema.name, path=path)
    variant_type = schema.variant_for(tag)
    values = _decode_fields(data, variant_type, path=path, variant=tag)
    return _construct(variant_type, values, path=path)


# ── Enums ─────────────────────────────────────────────────────────────────────

def encode_enum(value: Any, enum_type: type[Enum] | None = None) -> Any:
    """Return the wire label of an enum member (or of a raw declared label)."""
    if isinstance(value, Enum):
        if enum_type is not None and not isinstance(value, enum_type):
            raise EncodingError(
                f"{value!r} is not a member of {enum_type.__name__}.",
                enum=enum_type.__name__,
            )
        return value.value
    if enum_type is not None:
        member = _match_label(value, enum_type)
        if member is not None:
            return member.value
        raise EncodingError(
            f"{value!r} is not one of {list(enum_labels(enum_type))!r}.",
            enum=enum_type.__name__,
            labels=enum_labels(enum_type),
        )
    raise EncodingError(f"{value!r} is not an enum member.", value_type=type(value).__name__)


def decode_enum(data: Any, enum_type: type[Enum], *, path: str = "$") -> Enum:
    """Decode a wire label. No case folding, no string/number coercion."""
    member = _match_label(data, enum_type)
    if member is None:
        raise UnknownEnumLabel(data, enum_labels(enum_type), enum=enum_type.__name__, path=path)
    return member


def _match_label(data: Any, enum_type: type[Enum]) -> Enum | None:
    for member in enum_type:
        label = member.value
        if type(data) is type(label) and data == label:
            return member
    return None


# ── Records ───────────────────────────────────────────────────────────────────

def encode_record(value: Record) -> dict[str, Any]:
    if isinstance(value, Variant):
        return encode_union(value)
    return _encode_fields(value)


def decode_record(data: Any, record_type: type[Record], *, path: str = "$") -> Record:
    if not isinstance(data, dict):
        raise MalformedPayload(
            "object",
            path=path,
            message=f"{record_type.__name__}: expected an object.",
        )
    values = _decode_fields(data, record_type, path=path)
    return _construct(record_type, values, path=path)


def _encode_fields(value: Record, skip: str | None = None) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for schema in type(value).field_schemas():
        if schema.name == skip:
            continue
        item = getattr(value, schema.name)
        if item is None and not schema.nullable:
            continue
        out[schema.name] = encode_value(item, schema.annotation)
    return out


def _decode_fields(
    data: dict[str, Any],
    record_type: type[Record],
    *,
    path: str,
    variant: str | None = None,
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for schema in record_type.field_schemas():
        if variant is not None and schema.name == DISCRIMINANT:
            continue
        field_path = f"{path}.{schema.name}"
        if schema.name not in data:
            if schema.required:
                raise _missing(schema, field_path, record_type, variant)
            continue
        try:
            values[schema.name] = decode_value(data[schema.name], schema.annotation, path=field_path)
        except MalformedPayload as exc:
            # Only mismatches on the field itself are reported against the
            # variant; deeper errors already name their own location.
            if variant is not None and exc.path == field_path and not isinstance(exc, MalformedVariant):
                raise MalformedVariant(variant, schema.name, exc.expected, path=field_path) from exc
            raise
    return values


def _missing(
    schema: FieldSchema,
    path: str,
    record_type: type[Record],
    variant: str | None,
) -> MalformedPayload:
    expected = _describe(schema.annotation)
    if variant is not None:
        return MalformedVariant(variant, schema.name, expected, path=path, missing=True)
    return MalformedPayload(
        expected,
        path=path,
        field=schema.name,
        message=f"{record_type.__name__}: field {schema.name!r} is missing, expected {expected}.",
    )


def _construct(record_type: type[Record], values: dict[str, Any], *, path: str) -> Record:
    try:
        return record_type.model_validate(values)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise MalformedPayload(
            record_type.__name__,
            path=f"{path}.{loc}" if loc else path,
            message=f"{record_type.__name__}: {first['msg']}.",
        ) from exc


# ── Annotation-driven entry points ────────────────────────────────────────────

def encode_value(value: Any, annotation: Any = None) -> Any:
    """Encode any supported value to JSON-compatible Python data."""
    if value is None:
        return None
    if annotation is not None:
        schema = union_schema_for(annotation)
        if schema is not None:
            return encode_union(value, schema)
        tp, _ = unwrap(annotation)
        if isinstance(tp, type) and issubclass(tp, Enum):
            return encode_enum(value, tp)
    else:
        tp = None
    if isinstance(value, Record):
        return encode_record(value)
    if isinstance(value, Enum):
        return encode_enum(value)
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        item = _item_annotation(tp, mapping=True)
        return {str(k): encode_value(v, item) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        item = _item_annotation(tp)
        return [encode_value(v, item) for v in value]
    raise EncodingError(
        f"Cannot encode a {type(value).__name__} value.",
        value_type=type(value).__name__,
    )


def decode_value(data: Any, annotation: Any, *, path: str = "$") -> Any:
    """Decode JSON data against a declared annotation, checking every kind."""
    tp, optional = unwrap(annotation)
    if data is None:
        if optional or tp is Any:
            return None
        expected = _describe(annotation)
        raise MalformedPayload(expected, path=path, message=f"Unexpected null, expected {expected}.")

    schema = union_schema_for(annotation)
    if schema is not None:
        return decode_union(data, schema, path=path)

    kind = kind_of(tp)
    if kind is FieldKind.ANY:
        return data
    if kind is FieldKind.BOOLEAN:
        if isinstance(data, bool):
            return data
    elif kind is FieldKind.INTEGER:
        if isinstance(data, int) and not isinstance(data, bool):
            return data
    elif kind is FieldKind.NUMBER:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            if tp is not float:
                return data
            try:
                return float(data)
            except OverflowError:
                raise MalformedPayload(
                    "number",
                    path=path,
                    message="Number is out of range for a float.",
                ) from None
    elif kind is FieldKind.STRING:
        if get_origin(tp) is not None:  # Literal
            if type(data) is str and data in get_args(tp):
                return data
        elif isinstance(data, str):
            return data
    elif kind is FieldKind.ENUM:
        return decode_enum(data, tp, path=path)
    elif kind is FieldKind.RECORD:
        return decode_record(data, tp, path=path)
    elif kind is FieldKind.ARRAY:
        if isinstance(data, list):
            item = _item_annotation(tp)
            items = [decode_value(v, item, path=f"{path}[{i}]") for i, v in enumerate(data)]
            return tuple(items) if get_origin(tp) is tuple else items
    elif kind is FieldKind.MAP:
        if isinstance(data, dict):
            item = _item_annotation(tp, mapping=True)
            return {k: decode_value(v, item, path=f"{path}.{k}") for k, v in data.items()}
    expected = _describe(annotation)
    raise MalformedPayload(
        expected,
        path=path,
        message=f"Expected {expected}, got {_json_kind(data)}.",
    )


def _item_annotation(tp: Any, mapping: bool = False) -> Any:
    args = get_args(tp) if tp is not None else ()
    if not args:
        return Any
    return args[1] if mapping else args[0]


def _describe(annotation: Any) -> str:
    schema = union_schema_for(annotation)
    if schema is not None:
        return schema.name
    tp, _ = unwrap(annotation)
    kind = kind_of(tp)
    if kind in (FieldKind.ENUM, FieldKind.RECORD):
        return tp.__name__
    return kind.value


def _json_kind(data: Any) -> str:
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


__all__ = [
    "encode_union",
    "decode_union",
    "encode_enum",
    "decode_enum",
    "encode_record",
    "decode_record",
    "encode_value",
    "decode_value",
]
