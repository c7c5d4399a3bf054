"""
oxpecker_client.tier1_runtime.types
─────────────────────────────────────
Typed model for values exchanged with the server:

- ``Record``: a plain immutable record with declared fields.
- ``Variant``: one alternative of a tagged union. Its ``type`` field is a
  single string literal naming the variant, e.g. ``type: Literal["Circle"]``.
- ``UnionSchema``: the closed, ordered set of variants of one union.
- Enums are plain ``enum.Enum`` subclasses whose values are the wire labels.

Variant and label sets are fixed when the classes are defined. A union is
declared once and attached to its type alias::

    SHAPE = UnionSchema.of("Shape", Circle, Rectangle, Triangle)
    Shape = Annotated[Circle | Rectangle | Triangle, SHAPE]

Application code handles a union with ``match`` and ``assert_never`` so that
adding a variant is caught by the type checker at every consumer.
"""
from __future__ import annotations

import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, ClassVar, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    UNION = "union"
    RECORD = "record"
    ARRAY = "array"
    MAP = "map"
    ANY = "any"


@dataclass(frozen=True)
class FieldSchema:
    name: str
    kind: FieldKind
    annotation: Any
    required: bool
    nullable: bool = False


def nullable(default: Any = None, **kwargs: Any) -> Any:
    """
    Declare a field whose explicit ``None`` goes over the wire as ``null``.
    Plain optional fields (``X | None = None``) are omitted instead.
    """
    return Field(default=default, json_schema_extra={"nullable": True}, **kwargs)


# ── Records and variants ──────────────────────────────────────────────────────

class Record(BaseModel):
    """Immutable record. Unknown incoming fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def field_schemas(cls) -> tuple[FieldSchema, ...]:
        return _field_schemas(cls)


class Variant(Record):
    """
    One alternative of a tagged union. Subclasses pin ``type`` to their own
    name::

        class Circle(Variant):
            type: Literal["Circle"] = "Circle"
            radius: float
    """

    type: str

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.tag()

    @classmethod
    def tag(cls) -> str:
        """The discriminant value naming this variant on the wire."""
        annotation = cls.model_fields["type"].annotation
        args = get_args(annotation)
        if get_origin(annotation) is not Literal or len(args) != 1 or not isinstance(args[0], str):
            raise TypeError(
                f"{cls.__name__}.type must be a single string Literal, got {annotation!r}"
            )
        return args[0]


@lru_cache(maxsize=None)
def _field_schemas(cls: type[Record]) -> tuple[FieldSchema, ...]:
    schemas = []
    for name, info in cls.model_fields.items():
        annotation = info.rebuild_annotation()
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        schemas.append(FieldSchema(
            name=name,
            kind=kind_of(annotation),
            annotation=annotation,
            required=info.is_required(),
            nullable=bool(extra.get("nullable", False)),
        ))
    return tuple(schemas)


# ── Unions ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class UnionSchema:
    """
    Closed set of variants, keyed by tag, in declaration order. Compared and
    hashed by identity, so it can sit in ``Annotated`` metadata.
    """

    name: str
    variants: Mapping[str, type[Variant]]

    discriminant: ClassVar[str] = "type"

    @classmethod
    def of(cls, name: str, *variants: type[Variant]) -> UnionSchema:
        if not variants:
            raise TypeError(f"Union {name!r} needs at least one variant")
        mapping: dict[str, type[Variant]] = {}
        for variant in variants:
            tag = variant.tag()
            if tag in mapping:
                raise TypeError(f"Union {name!r} declares variant {tag!r} twice")
            mapping[tag] = variant
        return cls(name=name, variants=types.MappingProxyType(mapping))

    @property
    def variant_names(self) -> tuple[str, ...]:
        return tuple(self.variants)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag in self.variants

    def variant_for(self, tag: str) -> type[Variant]:
        return self.variants[tag]


def _unwrap_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(tp) is Annotated:
        base, *metadata = get_args(tp)
        inner, more = _unwrap_annotated(base)
        return inner, (*metadata, *more)
    return tp, ()


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def strip_optional(tp: Any) -> tuple[Any, bool]:
    """``X | None`` → ``(X, True)``; anything else → ``(tp, False)``."""
    if _is_union(tp):
        args = get_args(tp)
        rest = tuple(a for a in args if a is not type(None))
        if len(rest) < len(args):
            if len(rest) == 1:
                return rest[0], True
            return Union[rest], True
    return tp, False


def unwrap(tp: Any) -> tuple[Any, bool]:
    """Strip ``Annotated`` and ``None`` from an annotation → ``(base, optional)``."""
    optional = False
    while True:
        tp, _ = _unwrap_annotated(tp)
        tp, stripped = strip_optional(tp)
        optional = optional or stripped
        if not stripped:
            return tp, optional


def _is_variant(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Variant)


@lru_cache(maxsize=None)
def union_schema_for(tp: Any) -> UnionSchema | None:
    """
    Resolve the UnionSchema described by an annotation, or None if the
    annotation is not a tagged union. A bare ``A | B`` of variants gets an
    anonymous schema; an alias carrying a UnionSchema in its ``Annotated``
    metadata resolves to that schema.
    """
    tp, _ = strip_optional(tp)
    tp, metadata = _unwrap_annotated(tp)
    for meta in metadata:
        if isinstance(meta, UnionSchema):
            return meta
    if _is_variant(tp):
        return UnionSchema.of(tp.tag(), tp)
    if _is_union(tp):
        args = get_args(tp)
        if all(_is_variant(a) for a in args):
            return UnionSchema.of(" | ".join(a.tag() for a in args), *args)
    return None


# ── Enums ─────────────────────────────────────────────────────────────────────

def enum_labels(enum_type: type[Enum]) -> tuple[Any, ...]:
    """Declared wire labels of an enum, in declaration order."""
    return tuple(member.value for member in enum_type)


# ── Kinds ─────────────────────────────────────────────────────────────────────

def kind_of(annotation: Any) -> FieldKind:
    """Map a field annotation to its wire kind. Unsupported annotations raise."""
    if union_schema_for(annotation) is not None:
        return FieldKind.UNION
    tp, _ = unwrap(annotation)
    if tp is Any:
        return FieldKind.ANY
    # bool before int: bool is an int subclass
    if tp is bool:
        return FieldKind.BOOLEAN
    if tp is int:
        return FieldKind.INTEGER
    if tp is float:
        return FieldKind.NUMBER
    if tp is str:
        return FieldKind.STRING
    if isinstance(tp, type) and issubclass(tp, Enum):
        return FieldKind.ENUM
    if isinstance(tp, type) and issubclass(tp, Record):
        return FieldKind.RECORD
    origin = get_origin(tp)
    if origin is Literal:
        return kind_of(type(get_args(tp)[0]))
    if origin in (list, tuple, Sequence):
        return FieldKind.ARRAY
    if origin in (dict, Mapping):
        return FieldKind.MAP
    raise TypeError(f"Unsupported field annotation: {annotation!r}")


__all__ = [
    "FieldKind",
    "FieldSchema",
    "Record",
    "Variant",
    "UnionSchema",
    "enum_labels",
    "kind_of",
    "nullable",
    "strip_optional",
    "union_schema_for",
    "unwrap",
]
