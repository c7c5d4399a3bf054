"""
oxpecker_client.api.models
────────────────────────────
Typed models of the BugTest API: the Shape union, the AnimalColor enum and
the records returned by the search and testing endpoints.

Handling a Shape::

    match shape:
        case Circle(radius=r):
            ...
        case Rectangle(width=w, height=h):
            ...
        case Triangle(base=b, height=h):
            ...
        case _:
            assert_never(shape)
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from oxpecker_client.tier1_runtime.types import Record, UnionSchema, Variant


# ── Shape ─────────────────────────────────────────────────────────────────────

class Circle(Variant):
    type: Literal["Circle"] = "Circle"
    radius: float


class Rectangle(Variant):
    type: Literal["Rectangle"] = "Rectangle"
    width: float
    height: float


class Triangle(Variant):
    type: Literal["Triangle"] = "Triangle"
    base: float
    height: float


SHAPE = UnionSchema.of("Shape", Circle, Rectangle, Triangle)
Shape = Annotated[Circle | Rectangle | Triangle, SHAPE]


# ── AnimalColor ───────────────────────────────────────────────────────────────

class AnimalColor(str, Enum):
    Brown = "Brown"
    Black = "Black"
    White = "White"


# ── Records ───────────────────────────────────────────────────────────────────

class Animal(Record):
    name: str
    species: str
    vaccinated: bool
    color: AnimalColor | None = None


class Person(Record):
    name: str
    occupation: str
    age: int | None = None


class UnionExamples(Record):
    shapes: list[Shape]
    colors: list[AnimalColor]


class AnimalColorTest(Record):
    color: AnimalColor
    serialized: str


class UnionSerializationTest(Record):
    shape: Shape
    serialized: str


class ProblemDetails(Record):
    """RFC 7807 error body."""
    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None


__all__ = [
    "Circle",
    "Rectangle",
    "Triangle",
    "SHAPE",
    "Shape",
    "AnimalColor",
    "Animal",
    "Person",
    "UnionExamples",
    "AnimalColorTest",
    "UnionSerializationTest",
    "ProblemDetails",
]
