"""
oxpecker_client.api.endpoints
───────────────────────────────
Endpoint contracts of the BugTest API and their parameter records.
"""
from __future__ import annotations

from oxpecker_client.api.models import (
    Animal,
    AnimalColor,
    AnimalColorTest,
    Person,
    ProblemDetails,
    Shape,
    UnionExamples,
    UnionSerializationTest,
)
from oxpecker_client.tier1_runtime.validate import CallParameters
from oxpecker_client.tier3_platform.endpoint import Endpoint


# ── Parameter records ─────────────────────────────────────────────────────────

class GreetingParams(CallParameters):
    name: str


class SearchAnimalsParams(CallParameters):
    name: str | None = None
    species: str | None = None
    vaccinated: bool | None = None


class SearchPersonsParams(CallParameters):
    name: str | None = None
    occupation: str | None = None


class EchoShapeParams(CallParameters):
    shape: Shape


# ── OxpeckerOpenApiBugTest ────────────────────────────────────────────────────

HELLO = Endpoint(
    operation_id="hello",
    method="GET",
    path="/hello",
    response_type=str,
    error_type=ProblemDetails,
)

GET_GREETING = Endpoint(
    operation_id="getGreeting",
    method="GET",
    path="/greeting/{name}",
    params=GreetingParams,
    response_type=str,
    error_type=ProblemDetails,
)

# ── Examples ──────────────────────────────────────────────────────────────────

GET_UNION_EXAMPLES = Endpoint(
    operation_id="getUnionExamples",
    method="GET",
    path="/examples/unions",
    response_type=UnionExamples,
    error_type=ProblemDetails,
)

GET_SINGLE_SHAPE = Endpoint(
    operation_id="getSingleShape",
    method="GET",
    path="/examples/shape",
    response_type=Shape,
    error_type=ProblemDetails,
)

GET_SINGLE_ANIMAL_COLOR = Endpoint(
    operation_id="getSingleAnimalColor",
    method="GET",
    path="/examples/animal-color",
    response_type=AnimalColor,
    error_type=ProblemDetails,
)

# ── Search ────────────────────────────────────────────────────────────────────

SEARCH_ANIMALS = Endpoint(
    operation_id="searchAnimals",
    method="GET",
    path="/search/animals",
    params=SearchAnimalsParams,
    response_type=list[Animal],
    error_type=ProblemDetails,
)

SEARCH_PERSONS = Endpoint(
    operation_id="searchPersons",
    method="GET",
    path="/search/persons",
    params=SearchPersonsParams,
    response_type=list[Person],
    error_type=ProblemDetails,
)

# ── Testing ───────────────────────────────────────────────────────────────────

TEST_ANIMAL_COLOR = Endpoint(
    operation_id="testAnimalColor",
    method="GET",
    path="/testing/animal-color",
    response_type=AnimalColorTest,
    error_type=ProblemDetails,
)

TEST_UNION_SERIALIZATION = Endpoint(
    operation_id="testUnionSerialization",
    method="GET",
    path="/testing/union-serialization",
    response_type=UnionSerializationTest,
    error_type=ProblemDetails,
)

ECHO_SHAPE = Endpoint(
    operation_id="echoShape",
    method="POST",
    path="/testing/shape",
    params=EchoShapeParams,
    response_type=Shape,
    error_type=ProblemDetails,
    body="shape",
)
