"""
oxpecker_client.api.apis
──────────────────────────
API facades of the BugTest service, one class per endpoint group. Build them
all from one Configuration::

    config = Configuration(base_path="http://localhost:5166")
    main_api = OxpeckerOpenApiBugTestApi(config)
    examples_api = ExamplesApi(config)
    search_api = SearchApi(config)
    testing_api = TestingApi(config)
"""
from __future__ import annotations

from oxpecker_client.api import endpoints as ep
from oxpecker_client.api.models import (
    Animal,
    AnimalColor,
    AnimalColorTest,
    Person,
    Shape,
    UnionExamples,
    UnionSerializationTest,
)
from oxpecker_client.tier3_platform.api_client import BaseApi


class OxpeckerOpenApiBugTestApi(BaseApi):

    async def hello(self) -> str:
        return await self._call(ep.HELLO)

    async def get_greeting(self, name: str) -> str:
        return await self._call(ep.GET_GREETING, {"name": name})


class ExamplesApi(BaseApi):
    """Endpoints returning the server's discriminated unions and enums."""

    async def get_union_examples(self) -> UnionExamples:
        return await self._call(ep.GET_UNION_EXAMPLES)

    async def get_single_shape(self) -> Shape:
        return await self._call(ep.GET_SINGLE_SHAPE)

    async def get_single_animal_color(self) -> AnimalColor:
        return await self._call(ep.GET_SINGLE_ANIMAL_COLOR)


class SearchApi(BaseApi):
    """Query-string search endpoints. Omitted filters are not sent."""

    async def search_animals(
        self,
        *,
        name: str | None = None,
        species: str | None = None,
        vaccinated: bool | None = None,
    ) -> list[Animal]:
        return await self._call(
            ep.SEARCH_ANIMALS,
            {"name": name, "species": species, "vaccinated": vaccinated},
        )

    async def search_persons(
        self,
        *,
        name: str | None = None,
        occupation: str | None = None,
    ) -> list[Person]:
        return await self._call(
            ep.SEARCH_PERSONS,
            {"name": name, "occupation": occupation},
        )


class TestingApi(BaseApi):
    """Serialization round-trip checks exposed by the server."""

    __test__ = False  # not a pytest test class

    async def test_animal_color(self) -> AnimalColorTest:
        return await self._call(ep.TEST_ANIMAL_COLOR)

    async def test_union_serialization(self) -> UnionSerializationTest:
        return await self._call(ep.TEST_UNION_SERIALIZATION)

    async def echo_shape(self, shape: Shape) -> Shape:
        return await self._call(ep.ECHO_SHAPE, {"shape": shape})


__all__ = [
    "OxpeckerOpenApiBugTestApi",
    "ExamplesApi",
    "SearchApi",
    "TestingApi",
]
