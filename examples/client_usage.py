"""Example usage of the BugTest API client.

Runs every endpoint once against a live server (default
http://localhost:5166, override with OXPECKER_BASE_PATH) and prints what came
back. Each example catches ClientError so one failing endpoint does not stop
the rest.
"""

from __future__ import annotations

import asyncio
import functools
from typing import assert_never

from oxpecker_client import (
    AnimalColor,
    Circle,
    ClientError,
    Configuration,
    ExamplesApi,
    OxpeckerOpenApiBugTestApi,
    Rectangle,
    SearchApi,
    Shape,
    TestingApi,
    Triangle,
    get_logger,
)

log = get_logger("examples.client_usage")

config = Configuration.from_settings()

main_api = OxpeckerOpenApiBugTestApi(config)
examples_api = ExamplesApi(config)
search_api = SearchApi(config)
testing_api = TestingApi(config)


def describe_shape(shape: Shape) -> str:
    match shape:
        case Circle(radius=radius):
            return f"Circle radius: {radius}"
        case Rectangle(width=width, height=height):
            return f"Rectangle dimensions: {width} x {height}"
        case Triangle(base=base, height=height):
            return f"Triangle base and height: {base}, {height}"
        case _:
            assert_never(shape)


async def call_hello() -> None:
    print("Hello response:", await main_api.hello())


async def call_greeting(name: str) -> None:
    print(f"Greeting for {name}:", await main_api.get_greeting(name))


async def get_union_examples() -> None:
    print("Union examples:", await examples_api.get_union_examples())


async def get_single_shape() -> None:
    shape = await examples_api.get_single_shape()
    print("Single shape:", shape)
    print(describe_shape(shape))


async def get_single_animal_color() -> None:
    color = await examples_api.get_single_animal_color()
    print("Single animal color:", color.value)
    if color is AnimalColor.Brown:
        print("The animal is brown!")


async def search_animals() -> None:
    animals = await search_api.search_animals(name="Fluffy", species="Cat", vaccinated=True)
    print("Animals found:", animals)


async def search_persons() -> None:
    persons = await search_api.search_persons(name="John", occupation="Developer")
    print("Persons found:", persons)


async def test_animal_color() -> None:
    print("Animal color test:", await testing_api.test_animal_color())


async def test_union_serialization() -> None:
    print("Union serialization test:", await testing_api.test_union_serialization())


async def main() -> None:
    print("Running API client examples...\n")
    examples = [
        call_hello,
        functools.partial(call_greeting, "World"),
        get_union_examples,
        get_single_shape,
        get_single_animal_color,
        search_animals,
        search_persons,
        test_animal_color,
        test_union_serialization,
    ]
    for example in examples:
        try:
            await example()
        except ClientError as exc:
            log.error("example.failed", code=exc.code, error=str(exc))
    print("\nAll examples completed!")


if __name__ == "__main__":
    asyncio.run(main())
