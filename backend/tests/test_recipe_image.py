import asyncio

import pytest

from weemeal.services import recipe_image
from weemeal.services.recipe_image import SEARCH_SUFFIX, build_search_query, get_recipe_image
from weemeal.services.unsplash import PhotoHit


async def no_translation(text):
    return None


async def echo_translation(text):
    return text.upper()


async def broken(arg):
    raise RuntimeError("collaborator down")


async def slow(arg):
    await asyncio.sleep(5)
    return "too late"


async def nothing_found(query):
    return []


def hits(n):
    return [PhotoHit(url=f"https://images.example/{i}.jpg", photographerName=f"Fotograf {i}") for i in range(n)]


def test_placeholder_when_no_collaborator_is_configured():
    result = asyncio.run(get_recipe_image("Kartoffelauflauf mit Käse"))
    assert result.source == "placeholder"
    assert result.url.startswith("data:image/svg+xml,")
    assert result.attribution is None


def test_placeholder_when_every_collaborator_fails():
    result = asyncio.run(get_recipe_image("Gulasch", translator=broken, searcher=broken))
    assert result.source == "placeholder"


def test_placeholder_when_every_collaborator_times_out():
    result = asyncio.run(get_recipe_image("Gulasch", translator=slow, searcher=slow, timeout=0.01))
    assert result.source == "placeholder"


def test_query_uses_ai_translation():
    async def translate(text):
        return "Potato casserole with cheese"

    query = asyncio.run(build_search_query("Kartoffelauflauf mit Käse", translator=translate))
    assert query == "Potato casserole with cheese food delicious"


@pytest.mark.parametrize("translator", [no_translation, echo_translation, broken])
def test_query_falls_back_to_dictionary(translator):
    # an "answer" equal to the input (ignoring case) is not a translation
    query = asyncio.run(build_search_query("Kartoffelauflauf mit Käse", translator=translator))
    assert query == "potato casserole with cheese food delicious"


def test_query_falls_back_to_dictionary_on_timeout():
    query = asyncio.run(build_search_query("Tomatensuppe", translator=slow, timeout=0.01))
    assert query == "tomato soup food delicious"


def test_query_for_name_without_letters():
    query = asyncio.run(build_search_query("123", translator=no_translation))
    assert query == SEARCH_SUFFIX


def test_photo_search_result_with_attribution():
    seen = []

    async def search(query):
        seen.append(query)
        return hits(1)

    result = asyncio.run(get_recipe_image("Tomatensuppe", translator=no_translation, searcher=search))
    assert seen == ["tomato soup food delicious"]
    assert result.source == "unsplash"
    assert result.url == "https://images.example/0.jpg"
    assert result.attribution == "Photo by Fotograf 0 on Unsplash"


def test_photo_is_picked_from_top_five(monkeypatch):
    picked_from = []

    def choice(options):
        picked_from.append(list(options))
        return options[-1]

    monkeypatch.setattr(recipe_image.random, "choice", choice)

    async def search(query):
        return hits(8)

    result = asyncio.run(get_recipe_image("Gulasch", translator=no_translation, searcher=search))
    assert len(picked_from[0]) == 5
    assert result.url == "https://images.example/4.jpg"


def test_no_search_results_gives_placeholder():
    result = asyncio.run(get_recipe_image("Gulasch", translator=no_translation, searcher=nothing_found))
    assert result.source == "placeholder"
