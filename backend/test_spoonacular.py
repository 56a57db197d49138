"""
Tests for the Spoonacular recipe source, with HTTP mocked out
"""

import httpx
import pytest

from recipe_tools.spoonacular import (
    QuotaExceededError,
    RecipeNotFoundError,
    SpoonacularAPI,
    SpoonacularError,
    SpoonacularRecipeSource,
    convert_to_recipe,
    estimate_difficulty,
)

FIND_BY_INGREDIENTS = [
    {
        "id": 716429,
        "title": "Pasta with Garlic, Scallions, Cauliflower & Breadcrumbs",
        "image": "https://img.spoonacular.com/recipes/716429-312x231.jpg",
        "usedIngredientCount": 3,
        "missedIngredientCount": 1,
        "missedIngredients": [{"name": "breadcrumbs"}],
        "usedIngredients": [{"name": "garlic"}, {"name": "pasta"}, {"name": "cauliflower"}],
    }
]

COMPLEX_SEARCH = {
    "results": [
        {
            "id": 654959,
            "title": "Pasta With Tuna",
            "summary": "<b>Pasta With Tuna</b> is a <a href='x'>main course</a>.",
            "readyInMinutes": 45,
            "servings": 4,
            "extendedIngredients": [
                {"name": "tuna", "amount": 1.5, "unit": "cups"},
                {"name": "pasta", "amount": 8, "unit": "ounces"},
            ],
            "analyzedInstructions": [
                {"steps": [{"number": 1, "step": "Boil the pasta."}, {"number": 2, "step": " Add tuna. "}]}
            ],
        }
    ]
}


def make_api(handler, **kwargs) -> SpoonacularAPI:
    return SpoonacularAPI(
        api_key="test-key",
        base_url="https://spoonacular.test",
        retry_delay=0,
        transport=httpx.MockTransport(handler),
        **kwargs
    )


@pytest.mark.asyncio
async def test_fetch_candidates():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=FIND_BY_INGREDIENTS)

    source = SpoonacularRecipeSource(make_api(handler))
    [candidate] = await source.fetch_candidates(["garlic", "pasta"], limit=5)

    assert candidate.id == 716429
    assert candidate.total_ingredients_used == 3
    assert candidate.missing_ingredient_names == ("breadcrumbs",)
    assert seen[0].url.path == "/recipes/findByIngredients"
    assert seen[0].url.params["ingredients"] == "garlic,pasta"
    assert seen[0].url.params["number"] == "5"
    assert seen[0].url.params["apiKey"] == "test-key"


@pytest.mark.asyncio
async def test_fetch_candidates_without_ingredients_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    source = SpoonacularRecipeSource(make_api(handler))
    assert await source.fetch_candidates([], limit=5) == []


@pytest.mark.asyncio
async def test_get_recipe():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/recipes/complexSearch"
        assert request.url.params["cuisine"] == "italian"
        return httpx.Response(200, json=COMPLEX_SEARCH)

    recipe = await SpoonacularRecipeSource(make_api(handler)).get_recipe("tuna pasta", "Italian")

    assert recipe.id == 654959
    assert recipe.description == "Pasta With Tuna is a main course ."
    assert [ing.name for ing in recipe.ingredients] == ["tuna", "pasta"]
    assert recipe.instructions == ["Boil the pasta.", "Add tuna."]
    assert recipe.difficulty == "medium"


@pytest.mark.asyncio
async def test_get_recipe_not_found():
    source = SpoonacularRecipeSource(make_api(lambda request: httpx.Response(200, json={"results": []})))
    with pytest.raises(RecipeNotFoundError):
        await source.get_recipe("unicorn stew")


@pytest.mark.asyncio
async def test_retries_transient_errors_then_succeeds():
    responses = iter([httpx.Response(503), httpx.Response(200, json=FIND_BY_INGREDIENTS)])
    api = make_api(lambda request: next(responses))
    assert await api.search_by_ingredients(["garlic"]) == FIND_BY_INGREDIENTS


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(500)

    api = make_api(handler, max_retries=2)
    with pytest.raises(SpoonacularError):
        await api.search_by_ingredients(["garlic"])
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_quota_exceeded_is_not_retried():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(402)

    with pytest.raises(QuotaExceededError):
        await make_api(handler).search_by_ingredients(["garlic"])
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_network_errors_are_wrapped():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(SpoonacularError):
        await make_api(handler, max_retries=1).search_by_ingredients(["garlic"])


@pytest.mark.asyncio
async def test_missing_api_key():
    api = SpoonacularAPI(api_key="", transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    with pytest.raises(SpoonacularError):
        await api.search_by_ingredients(["garlic"])


@pytest.mark.asyncio
async def test_responses_are_cached():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(200, json=FIND_BY_INGREDIENTS)

    api = make_api(handler)
    await api.search_by_ingredients(["garlic"])
    await api.search_by_ingredients(["garlic"])
    assert len(attempts) == 1


def test_estimate_difficulty():
    assert estimate_difficulty(15) == "easy"
    assert estimate_difficulty(45) == "medium"
    assert estimate_difficulty(90) == "hard"


def test_convert_falls_back_to_plain_instructions():
    recipe = convert_to_recipe({
        "id": 1,
        "title": "Toast",
        "readyInMinutes": 5,
        "instructions": "<ol><li>Slice bread.</li><li>Toast it.</li></ol>",
    })
    assert recipe.instructions == ["Slice bread.", "Toast it."]
    assert recipe.description == "Toast recipe"
    assert recipe.servings == 4
