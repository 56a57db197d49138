import pytest

from recipe_tools.favorites import InMemoryFavoritesStore
from recipe_tools.models import Ingredient, Recipe, RecipeCandidate
from recipe_tools.registry import Dispatcher
from recipe_tools.sources import CollaboratorError
from recipe_tools.tools import build_registry


CANDIDATES = [
    RecipeCandidate(1, "Chicken Fried Rice", 4, 1, ("soy sauce",), "https://img.example/1.jpg"),
    RecipeCandidate(2, "Chicken Rice Soup", 3, 2, ("carrot", "celery")),
    RecipeCandidate(3, "Rice Pudding", 2, 3, ("milk", "sugar", "vanilla")),
    RecipeCandidate(4, "Chicken Biryani", 4, 1, ("saffron",)),
    RecipeCandidate(5, "Plain Rice", 1, 0, ()),
    RecipeCandidate(6, "Mystery Dish", 0, 0, ()),
]


class FakeRecipeSource:
    """Deterministic recipe source; records calls"""

    def __init__(self, candidates=None, fail_with=None):
        self.candidates = list(CANDIDATES if candidates is None else candidates)
        self.fail_with = fail_with
        self.calls = []

    async def fetch_candidates(self, ingredients, limit):
        self.calls.append(("fetch_candidates", list(ingredients), limit))
        if self.fail_with:
            raise self.fail_with
        return self.candidates[:limit]

    async def get_recipe(self, recipe_name, cuisine=None):
        self.calls.append(("get_recipe", recipe_name, cuisine))
        if self.fail_with:
            raise self.fail_with
        return Recipe(
            id=42,
            name=recipe_name,
            description=f"Delicious {recipe_name} recipe with authentic flavors",
            ingredients=[
                Ingredient("rice", 2, "cups"),
                Ingredient("oil", 2, "tablespoons"),
            ],
            instructions=["Heat oil in a pan", "Add rice and cook"],
            prep_time=30,
            servings=4,
            difficulty="medium"
        )


@pytest.fixture
def recipe_source():
    return FakeRecipeSource()


@pytest.fixture
def favorites_store():
    return InMemoryFavoritesStore()


@pytest.fixture
def dispatcher(recipe_source, favorites_store):
    return Dispatcher(build_registry(recipe_source, favorites_store))


@pytest.fixture
def failing_dispatcher(favorites_store):
    source = FakeRecipeSource(fail_with=CollaboratorError("upstream is down"))
    return Dispatcher(build_registry(source, favorites_store))
