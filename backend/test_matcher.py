"""
Tests for ingredient match scoring and ranking
"""

import pytest

from conftest import CANDIDATES
from recipe_tools.errors import InvalidArgument
from recipe_tools.matcher import IngredientMatcher, match_percentage
from recipe_tools.models import RecipeCandidate


@pytest.fixture
def matcher():
    return IngredientMatcher()


def test_match_percentage_rounds_half_up():
    assert match_percentage(4, 1) == 80
    assert match_percentage(1, 1) == 50
    assert match_percentage(1, 7) == 13  # 12.5
    assert match_percentage(2, 1) == 67


def test_match_percentage_zero_total_is_zero():
    assert match_percentage(0, 0) == 0


@pytest.mark.parametrize("used,missing", [(0, 5), (5, 0), (3, 3), (-2, 1), (5, -1)])
def test_match_percentage_in_range(used, missing):
    assert 0 <= match_percentage(used, missing) <= 100


def test_search_filters_sorts_and_truncates(matcher):
    results = matcher.search(["chicken", "rice"], CANDIDATES, max_results=2, min_match_percentage=60)

    assert len(results) == 2
    assert all(r.match_percentage >= 60 for r in results)
    # Plain Rice: 100%, then Chicken Fried Rice / Chicken Biryani tie at 80% with one missing each
    assert [r.id for r in results] == [5, 1]


def test_search_full_ordering(matcher):
    results = matcher.search(["chicken", "rice"], CANDIDATES, max_results=10, min_match_percentage=0)

    assert [r.id for r in results] == [5, 1, 4, 2, 3, 6]
    assert [r.match_percentage for r in results] == [100, 80, 80, 60, 40, 0]


def test_tie_break_on_missing_count_then_id(matcher):
    candidates = [
        RecipeCandidate(9, "B", 2, 2, ("x", "y")),
        RecipeCandidate(7, "A", 2, 2, ("x",)),
        RecipeCandidate(8, "C", 2, 2, ("x",)),
    ]
    results = matcher.search([], candidates, max_results=5, min_match_percentage=0)
    assert [r.id for r in results] == [7, 8, 9]


def test_empty_available_is_legal(matcher):
    results = matcher.search([], CANDIDATES, max_results=3, min_match_percentage=50)
    assert len(results) == 3


def test_missing_names_deduplicated_in_order(matcher):
    candidate = RecipeCandidate(1, "Soup", 1, 3, ("salt", "pepper", "salt"))
    result = matcher.score(candidate)
    assert result.missing_ingredients == ["salt", "pepper"]


def test_result_dict_shape(matcher):
    result = matcher.score(CANDIDATES[0]).to_dict()
    assert result == {
        "id": 1,
        "name": "Chicken Fried Rice",
        "matchPercentage": 80,
        "usedIngredients": 4,
        "missingIngredients": ["soy sauce"],
        "image": "https://img.example/1.jpg",
    }
    assert "image" not in matcher.score(CANDIDATES[1]).to_dict()


@pytest.mark.parametrize("max_results,min_pct", [(0, 50), (-1, 50), (1.5, 50), (True, 50), (5, -1), (5, 100.5)])
def test_rejects_bad_limits(matcher, max_results, min_pct):
    with pytest.raises(InvalidArgument):
        matcher.search(["rice"], CANDIDATES, max_results, min_pct)


def test_from_spoonacular_item():
    candidate = RecipeCandidate.from_dict({
        "id": 641803,
        "title": "Easy Chicken Rice",
        "image": "https://img.spoonacular.com/recipes/641803-312x231.jpg",
        "usedIngredientCount": 2,
        "missedIngredientCount": 2,
        "missedIngredients": [{"name": "onion"}, {"name": "garlic"}],
        "usedIngredients": [{"name": "chicken"}, {"name": "rice"}],
    })
    assert candidate.id == 641803
    assert candidate.name == "Easy Chicken Rice"
    assert candidate.missing_ingredient_names == ("onion", "garlic")
    assert IngredientMatcher().score(candidate).match_percentage == 50
