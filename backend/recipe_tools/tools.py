"""
Recipe Tools
The four tools exposed to the agent, wired to the engines and collaborators
"""

import logging
from typing import Optional

from recipe_tools.errors import ExternalCollaboratorFailure, ToolError
from recipe_tools.matcher import IngredientMatcher
from recipe_tools.registry import ToolRegistry, ToolSpec
from recipe_tools.schemas import (
    ConvertMeasurementsInput,
    ConvertMeasurementsOutput,
    GetRecipeInput,
    GetRecipeOutput,
    SaveFavoriteInput,
    SaveFavoriteOutput,
    SearchRecipesInput,
    SearchRecipesOutput,
    search_recipes_input,
)
from recipe_tools.sources import FavoritesStore, RecipeSource
from recipe_tools.units import ConversionGraph

GET_RECIPE = "get_recipe"
SEARCH_RECIPES = "search_recipes"
SAVE_FAVORITE_RECIPE = "save_favorite_recipe"
CONVERT_MEASUREMENTS = "convert_measurements"

logger = logging.getLogger(__name__)


def build_registry(
    recipe_source: RecipeSource,
    favorites_store: FavoritesStore,
    graph: Optional[ConversionGraph] = None,
    matcher: Optional[IngredientMatcher] = None,
    candidate_pool_size: int = 10,
    default_max_results: int = 10,
    default_min_match_percentage: float = 50
) -> ToolRegistry:
    """Register every tool and return the frozen registry"""
    graph = graph or ConversionGraph()
    matcher = matcher or IngredientMatcher()
    search_input = search_recipes_input(default_max_results, default_min_match_percentage)

    async def get_recipe(params: GetRecipeInput) -> dict:
        recipe = await recipe_source.get_recipe(params.recipeName, params.cuisine)
        return recipe.to_dict()

    async def search_recipes(params: SearchRecipesInput) -> list[dict]:
        # Reject bad limits before spending quota on the recipe source
        matcher.validate_limits(params.maxResults, params.minMatchPercentage)
        limit = max(params.maxResults, candidate_pool_size)
        try:
            candidates = await recipe_source.fetch_candidates(params.ingredients, limit)
        except ToolError:
            raise
        except Exception as e:
            logger.warning("Recipe source failed during %s: %s", SEARCH_RECIPES, type(e).__name__)
            logger.debug("Recipe source error: %s", e)
            raise ExternalCollaboratorFailure(
                f"Tool '{SEARCH_RECIPES}' failed: {e}",
                {"tool": SEARCH_RECIPES, "error_type": type(e).__name__}
            ) from e
        # Matching runs in-process; its bugs propagate unwrapped
        results = matcher.search(
            params.ingredients,
            candidates,
            params.maxResults,
            params.minMatchPercentage
        )
        return [r.to_dict() for r in results]

    async def save_favorite_recipe(params: SaveFavoriteInput) -> dict:
        record = await favorites_store.save(
            params.userId,
            params.recipeId,
            params.recipeName,
            params.notes
        )
        return record.to_dict()

    def convert_measurements(params: ConvertMeasurementsInput) -> dict:
        result = graph.convert(
            params.amount,
            params.fromUnit,
            params.toUnit,
            params.ingredient
        )
        return result.to_dict()

    registry = ToolRegistry()
    registry.register(ToolSpec(
        name=GET_RECIPE,
        description="Get detailed recipe information for a specific dish",
        input_model=GetRecipeInput,
        output_type=GetRecipeOutput,
        handler=get_recipe,
        external=True
    ))
    registry.register(ToolSpec(
        name=SEARCH_RECIPES,
        description="Search for recipes based on available ingredients",
        input_model=search_input,
        output_type=SearchRecipesOutput,
        handler=search_recipes
    ))
    registry.register(ToolSpec(
        name=SAVE_FAVORITE_RECIPE,
        description="Save a recipe to user favorites",
        input_model=SaveFavoriteInput,
        output_type=SaveFavoriteOutput,
        handler=save_favorite_recipe,
        external=True
    ))
    registry.register(ToolSpec(
        name=CONVERT_MEASUREMENTS,
        description="Convert recipe measurements between different units",
        input_model=ConvertMeasurementsInput,
        output_type=ConvertMeasurementsOutput,
        handler=convert_measurements
    ))
    return registry.freeze()
