"""
Tool Schemas
Input/output contracts for every tool, enforced by the dispatcher
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, create_model, field_validator

from recipe_tools.units import Unit

# Accepts int and float, rejects numeric strings and booleans
Number = StrictFloat


# ============================================================================
# get_recipe
# ============================================================================

class GetRecipeInput(BaseModel):
    recipeName: StrictStr = Field(description="Name of the recipe to search for")
    cuisine: Optional[StrictStr] = Field(default=None, description="Optional cuisine type to filter results")


class RecipeIngredientOut(BaseModel):
    name: StrictStr
    amount: Number
    unit: StrictStr


class GetRecipeOutput(BaseModel):
    id: StrictInt
    name: StrictStr
    description: StrictStr
    ingredients: list[RecipeIngredientOut]
    instructions: list[StrictStr]
    prepTime: StrictInt
    servings: StrictInt
    difficulty: StrictStr


# ============================================================================
# search_recipes
# ============================================================================

class SearchRecipesInput(BaseModel):
    ingredients: list[StrictStr] = Field(description="List of available ingredients")
    maxResults: StrictInt = Field(default=10, description="Maximum number of recipes to return")
    minMatchPercentage: Number = Field(default=50, description="Minimum ingredient match percentage")


def search_recipes_input(max_results: int = 10, min_match_percentage: float = 50) -> type[SearchRecipesInput]:
    """SearchRecipesInput with deployment-specific defaults for the optional limits"""
    return create_model(
        "SearchRecipesInput",
        __base__=SearchRecipesInput,
        maxResults=(StrictInt, Field(default=max_results, description="Maximum number of recipes to return")),
        minMatchPercentage=(Number, Field(default=float(min_match_percentage), description="Minimum ingredient match percentage")),
    )


class MatchResultOut(BaseModel):
    id: StrictInt
    name: StrictStr
    matchPercentage: Number = Field(ge=0, le=100)
    usedIngredients: StrictInt
    missingIngredients: list[StrictStr]
    image: Optional[StrictStr] = None


SearchRecipesOutput = list[MatchResultOut]


# ============================================================================
# save_favorite_recipe
# ============================================================================

class SaveFavoriteInput(BaseModel):
    userId: StrictStr = Field(description="User identifier")
    recipeId: StrictInt = Field(description="Recipe ID to save")
    recipeName: StrictStr = Field(description="Name of the recipe")
    notes: Optional[StrictStr] = Field(default=None, description="Optional personal notes")


class SaveFavoriteOutput(BaseModel):
    success: StrictBool
    message: StrictStr
    savedAt: StrictStr

    @field_validator("savedAt")
    @classmethod
    def check_iso_timestamp(cls, value: str) -> str:
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("savedAt must be an ISO-8601 timestamp")
        return value


# ============================================================================
# convert_measurements
# ============================================================================

class ConvertMeasurementsInput(BaseModel):
    amount: Number = Field(description="Amount to convert")
    fromUnit: Unit = Field(description="Source unit")
    toUnit: Unit = Field(description="Target unit")
    ingredient: Optional[StrictStr] = Field(
        default=None, description="Ingredient name for density-based conversions"
    )


class ConvertMeasurementsOutput(BaseModel):
    originalAmount: Number
    originalUnit: Unit
    convertedAmount: Number
    convertedUnit: Unit
    conversionNote: Optional[StrictStr] = None
