"""
Recipe Data Models
Dataclasses exchanged between the engines, the collaborators and the tools
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Ingredient:
    """A single ingredient line of a recipe"""
    name: str
    amount: float = 0.0
    unit: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Ingredient":
        return cls(
            name=data.get("name", ""),
            amount=float(data.get("amount") or 0),
            unit=data.get("unit", "")
        )


@dataclass
class Recipe:
    """Full recipe as returned by the get_recipe tool"""
    id: int
    name: str
    description: str
    ingredients: list[Ingredient]
    instructions: list[str]
    prep_time: int
    servings: int
    difficulty: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": self.instructions,
            "prepTime": self.prep_time,
            "servings": self.servings,
            "difficulty": self.difficulty
        }


@dataclass(frozen=True)
class RecipeCandidate:
    """A recipe offered by the recipe source for ingredient matching"""
    id: int
    name: str
    total_ingredients_used: int
    total_ingredients_missing: int
    missing_ingredient_names: tuple[str, ...] = ()
    image_ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RecipeCandidate":
        """Build from a Spoonacular findByIngredients item"""
        missing = data.get("missedIngredients", [])
        names = [ing.get("name", "") for ing in missing if ing.get("name")]
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("title", ""),
            total_ingredients_used=int(data.get("usedIngredientCount", 0)),
            total_ingredients_missing=int(data.get("missedIngredientCount", len(names))),
            missing_ingredient_names=tuple(names),
            image_ref=data.get("image") or None
        )


@dataclass
class MatchResult:
    id: int
    name: str
    match_percentage: float
    used_ingredients: int
    missing_ingredients: list[str] = field(default_factory=list)
    image_ref: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "matchPercentage": self.match_percentage,
            "usedIngredients": self.used_ingredients,
            "missingIngredients": list(self.missing_ingredients)
        }
        if self.image_ref is not None:
            data["image"] = self.image_ref
        return data


@dataclass
class FavoriteRecord:
    """Outcome of saving a favorite"""
    success: bool
    message: str
    saved_at: str

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "savedAt": self.saved_at
        }
