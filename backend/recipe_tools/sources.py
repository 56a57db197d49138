"""
External Collaborators
Interfaces the tools consume for recipe data and favorites persistence
"""

from typing import Optional, Protocol

from recipe_tools.models import FavoriteRecord, Recipe, RecipeCandidate


class CollaboratorError(Exception):
    """Base exception raised by recipe sources and favorites stores"""
    pass


class RecipeSource(Protocol):
    """Where recipes come from (a remote API or an internal catalog)"""

    async def fetch_candidates(self, ingredients: list[str], limit: int) -> list[RecipeCandidate]:
        ...

    async def get_recipe(self, recipe_name: str, cuisine: Optional[str] = None) -> Recipe:
        ...


class FavoritesStore(Protocol):
    """Where saved favorites live"""

    async def save(
        self,
        user_id: str,
        recipe_id: int,
        recipe_name: str,
        notes: Optional[str] = None
    ) -> FavoriteRecord:
        ...
