"""
Favorites Store
In-memory favorites persistence for a single process
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from recipe_tools.models import FavoriteRecord
from recipe_tools.sources import CollaboratorError

logger = logging.getLogger(__name__)


class FavoritesStoreError(CollaboratorError):
    """Raised when a favorite cannot be stored"""
    pass


@dataclass
class Favorite:
    user_id: str
    recipe_id: int
    recipe_name: str
    notes: Optional[str]
    saved_at: datetime


class InMemoryFavoritesStore:
    """Keeps favorites in a dict; saving the same recipe twice updates it"""

    def __init__(self, max_per_user: int = 500):
        self.max_per_user = max_per_user
        self._favorites: dict[str, dict[int, Favorite]] = {}
        self._lock = asyncio.Lock()

    async def save(
        self,
        user_id: str,
        recipe_id: int,
        recipe_name: str,
        notes: Optional[str] = None
    ) -> FavoriteRecord:
        if not user_id.strip():
            return FavoriteRecord(
                success=False,
                message="Failed to save recipe: user id is empty",
                saved_at=_now()
            )

        async with self._lock:
            user_favorites = self._favorites.setdefault(user_id, {})
            if recipe_id not in user_favorites and len(user_favorites) >= self.max_per_user:
                raise FavoritesStoreError(
                    f"Favorites limit of {self.max_per_user} reached"
                )
            saved_at = datetime.now(timezone.utc)
            user_favorites[recipe_id] = Favorite(
                user_id=user_id,
                recipe_id=recipe_id,
                recipe_name=recipe_name,
                notes=notes,
                saved_at=saved_at
            )

        logger.debug("Saved recipe %s for user %s", recipe_id, user_id)
        return FavoriteRecord(
            success=True,
            message=f'Recipe "{recipe_name}" saved to favorites successfully',
            saved_at=_format(saved_at)
        )

    async def list_favorites(self, user_id: str) -> list[Favorite]:
        async with self._lock:
            return list(self._favorites.get(user_id, {}).values())


def _format(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def _now() -> str:
    return _format(datetime.now(timezone.utc))
