"""
Spoonacular API Integration
Recipe source backed by the Spoonacular REST API
"""

import asyncio
import json
import logging
import re
import time
from typing import Optional

import httpx

from recipe_tools.models import Ingredient, Recipe, RecipeCandidate
from recipe_tools.sources import CollaboratorError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 522}


class SpoonacularError(CollaboratorError):
    """Raised when Spoonacular cannot answer a request"""
    pass


class QuotaExceededError(SpoonacularError):
    """Raised when the daily points quota is used up (HTTP 402)"""
    pass


class RecipeNotFoundError(SpoonacularError):
    """Raised when a search returns no recipe"""
    pass


# ============================================================================
# SPOONACULAR API CLIENT
# ============================================================================

class SpoonacularAPI:
    """Wrapper for Spoonacular API calls"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.spoonacular.com",
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        cache_ttl: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._transport = transport
        # Simple in-memory cache
        self._cache: dict = {}
        self._cache_ttl = cache_ttl

    def _cache_key(self, endpoint: str, params: dict) -> str:
        param_str = json.dumps(sorted(params.items()), default=str)
        return f"{endpoint}:{param_str}"

    def _get_cached(self, key: str):
        if key in self._cache:
            result, stored_at = self._cache[key]
            if time.monotonic() - stored_at < self._cache_ttl:
                return result
            del self._cache[key]
        return None

    def _set_cache(self, key: str, result):
        self._cache[key] = (result, time.monotonic())
        if len(self._cache) > 100:
            oldest = min(self._cache.keys(), key=lambda k: self._cache[k][1])
            del self._cache[oldest]

    async def _make_request(self, endpoint: str, params: Optional[dict] = None, use_cache: bool = True):
        """GET with retry on transient failures; raises SpoonacularError"""
        if not self.api_key:
            raise SpoonacularError(
                "Spoonacular API key not found. "
                "Please set SPOONACULAR_API_KEY in your .env file."
            )
        params = params or {}

        cache_key = self._cache_key(endpoint, params)
        if use_cache:
            cached = self._get_cached(cache_key)
            if cached is not None:
                return cached

        url = f"{self.base_url}{endpoint}"
        request_params = {**params, "apiKey": self.api_key}
        last_error: Optional[SpoonacularError] = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.get(url, params=request_params)
                    response.raise_for_status()
                    result = response.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status == 402:
                    raise QuotaExceededError("Spoonacular quota exceeded (402)") from e
                last_error = SpoonacularError(f"Spoonacular API error: {status}")
                if status not in RETRYABLE_STATUS:
                    raise last_error from e
            except httpx.TimeoutException as e:
                last_error = SpoonacularError(f"Spoonacular API timeout after {self.timeout} seconds")
                last_error.__cause__ = e
            except httpx.RequestError as e:
                last_error = SpoonacularError(f"Network error: {e}")
                last_error.__cause__ = e
            except ValueError as e:
                raise SpoonacularError("Spoonacular returned invalid JSON") from e
            else:
                if use_cache:
                    self._set_cache(cache_key, result)
                return result

            if attempt < self.max_retries - 1:
                logger.warning("%s, retrying (%d/%d)", last_error, attempt + 1, self.max_retries)
                await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise last_error

    # ========================================================================
    # ENDPOINTS
    # ========================================================================

    async def search_by_ingredients(
        self,
        ingredients: list[str],
        number: int = 10,
        ranking: int = 1,
        ignore_pantry: bool = True
    ) -> list[dict]:
        """
        Find recipes by ingredients (1 point per result).
        Returns basic info plus used/missed ingredient counts.
        """
        params = {
            "ingredients": ",".join(ingredients),
            "number": number,
            "ranking": ranking,
            "ignorePantry": ignore_pantry
        }
        result = await self._make_request("/recipes/findByIngredients", params)
        return result if result else []

    async def complex_search(
        self,
        query: str,
        cuisine: str = "",
        number: int = 1
    ) -> list[dict]:
        """Search by dish name, with ingredients and instructions filled in"""
        params = {
            "query": query,
            "number": number,
            "addRecipeInformation": True,
            "fillIngredients": True,
            "instructionsRequired": True
        }
        if cuisine:
            params["cuisine"] = cuisine.lower()

        result = await self._make_request("/recipes/complexSearch", params)
        return result.get("results", []) if result else []


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def estimate_difficulty(ready_in_minutes: int) -> str:
    """Estimate recipe difficulty based on total time"""
    if ready_in_minutes <= 20:
        return "easy"
    elif ready_in_minutes <= 45:
        return "medium"
    else:
        return "hard"


def strip_html(text: str) -> str:
    return re.sub(r"\s+", " ", re.sub(r"<[^>]+>", " ", text or "")).strip()


def convert_to_recipe(data: dict) -> Recipe:
    """Convert a Spoonacular recipe payload to the get_recipe shape"""
    ingredients = [
        Ingredient.from_dict(ing)
        for ing in data.get("extendedIngredients", [])
        if ing.get("name")
    ]

    instructions = []
    for section in data.get("analyzedInstructions", []):
        for step in section.get("steps", []):
            step_text = step.get("step", "").strip()
            if step_text:
                instructions.append(step_text)

    # Fallback to plain instructions
    if not instructions and data.get("instructions"):
        raw = re.sub(r"<[^>]+>", "\n", data["instructions"])
        steps = re.split(r"\n+|\d+\.", raw)
        instructions = [s.strip() for s in steps if s.strip()]

    ready_in = int(data.get("readyInMinutes") or 30)
    title = data.get("title", "")

    return Recipe(
        id=int(data.get("id", 0)),
        name=title,
        description=strip_html(data.get("summary", "")) or f"{title} recipe",
        ingredients=ingredients,
        instructions=instructions,
        prep_time=ready_in,
        servings=int(data.get("servings") or 4),
        difficulty=estimate_difficulty(ready_in)
    )


# ============================================================================
# RECIPE SOURCE
# ============================================================================

class SpoonacularRecipeSource:
    """RecipeSource implementation over SpoonacularAPI"""

    def __init__(self, api: SpoonacularAPI):
        self.api = api

    async def fetch_candidates(self, ingredients: list[str], limit: int) -> list[RecipeCandidate]:
        if not ingredients:
            return []
        items = await self.api.search_by_ingredients(ingredients, number=limit)
        return [RecipeCandidate.from_dict(item) for item in items]

    async def get_recipe(self, recipe_name: str, cuisine: Optional[str] = None) -> Recipe:
        results = await self.api.complex_search(recipe_name, cuisine=cuisine or "")
        if not results:
            raise RecipeNotFoundError(f"No recipe found for '{recipe_name}'")
        return convert_to_recipe(results[0])
