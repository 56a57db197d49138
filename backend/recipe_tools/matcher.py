"""
Ingredient Matching
Scores and ranks recipe candidates by how many of their ingredients the user has
"""

import logging
import math
from typing import Iterable, Sequence

from recipe_tools.errors import InvalidArgument
from recipe_tools.models import MatchResult, RecipeCandidate
from recipe_tools.numeric import round_half_up

logger = logging.getLogger(__name__)


def match_percentage(used: int, missing: int) -> float:
    """Share of required ingredients already available, 0-100"""
    total = used + missing
    if total <= 0:
        return 0.0
    score = round_half_up(used / total * 100, 0)
    return min(100.0, max(0.0, score))


def _dedupe(names: Iterable[str]) -> list[str]:
    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


class IngredientMatcher:
    """Pure ranking over candidates already supplied by a recipe source"""

    def validate_limits(self, max_results: int, min_match_percentage: float) -> None:
        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            raise InvalidArgument(
                "maxResults must be an integer >= 1",
                {"maxResults": max_results}
            )
        if (
            isinstance(min_match_percentage, bool)
            or not isinstance(min_match_percentage, (int, float))
            or math.isnan(min_match_percentage)
            or not 0 <= min_match_percentage <= 100
        ):
            raise InvalidArgument(
                "minMatchPercentage must be between 0 and 100",
                {"minMatchPercentage": min_match_percentage}
            )

    def score(self, candidate: RecipeCandidate) -> MatchResult:
        return MatchResult(
            id=candidate.id,
            name=candidate.name,
            match_percentage=match_percentage(
                candidate.total_ingredients_used,
                candidate.total_ingredients_missing
            ),
            used_ingredients=candidate.total_ingredients_used,
            missing_ingredients=_dedupe(candidate.missing_ingredient_names),
            image_ref=candidate.image_ref
        )

    def search(
        self,
        available: Sequence[str],
        candidates: Iterable[RecipeCandidate],
        max_results: int,
        min_match_percentage: float
    ) -> list[MatchResult]:
        """
        Rank candidates for the available ingredients.

        Ordering: match percentage desc, fewer missing ingredients first,
        then recipe id asc. Candidates under min_match_percentage are dropped.
        """
        self.validate_limits(max_results, min_match_percentage)

        scored = [self.score(candidate) for candidate in candidates]
        kept = [r for r in scored if r.match_percentage >= min_match_percentage]
        kept.sort(key=lambda r: (-r.match_percentage, len(r.missing_ingredients), r.id))

        logger.debug(
            "Ranked %d candidates for %d ingredients, %d above %s%%",
            len(scored), len(available), len(kept), min_match_percentage
        )
        return kept[:max_results]
