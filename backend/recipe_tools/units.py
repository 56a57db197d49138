"""
Unit Conversion Engine
Graph of conversion factors between kitchen units with multi-hop resolution
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol, Union

from recipe_tools.errors import InvalidArgument
from recipe_tools.numeric import round_half_up

logger = logging.getLogger(__name__)


APPROXIMATE_NOTE = "Approximate conversion - please verify for accuracy"
DENSITY_CAVEAT = (
    "Conversion for {ingredient}. Note that density may affect accuracy "
    "for volume-to-weight conversions."
)
DENSITY_APPLIED_NOTE = "Converted using density data for {ingredient}."


class Unit(str, Enum):
    """Closed set of measurement units the tools accept"""
    CUPS = "cups"
    TABLESPOONS = "tablespoons"
    TEASPOONS = "teaspoons"
    OUNCES = "ounces"
    POUNDS = "pounds"
    GRAMS = "grams"
    KILOGRAMS = "kilograms"
    MILLILITERS = "milliliters"
    LITERS = "liters"

    @classmethod
    def parse(cls, value: Union[str, "Unit"]) -> "Unit":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(u.value for u in cls)
            raise InvalidArgument(
                f"Unknown unit '{value}'. Expected one of: {allowed}",
                {"unit": str(value)}
            ) from None


@dataclass(frozen=True)
class ConversionEdge:
    """amount_in_to_unit = amount_in_from_unit * factor"""
    from_unit: Unit
    to_unit: Unit
    factor: float


@dataclass
class ConversionResult:
    original_amount: float
    original_unit: Unit
    converted_amount: float
    converted_unit: Unit
    note: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "originalAmount": self.original_amount,
            "originalUnit": self.original_unit.value,
            "convertedAmount": self.converted_amount,
            "convertedUnit": self.converted_unit.value,
        }
        if self.note is not None:
            data["conversionNote"] = self.note
        return data


class DensityTable(Protocol):
    """Per-ingredient factors that can replace the density caveat with an exact conversion"""

    def lookup(self, ingredient: str, from_unit: Unit, to_unit: Unit) -> Optional[float]:
        ...


class MappingDensityTable:
    """DensityTable backed by a dict keyed on (ingredient, from_unit, to_unit)"""

    def __init__(self, factors: dict[tuple[str, Unit, Unit], float]):
        self._factors = {
            (name.strip().lower(), Unit.parse(src), Unit.parse(dst)): factor
            for (name, src, dst), factor in factors.items()
        }

    def lookup(self, ingredient: str, from_unit: Unit, to_unit: Unit) -> Optional[float]:
        return self._factors.get((ingredient.strip().lower(), from_unit, to_unit))


# Declared factors. Gaps are intentional: pairs with no path fall back to
# the approximate note instead of invented factors.
DEFAULT_FACTORS: dict[Unit, dict[Unit, float]] = {
    Unit.CUPS: {
        Unit.TABLESPOONS: 16,
        Unit.TEASPOONS: 48,
        Unit.MILLILITERS: 236.588,
        Unit.OUNCES: 8,
    },
    Unit.TABLESPOONS: {
        Unit.CUPS: 1 / 16,
        Unit.TEASPOONS: 3,
        Unit.MILLILITERS: 14.787,
    },
    Unit.TEASPOONS: {
        Unit.CUPS: 1 / 48,
        Unit.TABLESPOONS: 1 / 3,
        Unit.MILLILITERS: 4.929,
    },
    Unit.OUNCES: {
        Unit.CUPS: 1 / 8,
        Unit.GRAMS: 28.3495,
        Unit.POUNDS: 1 / 16,
    },
    Unit.POUNDS: {
        Unit.OUNCES: 16,
        Unit.GRAMS: 453.592,
        Unit.KILOGRAMS: 0.453592,
    },
    Unit.GRAMS: {
        Unit.OUNCES: 1 / 28.3495,
        Unit.POUNDS: 1 / 453.592,
        Unit.KILOGRAMS: 1 / 1000,
    },
    Unit.KILOGRAMS: {
        Unit.POUNDS: 2.20462,
        Unit.GRAMS: 1000,
    },
    Unit.MILLILITERS: {
        Unit.CUPS: 1 / 236.588,
        Unit.TABLESPOONS: 1 / 14.787,
        Unit.TEASPOONS: 1 / 4.929,
        Unit.LITERS: 1 / 1000,
    },
    Unit.LITERS: {
        Unit.MILLILITERS: 1000,
        Unit.CUPS: 4.227,
    },
}


def default_edges() -> list[ConversionEdge]:
    return [
        ConversionEdge(src, dst, float(factor))
        for src, targets in DEFAULT_FACTORS.items()
        for dst, factor in targets.items()
    ]


class ConversionGraph:
    """
    Immutable graph of unit conversion factors.

    Resolution order: same unit, declared edge, inverse of a declared edge,
    shortest multi-hop path (every edge walkable both ways), then the
    approximate fallback which returns the amount unchanged.
    """

    def __init__(
        self,
        edges: Optional[Iterable[ConversionEdge]] = None,
        densities: Optional[DensityTable] = None
    ):
        factors: dict[tuple[Unit, Unit], float] = {}
        adjacency: dict[Unit, list[tuple[Unit, float, bool]]] = {unit: [] for unit in Unit}

        for edge in (default_edges() if edges is None else edges):
            src, dst = Unit.parse(edge.from_unit), Unit.parse(edge.to_unit)
            if src == dst:
                raise ValueError(f"Self edge for {src.value} is not allowed")
            if not (edge.factor > 0 and math.isfinite(edge.factor)):
                raise ValueError(f"Factor for {src.value}->{dst.value} must be positive")
            if (src, dst) in factors:
                raise ValueError(f"Duplicate edge {src.value}->{dst.value}")
            factors[(src, dst)] = edge.factor
            # (neighbour, factor, forward)
            adjacency[src].append((dst, edge.factor, True))
            adjacency[dst].append((src, edge.factor, False))

        self._factors = factors
        self._adjacency = {unit: tuple(links) for unit, links in adjacency.items()}
        self._densities = densities

    @property
    def units(self) -> tuple[Unit, ...]:
        return tuple(Unit)

    @property
    def edges(self) -> tuple[ConversionEdge, ...]:
        return tuple(
            ConversionEdge(src, dst, factor)
            for (src, dst), factor in self._factors.items()
        )

    def has_path(self, from_unit: Union[str, Unit], to_unit: Union[str, Unit]) -> bool:
        src, dst = Unit.parse(from_unit), Unit.parse(to_unit)
        return src == dst or self._apply(1.0, src, dst) is not None

    def convert(
        self,
        amount: float,
        from_unit: Union[str, Unit],
        to_unit: Union[str, Unit],
        ingredient_hint: Optional[str] = None
    ) -> ConversionResult:
        """Convert an amount between units; never raises for unresolvable pairs"""
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidArgument("Amount must be a number", {"amount": repr(amount)})
        if not math.isfinite(amount) or amount < 0:
            raise InvalidArgument("Amount must be a finite number >= 0", {"amount": amount})

        src, dst = Unit.parse(from_unit), Unit.parse(to_unit)
        note = None

        if src == dst:
            converted = amount
        else:
            raw = self._apply(amount, src, dst)
            if raw is None:
                logger.debug("No conversion path %s -> %s, returning amount unchanged", src.value, dst.value)
                converted = amount
                note = APPROXIMATE_NOTE
            else:
                converted = round_half_up(raw, 2)

        if ingredient_hint:
            density_factor = None
            if self._densities is not None and src != dst:
                density_factor = self._densities.lookup(ingredient_hint, src, dst)
            if density_factor is not None:
                converted = round_half_up(amount * density_factor, 2)
                note = DENSITY_APPLIED_NOTE.format(ingredient=ingredient_hint)
            else:
                note = DENSITY_CAVEAT.format(ingredient=ingredient_hint)

        return ConversionResult(
            original_amount=amount,
            original_unit=src,
            converted_amount=converted,
            converted_unit=dst,
            note=note
        )

    def _apply(self, amount: float, src: Unit, dst: Unit) -> Optional[float]:
        if (src, dst) in self._factors:
            return amount * self._factors[(src, dst)]
        if (dst, src) in self._factors:
            return amount / self._factors[(dst, src)]
        return self._walk_path(amount, src, dst)

    def _walk_path(self, amount: float, src: Unit, dst: Unit) -> Optional[float]:
        """Breadth-first search for the path with the fewest edges"""
        visited = {src}
        queue = deque([(src, amount)])
        while queue:
            unit, value = queue.popleft()
            for neighbour, factor, forward in self._adjacency[unit]:
                if neighbour in visited:
                    continue
                step = value * factor if forward else value / factor
                if neighbour == dst:
                    return step
                visited.add(neighbour)
                queue.append((neighbour, step))
        return None
