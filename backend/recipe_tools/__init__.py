"""
FEAST Recipe Tools
Tool contracts, unit conversion and ingredient matching for the recipe agent
"""

from recipe_tools.errors import (
    ToolError,
    ValidationError,
    InvalidArgument,
    NotFound,
    InternalContractViolation,
    ExternalCollaboratorFailure,
)
from recipe_tools.units import Unit, ConversionEdge, ConversionGraph, ConversionResult
from recipe_tools.matcher import IngredientMatcher
from recipe_tools.models import RecipeCandidate, MatchResult
from recipe_tools.registry import ToolRegistry, ToolSpec, ToolResult, Dispatcher
from recipe_tools.tools import build_registry

__all__ = [
    "ToolError",
    "ValidationError",
    "InvalidArgument",
    "NotFound",
    "InternalContractViolation",
    "ExternalCollaboratorFailure",
    "Unit",
    "ConversionEdge",
    "ConversionGraph",
    "ConversionResult",
    "IngredientMatcher",
    "RecipeCandidate",
    "MatchResult",
    "ToolRegistry",
    "ToolSpec",
    "ToolResult",
    "Dispatcher",
    "build_registry",
]
