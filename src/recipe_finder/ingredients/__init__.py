"""Ingredient normalization, distance and resolution utilities."""

from .distance import levenshtein
from .models import IngredientMatch, ResolutionResult
from .normalization import normalize_key, split_query
from .resolution import (
    FUZZY_MATCH_THRESHOLD,
    SUBSTRING_FACTOR,
    IngredientResolver,
    resolve_ingredients,
)

__all__ = [
    "levenshtein",
    "normalize_key",
    "split_query",
    "IngredientMatch",
    "ResolutionResult",
    "IngredientResolver",
    "resolve_ingredients",
    "FUZZY_MATCH_THRESHOLD",
    "SUBSTRING_FACTOR",
]
