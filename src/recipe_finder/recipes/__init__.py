"""Recipe catalog and suggestion utilities."""

from .catalog import REQUIRED_COLUMNS, Catalog, FormatError, load_catalog
from .lookup import SuggestionResponse, find_recipes, list_ingredients
from .models import Recipe
from .suggestion import suggest

__all__ = [
    "Recipe",
    "Catalog",
    "FormatError",
    "REQUIRED_COLUMNS",
    "load_catalog",
    "suggest",
    "SuggestionResponse",
    "find_recipes",
    "list_ingredients",
]
