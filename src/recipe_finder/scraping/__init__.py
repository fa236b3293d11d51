"""Web scraping utilities for recipe tables."""

from .polite import PoliteSession, check_robots_allowed
from .retry import TransientHTTPError, retry_on_connection_error
from .table import (
    RecipeCell,
    RecipeRow,
    parse_recipe_table,
    scrape_recipe_table,
    write_recipe_table,
)

__all__ = [
    "PoliteSession",
    "check_robots_allowed",
    "retry_on_connection_error",
    "TransientHTTPError",
    "RecipeCell",
    "RecipeRow",
    "parse_recipe_table",
    "scrape_recipe_table",
    "write_recipe_table",
]
