"""Recipe Finder - resolve ingredient lists and find the recipes they make."""

__version__ = "0.1.0"

from . import ingredients, recipes, scraping

__all__ = ["ingredients", "recipes", "scraping"]
