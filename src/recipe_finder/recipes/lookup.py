"""Answer free-text ingredient queries against a catalog."""

import dataclasses
from typing import Any, Dict, List, Optional

from ..ingredients.normalization import split_query
from ..ingredients.resolution import IngredientResolver
from .catalog import Catalog
from .models import Recipe
from .suggestion import suggest


@dataclasses.dataclass
class SuggestionResponse:
    """Everything a caller shows for one query."""

    mapped: List[str]
    unrecognized: List[str]
    suggestions: List[Recipe]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mapped": list(self.mapped),
            "unrecognized": list(self.unrecognized),
            "suggestions": [recipe.to_dict() for recipe in self.suggestions],
        }


def find_recipes(
    catalog: Catalog, text: str, resolver: Optional[IngredientResolver] = None
) -> SuggestionResponse:
    """Split a query, resolve its terms and list the recipes they make.

    Args:
        catalog: Catalog to query.
        text: Ingredient terms separated by commas, semicolons or newlines.
        resolver: Resolver to reuse across queries. A default one is built
            for ``catalog`` when omitted.

    Returns:
        A SuggestionResponse.
    """
    if resolver is None:
        resolver = IngredientResolver(catalog)
    resolution = resolver.resolve(split_query(text))
    return SuggestionResponse(
        mapped=resolution.mapped,
        unrecognized=resolution.unknown,
        suggestions=suggest(catalog, resolution.mapped),
    )


def list_ingredients(catalog: Catalog) -> List[str]:
    """Return the catalog's canonical ingredient names, sorted."""
    return list(catalog.all_ingredients)
