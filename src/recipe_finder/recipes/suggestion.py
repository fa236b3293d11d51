"""Find the recipes that can be made from a set of ingredients."""

from typing import Dict, Iterable, List

from .catalog import Catalog
from .models import Recipe


def suggest(catalog: Catalog, resolved_ingredients: Iterable[str]) -> List[Recipe]:
    """Return every recipe whose inputs are all among the given ingredients.

    Candidate recipes come from the ingredient index of each supplied name.
    A candidate is kept once the supplied names cover each of its distinct
    inputs, so a recipe needing anything outside the set is never returned.

    Args:
        catalog: Catalog to search.
        resolved_ingredients: Canonical ingredient names, e.g. the ``mapped``
            list of a ResolutionResult.

    Returns:
        Matching recipes without duplicates, in catalog order. Empty when no
        ingredients are given.
    """
    have = list(dict.fromkeys(resolved_ingredients))
    if not have:
        return []

    # recipe ID -> number of its distinct inputs found in `have`
    covered: Dict[int, int] = {}
    for ingredient in have:
        for recipe_id in dict.fromkeys(catalog.ingredient_index.get(ingredient, ())):
            covered[recipe_id] = covered.get(recipe_id, 0) + 1

    return [
        catalog.recipes[recipe_id]
        for recipe_id, count in sorted(covered.items())
        if count == len(set(catalog.recipes[recipe_id].inputs))
    ]
