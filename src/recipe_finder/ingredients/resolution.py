import logging
from typing import Iterable, List, Optional, Tuple

from .distance import levenshtein
from .models import IngredientMatch, ResolutionResult
from .normalization import normalize_key

logger = logging.getLogger(__name__)

# Highest accepted fuzzy score. Absolute, tuned for short ingredient names.
FUZZY_MATCH_THRESHOLD = 2.5

# Applied to the edit distance when one key contains the other
SUBSTRING_FACTOR = 0.5


class IngredientResolver:
    """Maps free-text ingredient terms onto a catalog's canonical names.

    Each term is normalized and looked up exactly first. Only on a miss is
    every catalog ingredient scored by edit distance, with the distance
    scaled down when one key is a substring of the other. The lowest score
    wins, earlier candidates (alphabetical) winning ties, and the match is
    accepted if the score does not exceed the threshold.

    The fuzzy scan costs one distance computation per catalog ingredient
    for each term that misses the exact lookup, which is fine for catalogs
    of up to a few thousand ingredients.

    Attributes:
        catalog: The catalog providing canonical names and lookups.
        threshold (float): Highest accepted fuzzy score.
        substring_factor (float): Multiplier for substring-related keys.
    """

    def __init__(
        self,
        catalog,
        threshold: float = FUZZY_MATCH_THRESHOLD,
        substring_factor: float = SUBSTRING_FACTOR,
    ):
        self.catalog = catalog
        self.threshold = threshold
        self.substring_factor = substring_factor
        self._candidates: List[Tuple[str, str]] = [
            (normalize_key(name), name) for name in catalog.all_ingredients
        ]

    def _score(self, key: str, candidate_key: str) -> float:
        score = float(levenshtein(key, candidate_key))
        if candidate_key in key or key in candidate_key:
            score *= self.substring_factor
        return score

    def match(self, term: str) -> Optional[IngredientMatch]:
        """Find the canonical ingredient for a single raw term.

        Args:
            term: Raw user text for one ingredient.

        Returns:
            An IngredientMatch with source 'exact' or 'fuzzy', or None if the
            term normalizes to nothing or no candidate is close enough.
        """
        key = normalize_key(term)
        if not key:
            return None
        return self._match_key(term, key)

    def _match_key(self, term: str, key: str) -> Optional[IngredientMatch]:
        exact = self.catalog.normalized_lookup.get(key)
        if exact is not None:
            return IngredientMatch(term, exact, 0.0, "exact")

        best_name = None
        best_score = float("inf")
        for candidate_key, name in self._candidates:
            score = self._score(key, candidate_key)
            if score < best_score:
                best_name, best_score = name, score

        if best_name is not None and best_score <= self.threshold:
            logger.debug(f"Fuzzy matched '{term}' to '{best_name}' (score {best_score})")
            return IngredientMatch(term, best_name, best_score, "fuzzy")
        return None

    def resolve(self, raw_terms: Iterable[str]) -> ResolutionResult:
        """Resolve raw terms into canonical names and unrecognized terms.

        Terms that normalize to an empty key are dropped silently.

        Args:
            raw_terms: Raw ingredient terms, in user order.

        Returns:
            ResolutionResult whose ``mapped`` list holds each canonical name
            once in first-seen order and whose ``unknown`` list holds the
            original text of every unresolved term.
        """
        result = ResolutionResult()
        seen = set()
        for term in raw_terms:
            key = normalize_key(term)
            if not key:
                continue
            match = self._match_key(term, key)
            if match is None:
                result.unknown.append(term)
            elif match.ingredient not in seen:
                seen.add(match.ingredient)
                result.mapped.append(match.ingredient)
        return result


def resolve_ingredients(catalog, raw_terms: Iterable[str]) -> ResolutionResult:
    """Resolve raw terms against ``catalog`` with the default thresholds."""
    return IngredientResolver(catalog).resolve(raw_terms)
