"""Ingredient normalization utilities."""

import re
import unicodedata
from typing import List

# Separators accepted between terms of a free-text ingredient query
QUERY_SEPARATORS = re.compile(r"[,;\n]+")

# Unicode category prefixes kept in a normalized key: letters, numbers, punctuation
_KEPT_CATEGORIES = ("L", "N", "P")


def _keep_char(ch: str) -> bool:
    if ch.isspace():
        return True
    return unicodedata.category(ch)[0] in _KEPT_CATEGORIES


def normalize_key(text: str) -> str:
    """Normalize ingredient text into a comparison key.

    Case-folds the text, decomposes it so diacritics become separate
    combining marks, drops those marks along with symbols and control
    characters, and collapses whitespace.

    Args:
        text: Arbitrary ingredient text.

    Returns:
        The normalized key. Empty input gives an empty key.

    Examples:
        >>> normalize_key("  Crème   Brûlée ")
        "creme brulee"
        >>> normalize_key("Salt ★")
        "salt"
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFKD", text)
    folded = unicodedata.normalize("NFKD", folded.casefold())
    kept = "".join(ch for ch in folded if _keep_char(ch))
    return " ".join(kept.split())


def split_query(text: str) -> List[str]:
    """Split a free-text ingredient query into trimmed, non-empty terms.

    Examples:
        >>> split_query("salt, water;;\\n  sugar ,")
        ["salt", "water", "sugar"]
    """
    if not text:
        return []
    return [part.strip() for part in QUERY_SEPARATORS.split(text) if part.strip()]
