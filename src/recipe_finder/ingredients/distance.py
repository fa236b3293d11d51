"""Edit distance between ingredient keys."""


def levenshtein(a: str, b: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost 1. Works on code
    points and is case and diacritic sensitive, so callers compare
    normalized keys. Memory is two rows sized to the shorter string.

    Args:
        a: First string.
        b: Second string.

    Returns:
        The edit distance, a non-negative integer.

    Examples:
        >>> levenshtein("saltt", "salt")
        1
        >>> levenshtein("", "water")
        5
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)
    for i, ca in enumerate(a, start=1):
        current[0] = i
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current[j] = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous, current = current, previous
    return previous[len(b)]
