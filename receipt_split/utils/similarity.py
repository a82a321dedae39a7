"""
Edit-distance helpers used for fuzzy duplicate detection.

Both functions operate on plain strings; callers normalize first.
"""


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (insert, delete, substitute all cost 1)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the shorter string in the inner loop
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (char_a != char_b),
            ))
        previous = current

    return previous[-1]


def name_similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1]: 1 - distance / max(len(a), len(b)).

    Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest
