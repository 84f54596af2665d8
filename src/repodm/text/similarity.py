"""Edit-distance based similarity between normalized texts."""

from Levenshtein import distance


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions turning a into b."""
    return distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity ratio in [0, 1] derived from the edit distance.

    ``(longer - distance) / longer`` where ``longer`` is the length of the longer string.
    Two empty strings are identical (1.0). The ratio is 1.0 only for equal strings and is
    symmetric in its arguments.
    """
    if a == b:
        return 1.0

    longer = max(len(a), len(b))
    if len(a) == 0 or len(b) == 0:
        return 0.0

    return (longer - levenshtein_distance(a, b)) / longer
