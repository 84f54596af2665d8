"""Match and related classes for classifying scored file pairs."""

from enum import StrEnum
from typing import NamedTuple

DEFAULT_NEAR_THRESHOLD = 0.7


class MatchKind(StrEnum):
    IDENTICAL = 'identical'
    NEAR_MATCH = 'near_match'


class MatchRule:
    """Decides which similarity scores are reported and how.

    A score of exactly 1.0 means the normalized texts are equal and is classified as
    identical. Scores strictly between near_threshold and 1.0 are near matches.
    Everything else, including a score equal to near_threshold, is discarded.

    Attributes:
        near_threshold: Exclusive lower bound for near matches, in [0, 1)
    """

    def __init__(self, *, near_threshold: float = DEFAULT_NEAR_THRESHOLD):
        if not 0.0 <= near_threshold < 1.0:
            raise ValueError(f"Near-match threshold must be in [0, 1): {near_threshold}")
        self.near_threshold = near_threshold

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatchRule):
            return False
        return self.near_threshold == other.near_threshold

    def __hash__(self) -> int:
        return hash(self.near_threshold)

    def __repr__(self) -> str:
        return f"MatchRule(near_threshold={self.near_threshold})"

    def classify(self, score: float) -> MatchKind | None:
        """Classify a similarity score.

        Returns:
            MatchKind.IDENTICAL for 1.0, MatchKind.NEAR_MATCH above the threshold,
            None when the pair is not reported
        """
        if score == 1.0:
            return MatchKind.IDENTICAL
        if self.near_threshold < score < 1.0:
            return MatchKind.NEAR_MATCH
        return None


def classify(score: float, threshold_near: float = DEFAULT_NEAR_THRESHOLD) -> MatchKind | None:
    return MatchRule(near_threshold=threshold_near).classify(score)


class Match(NamedTuple):
    """A reported pair of files.

    Attributes:
        kind: Identical or near match
        path1: Path of the file in the first corpus
        path2: Path of the file in the second corpus
        similarity: Similarity ratio, 1.0 for identical matches
        order: Position of the pair in the row-major corpus1 x corpus2 cross product,
               used to keep presentation order independent of completion order
    """
    kind: MatchKind
    path1: str
    path2: str
    similarity: float
    order: int = 0
