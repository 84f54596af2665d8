"""Aggregation of matches into a comparison report."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable

from .match import Match, MatchKind

DEFAULT_HIGH_THRESHOLD = 0.9


class RiskLevel(StrEnum):
    LOW = 'low'
    MODERATE = 'moderate'
    HIGH = 'high'


def risk_level(average_similarity: float) -> RiskLevel:
    """Coarse plagiarism risk derived from the average near-match similarity."""
    if average_similarity > 0.8:
        return RiskLevel.HIGH
    if average_similarity > 0.6:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


@dataclass(frozen=True)
class ComparisonReport:
    """Outcome of one comparison run.

    Attributes:
        identical: Identical matches in discovery order
        near_matches: Near matches sorted by similarity descending, ties in discovery order
        average_similarity: Mean similarity of near matches, 0.0 when there are none
        high_similarity_count: Number of near matches above the high threshold
        risk: Risk level derived from average_similarity
        files1: Number of source files listed in the first corpus
        files2: Number of source files listed in the second corpus
        skipped_files: Files excluded because they are empty or their content could not be fetched
        scored_pairs: Number of file pairs whose similarity was computed
    """
    identical: tuple[Match, ...] = ()
    near_matches: tuple[Match, ...] = ()
    average_similarity: float = 0.0
    high_similarity_count: int = 0
    risk: RiskLevel = RiskLevel.LOW
    files1: int = 0
    files2: int = 0
    skipped_files: int = 0
    scored_pairs: int = 0
    high_threshold: float = field(default=DEFAULT_HIGH_THRESHOLD, repr=False)


def aggregate(matches: Iterable[Match], *, high_threshold: float = DEFAULT_HIGH_THRESHOLD,
              files1: int = 0, files2: int = 0, skipped_files: int = 0,
              scored_pairs: int = 0) -> ComparisonReport:
    """Summarize matches, which may arrive in any order, into a ComparisonReport."""
    ordered = sorted(matches, key=lambda m: m.order)

    identical = tuple(m for m in ordered if m.kind == MatchKind.IDENTICAL)
    # sorted() is stable, so equal scores keep discovery order
    near_matches = tuple(sorted(
        (m for m in ordered if m.kind == MatchKind.NEAR_MATCH),
        key=lambda m: m.similarity,
        reverse=True
    ))

    if near_matches:
        average = sum(m.similarity for m in near_matches) / len(near_matches)
    else:
        average = 0.0

    return ComparisonReport(
        identical=identical,
        near_matches=near_matches,
        average_similarity=average,
        high_similarity_count=sum(1 for m in near_matches if m.similarity > high_threshold),
        risk=risk_level(average),
        files1=files1,
        files2=files2,
        skipped_files=skipped_files,
        scored_pairs=scored_pairs,
        high_threshold=high_threshold
    )
