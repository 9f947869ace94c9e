"""
Ranker

Filters scored programs by the minimum match score and ranks them.
"""

from typing import List, Sequence
from .contracts import MatchResult
from .constants import DEFAULT_MINIMUM_MATCH_SCORE


def filter_by_minimum(
    results: Sequence[MatchResult],
    minimum_match_score: int = DEFAULT_MINIMUM_MATCH_SCORE
) -> List[MatchResult]:
    """Keep results scoring at or above the cutoff (inclusive)."""
    return [r for r in results if r.match_score >= minimum_match_score]


def rank_matches(
    results: Sequence[MatchResult],
    minimum_match_score: int = DEFAULT_MINIMUM_MATCH_SCORE
) -> List[MatchResult]:
    """
    Filter and rank match results by score (descending).

    The sort is stable, so programs with equal scores keep their catalog order
    and repeated calls over unchanged data give identical output.

    Args:
        results: Scored programs in catalog order
        minimum_match_score: Inclusive cutoff

    Returns:
        Ranked list of results at or above the cutoff
    """
    return sorted(
        filter_by_minimum(results, minimum_match_score),
        key=lambda x: x.match_score,
        reverse=True
    )
