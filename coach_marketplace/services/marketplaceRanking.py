"""
Marketplace Ranking Service
===========================

Runs the coach ranking pipeline for one marketplace search request.

Pipeline:
  1. Score and sort every candidate (location, engagement, profile)
  2. Optionally narrow to the closest coaches, widening the location filter
     until enough remain
  3. Optionally pin sponsored coaches to the top for display
  4. Truncate to the requested number of results

Candidate coaches are supplied by the caller; this service performs no
queries of its own.  The ``should_expand`` flag tells the caller whether its
own candidate query was too narrow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, Optional, Sequence

from coach_marketplace.algorithms.coachRanking import pin_sponsored as _pin_sponsored
from coach_marketplace.algorithms.coachRanking import rank_coaches
from coach_marketplace.algorithms.rankingTypes import (
    MIN_RESULTS_BEFORE_EXPANSION,
    CoachCandidate,
    LocationData,
    LocationMatchLevel,
    RankedCoach,
    T,
)
from coach_marketplace.services.searchExpansion import (
    filter_by_location_with_expansion,
    should_expand_search,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MarketplaceRankingError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Result DTO
# ---------------------------------------------------------------------------

@dataclass
class MarketplaceRankingResult(Generic[T]):
    """Ranked coaches for one search, plus expansion metadata."""

    total_candidates: int
    expanded: bool
    should_expand: bool
    effective_match_level: LocationMatchLevel
    matches: list[RankedCoach[T]] = field(default_factory=list)


def rank_marketplace(
    searcher: Optional[LocationData],
    candidates: Sequence[CoachCandidate[T]],
    *,
    max_results: Optional[int] = None,
    expand: bool = True,
    pin_sponsored: bool = False,
    min_results: int = MIN_RESULTS_BEFORE_EXPANSION,
    now: Optional[datetime] = None,
) -> MarketplaceRankingResult[T]:
    """Rank candidate coaches for a marketplace search.

    Args:
        searcher: The searcher's resolved location, or ``None``.
        candidates: Coaches returned by the caller's candidate query.
        max_results: Maximum coaches to return.  ``None`` returns all.
        expand: Narrow to the closest match level that still yields
            ``min_results`` coaches.  When false every ranked coach is kept.
        pin_sponsored: Move sponsored coaches to the top of the page.
        min_results: Result-set size below which expansion is signalled.
        now: Reference time for engagement recency.

    Returns:
        ``MarketplaceRankingResult`` with the ranked page.

    Raises:
        MarketplaceRankingError: If ``max_results`` or ``min_results`` is not
            positive.
    """
    if max_results is not None and max_results < 1:
        raise MarketplaceRankingError(
            f"max_results must be at least 1, got {max_results}."
        )
    if min_results < 1:
        raise MarketplaceRankingError(
            f"min_results must be at least 1, got {min_results}."
        )

    now = now or datetime.now(timezone.utc)
    ranked = rank_coaches(candidates, searcher, now)

    if expand:
        expansion = filter_by_location_with_expansion(ranked, min_results)
        matches = expansion.coaches
        effective_level = expansion.effective_match_level
        expanded = expansion.expanded
    else:
        matches = ranked
        effective_level = LocationMatchLevel.NO_MATCH
        expanded = False

    needs_expansion = should_expand_search(matches, min_results)

    if pin_sponsored:
        matches = _pin_sponsored(matches)

    if max_results is not None:
        matches = matches[:max_results]

    logger.info(
        "Marketplace ranking: %d candidates, %d returned, effective level=%s, "
        "expanded=%s, should_expand=%s",
        len(candidates),
        len(matches),
        effective_level.value,
        expanded,
        needs_expansion,
    )

    return MarketplaceRankingResult(
        total_candidates=len(candidates),
        expanded=expanded,
        should_expand=needs_expansion,
        effective_match_level=effective_level,
        matches=matches,
    )
