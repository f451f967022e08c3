"""
Coach Marketplace Ranking Algorithm
===================================

Ranks candidate coaches by a composite score derived from three weighted
factors:

  1. Location     (weight: 0.50) -- match level between searcher and coach
  2. Engagement   (weight: 0.30) -- reviews, rating, sessions, recency
  3. Profile      (weight: 0.20) -- profile completeness

All component scores are on a 0-100 scale.  The composite score is the
weighted sum, also on a 0-100 scale.

Sponsored coaches are tagged but receive no boost: sponsorship is reported as
a separate flag and ``pin_sponsored`` is available for presentation.

The algorithm is deterministic: given the same inputs (and the same reference
time), it always produces the same ranking.  Ties are broken by match level
specificity, then review count descending, then input order.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from coach_marketplace.algorithms.engagementScorer import safe_count, score_engagement
from coach_marketplace.algorithms.legacyLocation import (
    resolve_coach_location,
    resolve_searcher_location,
)
from coach_marketplace.algorithms.locationMatcher import location_score, match_location
from coach_marketplace.algorithms.profileScorer import score_profile
from coach_marketplace.algorithms.rankingTypes import (
    MATCH_LEVEL_ORDER,
    RANKING_WEIGHTS,
    CoachCandidate,
    LocationData,
    LocationMatchLevel,
    RankedCoach,
    RankingScore,
    T,
    clamp_score,
)

logger = logging.getLogger(__name__)

_LEVEL_RANK: dict[LocationMatchLevel, int] = {
    level: index for index, level in enumerate(MATCH_LEVEL_ORDER)
}


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def aggregate(
    match_level: LocationMatchLevel,
    engagement: float,
    profile: float,
    is_sponsored: bool = False,
) -> RankingScore:
    """Combine the three component scores into a ``RankingScore``.

    ``total = location * 0.50 + engagement * 0.30 + profile * 0.20``, with
    the weights taken from ``RANKING_WEIGHTS``.
    """
    loc_score = location_score(match_level)
    engagement_score = clamp_score(engagement)
    profile_score = clamp_score(profile)

    total = (
        loc_score * RANKING_WEIGHTS["location"]
        + engagement_score * RANKING_WEIGHTS["engagement"]
        + profile_score * RANKING_WEIGHTS["profile"]
    )

    return RankingScore(
        location_score=loc_score,
        engagement_score=round(engagement_score, 2),
        profile_score=round(profile_score, 2),
        total_score=round(clamp_score(total), 2),
        match_level=match_level,
        is_sponsored=bool(is_sponsored),
    )


def lowest_tier_score(is_sponsored: bool = False) -> RankingScore:
    """Score used for a coach whose record could not be scored."""
    return aggregate(LocationMatchLevel.NO_MATCH, 0.0, 0.0, is_sponsored)


def score_coach(
    searcher: Optional[LocationData],
    candidate: CoachCandidate[T],
    now: Optional[datetime] = None,
) -> RankingScore:
    """Score a single candidate against the searcher's location.

    A record that cannot be scored is logged and placed in the lowest tier
    instead of aborting the whole ranking pass.
    """
    try:
        coach_location = resolve_coach_location(
            candidate.location, candidate.profile.location
        )
        match_level = match_location(resolve_searcher_location(searcher), coach_location)
        engagement = score_engagement(candidate.engagement, now)
        profile = score_profile(candidate.profile)
    except (AttributeError, TypeError, ValueError, ArithmeticError):
        logger.warning(
            "Could not score coach %r; placing it in the lowest tier",
            getattr(candidate.engagement, "coach_id", None) or candidate.coach,
            exc_info=True,
        )
        return lowest_tier_score(getattr(candidate, "is_sponsored", False))

    return aggregate(match_level, engagement, profile, candidate.is_sponsored)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def _sort_key(ranked: RankedCoach) -> tuple[float, int, int]:
    return (
        -ranked.ranking.total_score,
        _LEVEL_RANK[ranked.ranking.match_level],
        -ranked.review_count,
    )


def sort_ranked_coaches(ranked: Iterable[RankedCoach[T]]) -> list[RankedCoach[T]]:
    """Order ranked coaches: highest total first, then most specific match
    level, then most reviews.  Python's sort is stable, so remaining ties keep
    their input order."""
    return sorted(ranked, key=_sort_key)


def _review_count(candidate: CoachCandidate) -> int:
    engagement = candidate.engagement
    if engagement is None:
        return 0
    return safe_count(getattr(engagement, "review_count", 0))


def rank_coaches(
    candidates: Sequence[CoachCandidate[T]],
    searcher: Optional[LocationData],
    now: Optional[datetime] = None,
) -> list[RankedCoach[T]]:
    """Rank a list of candidate coaches by composite score.

    Args:
        candidates: Coaches to rank.  The ``coach`` payload is opaque and is
            returned unchanged.
        searcher: The searcher's resolved location, or ``None`` if unknown.
        now: Reference time for engagement recency.  Fixed once per call so
            every candidate is scored against the same instant.

    Returns:
        List of ``RankedCoach`` sorted by ``sort_ranked_coaches``.
    """
    now = now or datetime.now(timezone.utc)

    ranked = [
        RankedCoach(
            coach=candidate.coach,
            ranking=score_coach(searcher, candidate, now),
            review_count=_review_count(candidate),
        )
        for candidate in candidates
    ]

    logger.debug("Scored %d coach candidates", len(ranked))
    return sort_ranked_coaches(ranked)


def pin_sponsored(ranked: Sequence[RankedCoach[T]]) -> list[RankedCoach[T]]:
    """Return a copy with sponsored coaches first.

    Organic order is preserved within the sponsored and organic groups.
    Scores are not modified.
    """
    sponsored = [r for r in ranked if r.ranking.is_sponsored]
    organic = [r for r in ranked if not r.ranking.is_sponsored]
    return sponsored + organic
