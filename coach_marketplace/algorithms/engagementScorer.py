"""
Engagement Scorer
=================

Turns a coach's aggregated activity counters into a 0-100 "social proof"
score.  Four sub-signals are normalised to 0-100 and combined with
``ENGAGEMENT_WEIGHTS``:

  1. Reviews   (0.30) -- log-scaled review count, saturating at 100 reviews
  2. Rating    (0.30) -- average rating out of 5; unrated coaches get 50
  3. Sessions  (0.15) -- log-scaled session count, saturating at 200 sessions
  4. Recency   (0.25) -- full marks within 30 days, linear decay to 0 at 180

Missing or malformed values degrade to neutral/low defaults; the scorer never
raises for bad data.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional

from coach_marketplace.algorithms.rankingTypes import (
    ENGAGEMENT_WEIGHTS,
    CoachEngagementData,
    clamp_score,
)

# Normalisation constants
REVIEW_SATURATION: float = 100.0
SESSION_SATURATION: float = 200.0
MAX_RATING: float = 5.0
NEUTRAL_RATING_SCORE: float = 50.0
RECENT_ACTIVITY_DAYS: float = 30.0
STALE_ACTIVITY_DAYS: float = 180.0


def safe_count(value: Any) -> int:
    """Coerce a counter to a non-negative int; junk and non-finite counts are
    zero."""
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


def _log_scaled(count: int, saturation: float) -> float:
    if count <= 0:
        return 0.0
    return min(math.log1p(count) / math.log1p(saturation), 1.0) * 100.0


def _normalise_reviews(review_count: Any) -> float:
    """More reviews score higher, with diminishing returns."""
    return _log_scaled(safe_count(review_count), REVIEW_SATURATION)


def _normalise_sessions(session_count: Any) -> float:
    return _log_scaled(safe_count(session_count), SESSION_SATURATION)


def _normalise_rating(avg_rating: Any) -> float:
    """Map a 0-5 rating onto 0-100.

    No rating yet is a neutral midpoint so new coaches are not penalised.
    """
    if avg_rating is None:
        return NEUTRAL_RATING_SCORE
    try:
        rating = float(avg_rating)
    except (TypeError, ValueError):
        return NEUTRAL_RATING_SCORE
    if math.isnan(rating):
        return NEUTRAL_RATING_SCORE
    rating = max(0.0, min(rating, MAX_RATING))
    return (rating / MAX_RATING) * 100.0


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalise_recency(
    last_session_at: Optional[datetime],
    now: datetime,
) -> float:
    """Recent activity scores higher.  Never sessioned scores 0."""
    if not isinstance(last_session_at, datetime):
        return 0.0

    age_days = (_as_utc(now) - _as_utc(last_session_at)).total_seconds() / 86400.0
    if age_days <= RECENT_ACTIVITY_DAYS:
        return 100.0
    if age_days >= STALE_ACTIVITY_DAYS:
        return 0.0
    window = STALE_ACTIVITY_DAYS - RECENT_ACTIVITY_DAYS
    return ((STALE_ACTIVITY_DAYS - age_days) / window) * 100.0


def engagement_components(
    data: Optional[CoachEngagementData],
    now: Optional[datetime] = None,
) -> dict[str, float]:
    """Return the normalised 0-100 value of each engagement sub-signal."""
    data = data or CoachEngagementData()
    now = now or datetime.now(timezone.utc)
    return {
        "reviews": _normalise_reviews(data.review_count),
        "rating": _normalise_rating(data.avg_rating),
        "sessions": _normalise_sessions(data.session_count),
        "recency": _normalise_recency(data.last_session_at, now),
    }


def score_engagement(
    data: Optional[CoachEngagementData],
    now: Optional[datetime] = None,
) -> float:
    """Compute the 0-100 engagement score for a coach.

    Args:
        data: Aggregated engagement counters.  ``None`` scores as a brand-new
            coach (no reviews, no sessions).
        now: Reference time for the recency signal.  Defaults to the current
            UTC time; pass a fixed value for reproducible rankings.

    Returns:
        Weighted engagement score rounded to 2 decimal places.
    """
    components = engagement_components(data, now)
    total = sum(
        components[name] * weight for name, weight in ENGAGEMENT_WEIGHTS.items()
    )
    return round(clamp_score(total), 2)
