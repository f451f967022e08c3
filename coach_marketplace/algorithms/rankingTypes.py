"""
Coach Ranking Types & Tables
============================

Data contracts and constant tables shared by the marketplace ranking
algorithms.  Every table here is read-only after import; scoring modules look
values up from these maps instead of hard-coding numbers so the ranking stays
auditable.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")


class LocationMatchLevel(str, enum.Enum):
    EXACT_CITY = "exact_city"
    SAME_REGION = "same_region"
    SAME_COUNTRY = "same_country"
    ONLINE_ONLY = "online_only"
    NO_MATCH = "no_match"


# Most specific first.  Used for tie-breaking and radius expansion.
MATCH_LEVEL_ORDER: tuple[LocationMatchLevel, ...] = (
    LocationMatchLevel.EXACT_CITY,
    LocationMatchLevel.SAME_REGION,
    LocationMatchLevel.SAME_COUNTRY,
    LocationMatchLevel.ONLINE_ONLY,
    LocationMatchLevel.NO_MATCH,
)


# ---------------------------------------------------------------------------
# Weight and score tables
# ---------------------------------------------------------------------------

def validate_weights(weights: Mapping[str, float], total: float = 1.0) -> None:
    """Raise ``ValueError`` unless ``weights`` sum to ``total``."""
    weight_sum = sum(weights.values())
    if abs(weight_sum - total) > 1e-9:
        raise ValueError(
            f"Weights must sum to {total}, got {weight_sum:.4f}. "
            f"Weights: {dict(weights)}"
        )


RANKING_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "location": 0.50,
    "engagement": 0.30,
    "profile": 0.20,
})

LOCATION_SCORES: Mapping[LocationMatchLevel, float] = MappingProxyType({
    LocationMatchLevel.EXACT_CITY: 100.0,
    LocationMatchLevel.SAME_REGION: 70.0,
    LocationMatchLevel.SAME_COUNTRY: 40.0,
    LocationMatchLevel.ONLINE_ONLY: 30.0,
    LocationMatchLevel.NO_MATCH: 10.0,
})

# Engagement sub-signals (each normalised to 0-100 before weighting)
ENGAGEMENT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "reviews": 0.30,
    "rating": 0.30,
    "sessions": 0.15,
    "recency": 0.25,
})

# Points per populated profile field; sums to 100
PROFILE_FIELD_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "bio": 15.0,
    "profile_image": 15.0,
    "card_image": 10.0,
    "coach_types": 15.0,
    "hourly_rate": 10.0,
    "certifications": 15.0,
    "is_verified": 20.0,
})

MIN_RESULTS_BEFORE_EXPANSION: int = 5

MIN_SCORE: float = 0.0
MAX_SCORE: float = 100.0

validate_weights(RANKING_WEIGHTS)
validate_weights(ENGAGEMENT_WEIGHTS)
validate_weights(PROFILE_FIELD_WEIGHTS, total=MAX_SCORE)


def clamp_score(value: float) -> float:
    """Clamp a score into the 0-100 range."""
    return max(MIN_SCORE, min(float(value), MAX_SCORE))


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass
class LocationData:
    """The searcher's resolved location.  Every field is optional."""

    city: Optional[str] = None
    region: Optional[str] = None
    county: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None  # ISO-3166-1 alpha-2


@dataclass
class CoachLocationData:
    """Where a coach works and how they can be reached."""

    location_city: Optional[str] = None
    location_region: Optional[str] = None
    location_country: Optional[str] = None
    online_available: bool = False
    in_person_available: bool = False
    location_country_code: Optional[str] = None

    @property
    def is_online_only(self) -> bool:
        return bool(self.online_available) and not bool(self.in_person_available)


@dataclass(frozen=True)
class CoachEngagementData:
    """Aggregated historical activity for a coach."""

    coach_id: Any = None
    review_count: int = 0
    avg_rating: Optional[float] = None  # 0.0-5.0, None when unrated
    session_count: int = 0
    last_session_at: Optional[datetime] = None


@dataclass
class CoachProfileData:
    """Public profile fields checked for completeness."""

    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    card_image_url: Optional[str] = None
    coach_types: Optional[list[str]] = None
    hourly_rate: Optional[float] = None
    location: Optional[str] = None  # legacy free text
    certifications: Any = None
    is_verified: Optional[bool] = None


@dataclass
class CoachCandidate(Generic[T]):
    """A coach to be ranked, with the fields the scorers read."""

    coach: T
    location: CoachLocationData = field(default_factory=CoachLocationData)
    profile: CoachProfileData = field(default_factory=CoachProfileData)
    engagement: Optional[CoachEngagementData] = None
    is_sponsored: bool = False


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RankingScore:
    """Score breakdown for one coach in one ranking request."""

    location_score: float
    engagement_score: float
    profile_score: float
    total_score: float
    match_level: LocationMatchLevel
    is_sponsored: bool = False


@dataclass
class RankedCoach(Generic[T]):
    """An opaque coach record paired with its ranking score."""

    coach: T
    ranking: RankingScore
    review_count: int = 0
