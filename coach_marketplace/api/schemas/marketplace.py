"""
Pydantic v2 schemas for the Marketplace Ranking API
===================================================

Request bodies carry the searcher's location and the candidate coaches
returned by the caller's own query; responses carry the ranked coaches with
their score breakdown.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from coach_marketplace.algorithms.rankingTypes import LocationMatchLevel
from coach_marketplace.core.config import settings


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class SearcherLocationIn(BaseModel):
    """The searcher's resolved location.  All fields optional."""

    city: Optional[str] = None
    region: Optional[str] = None
    county: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=2,
        description="ISO-3166-1 alpha-2 country code",
    )


class CoachEngagementIn(BaseModel):
    """Aggregated engagement counters for a coach."""

    review_count: int = Field(default=0, ge=0)
    avg_rating: Optional[float] = Field(default=None, ge=0.0, le=5.0)
    session_count: int = Field(default=0, ge=0)
    last_session_at: Optional[datetime] = None


class CoachIn(BaseModel):
    """A candidate coach.  Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Coach identifier, echoed back in the results")
    display_name: Optional[str] = None

    # Location
    location_city: Optional[str] = None
    location_region: Optional[str] = None
    location_country: Optional[str] = None
    location_country_code: Optional[str] = None
    online_available: bool = False
    in_person_available: bool = False

    # Profile
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    card_image_url: Optional[str] = None
    coach_types: Optional[list[str]] = None
    hourly_rate: Optional[float] = None
    location: Optional[str] = Field(
        default=None, description="Legacy free-text location"
    )
    certifications: Any = None
    is_verified: Optional[bool] = None

    # Engagement and placement
    engagement: Optional[CoachEngagementIn] = None
    is_sponsored: bool = False


class RankCoachesRequest(BaseModel):
    """Request body for ranking marketplace coaches."""

    searcher: Optional[SearcherLocationIn] = None
    coaches: list[CoachIn] = Field(default_factory=list)
    max_results: int = Field(
        default=settings.default_max_results,
        ge=1,
        le=settings.max_results_limit,
        description="Maximum number of ranked coaches to return",
    )
    expand: bool = Field(
        default=True,
        description="Narrow to the closest match level with enough coaches",
    )
    pin_sponsored: bool = Field(
        default=False,
        description="Move sponsored coaches to the top of the page",
    )
    as_of: Optional[datetime] = Field(
        default=None,
        description="Reference time for activity recency (defaults to now)",
    )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class RankingScoreOut(BaseModel):
    """Score breakdown for one coach."""

    model_config = ConfigDict(from_attributes=True)

    location_score: float
    engagement_score: float
    profile_score: float
    total_score: float = Field(description="Weighted composite score (0-100)")
    match_level: LocationMatchLevel
    is_sponsored: bool


class RankedCoachOut(BaseModel):
    """A ranked coach with its score breakdown."""

    id: str
    display_name: Optional[str] = None
    rank: int = Field(description="1-based position in the result list")
    match_description: str
    ranking: RankingScoreOut


class RankCoachesResponse(BaseModel):
    """Ranked coaches plus result-set expansion metadata."""

    total_candidates: int
    total_returned: int
    expanded: bool = Field(
        description="True when the location filter widened beyond the city"
    )
    should_expand: bool = Field(
        description="True when too few coaches matched and the caller should "
        "re-query with a broader location filter"
    )
    effective_match_level: LocationMatchLevel
    coaches: list[RankedCoachOut]


class MatchLevelOut(BaseModel):
    level: LocationMatchLevel
    score: float
    description: str
