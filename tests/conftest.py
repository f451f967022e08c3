"""
Shared pytest fixtures for the coach ranking unit tests.

Provides a fixed reference time and sample searcher / coach records so every
test scores against the same inputs.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from coach_marketplace.algorithms.rankingTypes import (
    CoachCandidate,
    CoachEngagementData,
    CoachLocationData,
    CoachProfileData,
    LocationData,
)

# Fixed "now" so recency scores are reproducible
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Reference time
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return NOW


# ---------------------------------------------------------------------------
# Searcher fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def leeds_searcher() -> LocationData:
    """A searcher in Leeds, West Yorkshire, United Kingdom."""
    return LocationData(
        city="Leeds",
        region="West Yorkshire",
        country="United Kingdom",
        country_code="GB",
    )


# ---------------------------------------------------------------------------
# Coach fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def leeds_coach_location() -> CoachLocationData:
    """An in-person coach based in Leeds."""
    return CoachLocationData(
        location_city="Leeds",
        location_region="West Yorkshire",
        location_country="United Kingdom",
        online_available=False,
        in_person_available=True,
    )


@pytest.fixture
def full_profile() -> CoachProfileData:
    """A profile with every scored field populated."""
    return CoachProfileData(
        bio="Strength and conditioning coach with ten years of experience.",
        profile_image_url="https://cdn.example.com/coaches/a.jpg",
        card_image_url="https://cdn.example.com/coaches/a-card.jpg",
        coach_types=["strength", "nutrition"],
        hourly_rate=45.0,
        location="Leeds, United Kingdom",
        certifications=["Level 3 Personal Trainer"],
        is_verified=True,
    )


@pytest.fixture
def empty_profile() -> CoachProfileData:
    return CoachProfileData()


@pytest.fixture
def strong_engagement() -> CoachEngagementData:
    """An established, active coach with plenty of good reviews."""
    return CoachEngagementData(
        coach_id="coach-a",
        review_count=50,
        avg_rating=4.8,
        session_count=120,
        last_session_at=NOW - timedelta(days=3),
    )


@pytest.fixture
def make_candidate():
    """Factory for ``CoachCandidate`` objects with sensible defaults."""

    def _make(
        coach: Any = "coach",
        *,
        city: Optional[str] = None,
        region: Optional[str] = None,
        country: Optional[str] = None,
        online: bool = False,
        in_person: bool = True,
        profile: Optional[CoachProfileData] = None,
        engagement: Optional[CoachEngagementData] = None,
        is_sponsored: bool = False,
    ) -> CoachCandidate:
        return CoachCandidate(
            coach=coach,
            location=CoachLocationData(
                location_city=city,
                location_region=region,
                location_country=country,
                online_available=online,
                in_person_available=in_person,
            ),
            profile=profile or CoachProfileData(),
            engagement=engagement,
            is_sponsored=is_sponsored,
        )

    return _make
