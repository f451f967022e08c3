"""
Location Matcher
================

Classifies how close a coach is to the person searching, as one of five
discrete match levels, and maps each level to a location score.

Rules are evaluated from the online-only override down to the coarsest
geographic match; the first rule that applies wins:

  1. Online-only coach (online, not in person)  -> online_only
  2. Same city                                 -> exact_city
  3. Same region (searcher county as fallback)  -> same_region
  4. Same country                              -> same_country
  5. Anything else                             -> no_match

City, region and country names arrive from geocoding results as well as
free-text legacy fields, so every comparison is trimmed and case-insensitive.
Missing values never match and never raise.
"""

from __future__ import annotations

from typing import Optional

from coach_marketplace.algorithms.rankingTypes import (
    LOCATION_SCORES,
    CoachLocationData,
    LocationData,
    LocationMatchLevel,
)

MATCH_LEVEL_DESCRIPTIONS: dict[LocationMatchLevel, str] = {
    LocationMatchLevel.EXACT_CITY: "In your city",
    LocationMatchLevel.SAME_REGION: "In your region",
    LocationMatchLevel.SAME_COUNTRY: "In your country",
    LocationMatchLevel.ONLINE_ONLY: "Available online",
    LocationMatchLevel.NO_MATCH: "All coaches",
}


def _normalise(value: Optional[str]) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().casefold()


def _places_match(a: Optional[str], b: Optional[str]) -> bool:
    """True when both values are non-empty and equal after normalisation."""
    norm_a = _normalise(a)
    norm_b = _normalise(b)
    return bool(norm_a) and bool(norm_b) and norm_a == norm_b


def match_location(
    searcher: Optional[LocationData],
    coach: CoachLocationData,
) -> LocationMatchLevel:
    """Return the most specific match level between searcher and coach."""
    if coach.is_online_only:
        return LocationMatchLevel.ONLINE_ONLY

    searcher = searcher or LocationData()

    if _places_match(searcher.city, coach.location_city):
        return LocationMatchLevel.EXACT_CITY

    searcher_region = searcher.region if _normalise(searcher.region) else searcher.county
    if _places_match(searcher_region, coach.location_region):
        return LocationMatchLevel.SAME_REGION

    if _places_match(searcher.country, coach.location_country):
        return LocationMatchLevel.SAME_COUNTRY

    return LocationMatchLevel.NO_MATCH


def location_score(level: LocationMatchLevel) -> float:
    """Look up the 0-100 location score for a match level."""
    return LOCATION_SCORES[level]


def describe_match_level(level: LocationMatchLevel) -> str:
    return MATCH_LEVEL_DESCRIPTIONS.get(level, "Nearby")
