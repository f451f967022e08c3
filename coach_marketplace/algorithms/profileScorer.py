"""
Profile Completeness Scorer
===========================

Scores how filled-out a coach's public profile is.  Each meaningful field
adds its points from ``PROFILE_FIELD_WEIGHTS`` (the table sums to 100), so
the score only ever grows as fields are populated.
"""

from __future__ import annotations

from typing import Any, Mapping

from coach_marketplace.algorithms.rankingTypes import (
    PROFILE_FIELD_WEIGHTS,
    CoachProfileData,
    clamp_score,
)

# A bio shorter than this is treated as a placeholder
MIN_BIO_LENGTH: int = 20


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _has_bio(bio: Any) -> bool:
    return isinstance(bio, str) and len(bio.strip()) > MIN_BIO_LENGTH


def _has_coach_types(coach_types: Any) -> bool:
    if isinstance(coach_types, str):
        return _has_text(coach_types)
    if not coach_types:
        return False
    try:
        return any(_has_text(t) for t in coach_types)
    except TypeError:
        return False


def _has_hourly_rate(hourly_rate: Any) -> bool:
    if isinstance(hourly_rate, bool):
        return False
    try:
        return float(hourly_rate) > 0
    except (TypeError, ValueError):
        return False


def _has_certifications(certifications: Any) -> bool:
    """Certifications may be a list, a mapping, free text, or anything else."""
    if certifications is None:
        return False
    if isinstance(certifications, str):
        return _has_text(certifications)
    if isinstance(certifications, (list, tuple, set, Mapping)):
        return len(certifications) > 0
    return bool(certifications)


def profile_field_checks(data: CoachProfileData) -> dict[str, bool]:
    """Return which of the scored profile fields are populated."""
    return {
        "bio": _has_bio(data.bio),
        "profile_image": _has_text(data.profile_image_url),
        "card_image": _has_text(data.card_image_url),
        "coach_types": _has_coach_types(data.coach_types),
        "hourly_rate": _has_hourly_rate(data.hourly_rate),
        "certifications": _has_certifications(data.certifications),
        "is_verified": data.is_verified is True,
    }


def score_profile(data: CoachProfileData) -> float:
    """Compute the 0-100 profile completeness score."""
    checks = profile_field_checks(data)
    total = sum(
        PROFILE_FIELD_WEIGHTS[name] for name, populated in checks.items() if populated
    )
    return round(clamp_score(total), 2)
