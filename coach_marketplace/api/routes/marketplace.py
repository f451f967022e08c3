"""
Marketplace Ranking API Routes
==============================

REST endpoints for ranking marketplace coaches.

Routes:
  POST /api/v1/marketplace/rank          -- Rank candidate coaches for a searcher
  GET  /api/v1/marketplace/match-levels  -- List location match levels
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from coach_marketplace.algorithms.locationMatcher import describe_match_level
from coach_marketplace.algorithms.rankingTypes import (
    LOCATION_SCORES,
    MATCH_LEVEL_ORDER,
    CoachCandidate,
    CoachEngagementData,
    CoachLocationData,
    CoachProfileData,
    LocationData,
)
from coach_marketplace.api.schemas.marketplace import (
    CoachIn,
    MatchLevelOut,
    RankCoachesRequest,
    RankCoachesResponse,
    RankedCoachOut,
    RankingScoreOut,
    SearcherLocationIn,
)
from coach_marketplace.services import marketplaceRanking

router = APIRouter(prefix="/marketplace", tags=["Marketplace"])


def _to_location(searcher: SearcherLocationIn | None) -> LocationData | None:
    if searcher is None:
        return None
    return LocationData(**searcher.model_dump())


def _to_candidate(coach: CoachIn) -> CoachCandidate[CoachIn]:
    engagement = None
    if coach.engagement is not None:
        engagement = CoachEngagementData(
            coach_id=coach.id,
            **coach.engagement.model_dump(),
        )

    return CoachCandidate(
        coach=coach,
        location=CoachLocationData(
            location_city=coach.location_city,
            location_region=coach.location_region,
            location_country=coach.location_country,
            online_available=coach.online_available,
            in_person_available=coach.in_person_available,
            location_country_code=coach.location_country_code,
        ),
        profile=CoachProfileData(
            bio=coach.bio,
            profile_image_url=coach.profile_image_url,
            card_image_url=coach.card_image_url,
            coach_types=coach.coach_types,
            hourly_rate=coach.hourly_rate,
            location=coach.location,
            certifications=coach.certifications,
            is_verified=coach.is_verified,
        ),
        engagement=engagement,
        is_sponsored=coach.is_sponsored,
    )


# ---------------------------------------------------------------------------
# POST /api/v1/marketplace/rank -- Rank candidate coaches
# ---------------------------------------------------------------------------

@router.post(
    "/rank",
    response_model=RankCoachesResponse,
    summary="Rank candidate coaches for a searcher",
    description=(
        "Scores each candidate coach on location proximity (50%), engagement "
        "(30%) and profile completeness (20%), sorts by total score, and "
        "reports whether the caller should widen its location filter."
    ),
)
async def rank_coaches(body: RankCoachesRequest) -> RankCoachesResponse:
    try:
        result = marketplaceRanking.rank_marketplace(
            _to_location(body.searcher),
            [_to_candidate(c) for c in body.coaches],
            max_results=body.max_results,
            expand=body.expand,
            pin_sponsored=body.pin_sponsored,
            now=body.as_of,
        )
    except marketplaceRanking.MarketplaceRankingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )

    coaches = [
        RankedCoachOut(
            id=ranked.coach.id,
            display_name=ranked.coach.display_name,
            rank=position,
            match_description=describe_match_level(ranked.ranking.match_level),
            ranking=RankingScoreOut.model_validate(ranked.ranking),
        )
        for position, ranked in enumerate(result.matches, start=1)
    ]

    return RankCoachesResponse(
        total_candidates=result.total_candidates,
        total_returned=len(coaches),
        expanded=result.expanded,
        should_expand=result.should_expand,
        effective_match_level=result.effective_match_level,
        coaches=coaches,
    )


# ---------------------------------------------------------------------------
# GET /api/v1/marketplace/match-levels -- Match level reference
# ---------------------------------------------------------------------------

@router.get(
    "/match-levels",
    response_model=list[MatchLevelOut],
    summary="List location match levels",
)
async def list_match_levels() -> list[MatchLevelOut]:
    return [
        MatchLevelOut(
            level=level,
            score=LOCATION_SCORES[level],
            description=describe_match_level(level),
        )
        for level in MATCH_LEVEL_ORDER
    ]
