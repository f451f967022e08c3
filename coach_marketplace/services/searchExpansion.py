"""
Search expansion policy
=======================

Decides whether a ranked result set is too small and the caller should
relax its location filter (city -> region -> country -> everywhere).  The
re-query itself belongs to the caller; this module only answers *whether*
and *how far* to widen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Sequence

from coach_marketplace.algorithms.rankingTypes import (
    MATCH_LEVEL_ORDER,
    MIN_RESULTS_BEFORE_EXPANSION,
    LocationMatchLevel,
    RankedCoach,
    T,
)

_LEVEL_INDEX: dict[LocationMatchLevel, int] = {
    level: index for index, level in enumerate(MATCH_LEVEL_ORDER)
}


@dataclass
class ExpansionResult(Generic[T]):
    """Coaches kept after widening, and how far the filter had to widen."""

    coaches: list[RankedCoach[T]]
    effective_match_level: LocationMatchLevel
    expanded: bool


def should_expand_search(
    ranked_results: Sequence[RankedCoach[T]],
    min_results: int = MIN_RESULTS_BEFORE_EXPANSION,
) -> bool:
    """True when fewer than ``min_results`` coaches were found."""
    return len(ranked_results) < min_results


def next_expansion_level(level: LocationMatchLevel) -> Optional[LocationMatchLevel]:
    """The next coarser match level, or ``None`` when already at ``no_match``."""
    index = _LEVEL_INDEX[level] + 1
    if index >= len(MATCH_LEVEL_ORDER):
        return None
    return MATCH_LEVEL_ORDER[index]


def filter_by_location_with_expansion(
    ranked_results: Sequence[RankedCoach[T]],
    min_results: int = MIN_RESULTS_BEFORE_EXPANSION,
) -> ExpansionResult[T]:
    """Keep the closest coaches, widening the match level until enough remain.

    Starting at ``exact_city``, keeps every coach whose match level is at
    least as specific as the current level.  Stops at the first level that
    keeps ``min_results`` coaches, or at ``no_match`` (which keeps all).
    Input order is preserved.
    """
    for level in MATCH_LEVEL_ORDER[:-1]:
        cutoff = _LEVEL_INDEX[level]
        kept = [
            r for r in ranked_results
            if _LEVEL_INDEX[r.ranking.match_level] <= cutoff
        ]
        if len(kept) >= min_results:
            return ExpansionResult(
                coaches=kept,
                effective_match_level=level,
                expanded=level is not LocationMatchLevel.EXACT_CITY,
            )

    # no_match keeps everyone
    return ExpansionResult(
        coaches=list(ranked_results),
        effective_match_level=LocationMatchLevel.NO_MATCH,
        expanded=True,
    )
