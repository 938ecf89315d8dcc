"""
makerhub.engine.rank — Rank Calculator
=======================================

Pure function from a point total to the learner's rank tier, the tier
after it, and how far along the way they are.  No I/O, no session state.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from makerhub.catalog import DEFAULT_RANKS, RankTier

__all__ = ["RankProgress", "compute_rank", "rank_ladder"]


@dataclass(frozen=True, slots=True)
class RankProgress:
    """Output of :func:`compute_rank`."""

    current: RankTier
    next: RankTier
    progress_percent: int

    @property
    def is_max_rank(self) -> bool:
        return self.current == self.next

    @property
    def points_to_next(self) -> int:
        return 0 if self.is_max_rank else self.next.threshold - self.current.threshold


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_rank(
    points: int, tiers: Sequence[RankTier] = DEFAULT_RANKS
) -> RankProgress:
    """Map *points* (>= 0) to a :class:`RankProgress`.

    The tiers are scanned in catalog order and the last one whose threshold
    is met wins.  On the last tier ``next`` is the tier itself and the span
    collapses to 1, so progress is clamped rather than divided by zero.

    Parameters
    ----------
    points : non-negative point total (validated by the caller).
    tiers : rank tiers in ascending threshold order; must not be empty.
    """
    current = tiers[0]
    for tier in tiers:
        if points >= tier.threshold:
            current = tier

    index = tiers.index(current)
    nxt = tiers[min(index + 1, len(tiers) - 1)]

    span = max(1, nxt.threshold - current.threshold)
    pct = _round_half_up(100 * (points - current.threshold) / span)
    return RankProgress(current=current, next=nxt, progress_percent=max(0, min(100, pct)))


def rank_ladder(
    points: int, tiers: Sequence[RankTier] = DEFAULT_RANKS
) -> list[tuple[RankTier, bool]]:
    """Every tier paired with whether *points* has reached it."""
    return [(tier, points >= tier.threshold) for tier in tiers]
