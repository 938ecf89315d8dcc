"""
makerhub.engine.awards — Points & Badge Award Rules
====================================================

Rule table mapping each rewarded learner action to its point value and
badge, plus the two primitives every award goes through: point addition
with a floor of zero, and idempotent badge insertion.

This module works on a :class:`~makerhub.services.snapshot.Profile` in
place and does no I/O; persisting the result is the caller's job.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from makerhub.catalog import DEFAULT_BADGES, BadgeDefinition
from makerhub.constants import (
    CART_POINTS,
    IDEA_POINTS,
    QUIZ_POINTS,
    THREAD_POINTS,
    BadgeKey,
)
from makerhub.services.snapshot import Profile

logger = logging.getLogger(__name__)

__all__ = [
    "AWARD_RULES",
    "ActionType",
    "AwardResult",
    "AwardRule",
    "add_points",
    "apply_award",
    "award_badge",
    "badge_board",
]


class ActionType(enum.StrEnum):
    """Learner actions that earn points."""
    COURSE_COMPLETED = "course_completed"
    QUIZ_PASSED = "quiz_passed"
    THREAD_CREATED = "thread_created"
    IDEA_SHARED = "idea_shared"
    CART_ADDED = "cart_added"


@dataclass(frozen=True, slots=True)
class AwardRule:
    badge: BadgeKey
    points: int | None = None  # None → supplied per award (course catalog points)


AWARD_RULES: dict[ActionType, AwardRule] = {
    ActionType.COURSE_COMPLETED: AwardRule(BadgeKey.FIRST_COURSE),
    ActionType.QUIZ_PASSED: AwardRule(BadgeKey.QUIZ_WHIZ, QUIZ_POINTS),
    ActionType.THREAD_CREATED: AwardRule(BadgeKey.HELPER, THREAD_POINTS),
    ActionType.IDEA_SHARED: AwardRule(BadgeKey.CONTRIBUTOR, IDEA_POINTS),
    ActionType.CART_ADDED: AwardRule(BadgeKey.SHOPPER, CART_POINTS),
}


@dataclass
class AwardResult:
    """What one award actually changed."""

    points: int = 0
    badge_earned: str | None = None  # None when the badge was already held


def add_points(profile: Profile, delta: int) -> int:
    """Add *delta* to the profile, never going below zero.

    Returns the change actually applied.
    """
    before = profile.points
    profile.points = max(0, before + delta)
    return profile.points - before


def award_badge(profile: Profile, key: str) -> bool:
    """Grant *key*; returns False if the profile already held it."""
    if key in profile.badges:
        return False
    profile.badges.add(key)
    logger.info("Badge earned: %s", key)
    return True


def apply_award(
    profile: Profile, action: ActionType, points: int | None = None
) -> AwardResult:
    """Apply the rule for *action* to *profile*.

    *points* overrides the rule's fixed value; it is required for actions
    whose value comes from the catalog (course completion).
    """
    rule = AWARD_RULES[action]
    value = rule.points if points is None else points
    if value is None:
        raise ValueError(f"{action} needs an explicit point value")

    applied = add_points(profile, value)
    earned = award_badge(profile, rule.badge)
    logger.info("Award %s: %+d points (total %d)", action, applied, profile.points)
    return AwardResult(points=applied, badge_earned=str(rule.badge) if earned else None)


def badge_board(
    profile: Profile, badges: Sequence[BadgeDefinition] = DEFAULT_BADGES
) -> list[tuple[BadgeDefinition, bool]]:
    """Every badge definition paired with whether the profile holds it."""
    return [(badge, badge.key in profile.badges) for badge in badges]
