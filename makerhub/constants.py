"""
makerhub.constants — Shared Constants
======================================

Single source of truth for award values, badge keys and view names.
Import from here instead of duplicating in services and routes.
"""

from __future__ import annotations

import enum


# ---------------------------------------------------------------------------
# Badge keys
# ---------------------------------------------------------------------------
class BadgeKey(enum.StrEnum):
    """Every badge the award rules can grant."""
    FIRST_COURSE = "firstCourse"
    QUIZ_WHIZ = "quizWhiz"
    HELPER = "helper"
    CONTRIBUTOR = "contributor"
    SHOPPER = "shopper"


# ---------------------------------------------------------------------------
# Fixed point values per action (course completion uses catalog points)
# ---------------------------------------------------------------------------
QUIZ_POINTS = 50
THREAD_POINTS = 20
IDEA_POINTS = 25
CART_POINTS = 5

QUIZ_QUESTION = "Quick quiz: Is an H-bridge used to control motor direction?"

# ---------------------------------------------------------------------------
# Profile / session defaults
# ---------------------------------------------------------------------------
DEFAULT_DISPLAY_NAME = "Guest Maker"
ANONYMOUS_AUTHOR = "You"
DEFAULT_STORAGE_KEY = "makerhub_state"

VIEWS: tuple[str, ...] = (
    "home",
    "learn",
    "community",
    "ideas",
    "shop",
    "blog",
    "profile",
    "about",
)
DEFAULT_VIEW = "home"
