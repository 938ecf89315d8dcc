"""
makerhub.services.session_service — Session State Store
========================================================

The single owner of a learner's mutable session: profile, enrollments,
forum threads, ideas and cart.  Every user intent maps to one method
here.  A method either commits a new state (and writes it through to the
persistence slot) or leaves the session untouched:

- missing required text → ``rejected``, nothing changes, no points;
- an id that matches nothing → ``noop``;
- otherwise → ``applied``, with any points / badge it earned.

Points and badges go through :mod:`makerhub.engine.awards`; the rank
shown to the learner comes from :mod:`makerhub.engine.rank`.

Usage::

    store = SessionStore.open(SnapshotRepository(engine))
    result = store.create_thread("Servo jitter", "Any fix for jitter at rest?")
    if result.status is ActionStatus.REJECTED:
        show_error(result.message)
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from makerhub.catalog import DEFAULT_CATALOG, BadgeDefinition, Catalog, RankTier
from makerhub.constants import ANONYMOUS_AUTHOR, DEFAULT_VIEW, VIEWS
from makerhub.engine.awards import ActionType, apply_award, badge_board
from makerhub.engine.rank import RankProgress, compute_rank, rank_ladder
from makerhub.services.seed import default_snapshot
from makerhub.services.snapshot import (
    CartLine,
    EnrollmentRecord,
    ForumThread,
    Idea,
    SessionSnapshot,
)

if TYPE_CHECKING:
    from makerhub.services.persistence import SnapshotRepository

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Operation outcome
# ---------------------------------------------------------------------------
class ActionStatus(enum.StrEnum):
    APPLIED = "applied"
    REJECTED = "rejected"  # missing required input; state unchanged
    NOOP = "noop"          # nothing to act on; state unchanged


@dataclass
class ActionResult:
    """Outcome of one store operation."""

    status: ActionStatus = ActionStatus.APPLIED
    message: str = ""
    points_awarded: int = 0
    badge_earned: str | None = None

    @property
    def accepted(self) -> bool:
        return self.status is not ActionStatus.REJECTED

    @classmethod
    def rejected(cls, message: str) -> ActionResult:
        return cls(status=ActionStatus.REJECTED, message=message)

    @classmethod
    def noop(cls, message: str = "") -> ActionResult:
        return cls(status=ActionStatus.NOOP, message=message)


def _fresh_id(prefix: str, taken: set[str]) -> str:
    """``<prefix><epoch-ms>``, bumped until it is unused."""
    stamp = int(time.time() * 1000)
    while f"{prefix}{stamp}" in taken:
        stamp += 1
    return f"{prefix}{stamp}"


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------
class SessionStore:
    """Owns one :class:`SessionSnapshot` and its mutation API.

    Not reentrant: callers run one operation to completion before starting
    the next.

    Parameters
    ----------
    repository : where each committed state is written; ``None`` keeps the
        session purely in memory.
    catalog : read-only reference data for point values, prices and ranks.
    snapshot : starting state, copied on the way in; defaults to the sample
        session.
    """

    def __init__(
        self,
        repository: SnapshotRepository | None = None,
        catalog: Catalog = DEFAULT_CATALOG,
        snapshot: SessionSnapshot | None = None,
        *,
        default_view: str = DEFAULT_VIEW,
    ) -> None:
        self._repository = repository
        self._catalog = catalog
        self._default_view = default_view
        self._state = (
            snapshot.model_copy(deep=True)
            if snapshot is not None
            else default_snapshot(default_view)
        )

    @classmethod
    def open(
        cls,
        repository: SnapshotRepository,
        catalog: Catalog = DEFAULT_CATALOG,
        *,
        default_view: str = DEFAULT_VIEW,
    ) -> SessionStore:
        """Resume the stored session, or start from the sample one."""
        defaults = default_snapshot(default_view)
        restored = repository.load(defaults)
        if restored is None:
            logger.info("Starting a fresh sample session")
        return cls(
            repository,
            catalog,
            restored if restored is not None else defaults,
            default_view=default_view,
        )

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def snapshot(self) -> SessionSnapshot:
        """A detached copy of the current state."""
        return self._state.model_copy(deep=True)

    def rank(self) -> RankProgress:
        return compute_rank(self._state.profile.points, self._catalog.ranks)

    def rank_ladder(self) -> list[tuple[RankTier, bool]]:
        return rank_ladder(self._state.profile.points, self._catalog.ranks)

    def badge_board(self) -> list[tuple[BadgeDefinition, bool]]:
        return badge_board(self._state.profile, self._catalog.badges)

    def cart_total(self) -> int:
        """Sum of quantity × price; lines for unknown products count as 0."""
        total = 0
        for line in self._state.cart:
            product = self._catalog.product(line.product_id)
            if product is not None:
                total += product.price * line.quantity
        return total

    def cart_count(self) -> int:
        return sum(line.quantity for line in self._state.cart)

    # -------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------
    def _commit(self) -> None:
        if self._repository is not None:
            self._repository.save(self._state)

    # -------------------------------------------------------------------
    # Navigation / profile
    # -------------------------------------------------------------------
    def set_view(self, view: str) -> ActionResult:
        if view not in VIEWS:
            return ActionResult.noop(f"Unknown view {view!r}")
        self._state.view = view
        self._commit()
        return ActionResult()

    def set_display_name(self, name: str) -> ActionResult:
        """Replace the display name verbatim; an empty name is allowed."""
        self._state.profile.display_name = name
        self._commit()
        return ActionResult(message="Profile saved")

    # -------------------------------------------------------------------
    # Learning
    # -------------------------------------------------------------------
    def toggle_course_completion(self, course_id: str) -> ActionResult:
        """Flip a course between complete and incomplete.

        Only the incomplete → complete edge pays out.  Un-marking a course
        keeps the points already granted for it.
        """
        course = self._catalog.course(course_id)
        if course is None:
            return ActionResult.noop(f"Unknown course {course_id!r}")

        record = self._state.enrolled.setdefault(course_id, EnrollmentRecord())
        record.done = not record.done

        if not record.done:
            self._commit()
            return ActionResult(message=f"{course.title} marked incomplete")

        award = apply_award(self._state.profile, ActionType.COURSE_COMPLETED, course.points)
        self._commit()
        return ActionResult(
            message=f"{course.title} complete! +{award.points} pts",
            points_awarded=award.points,
            badge_earned=award.badge_earned,
        )

    def submit_quiz(self, answer_is_correct: bool) -> ActionResult:
        if not answer_is_correct:
            return ActionResult.noop("Not quite. Try the course first!")

        award = apply_award(self._state.profile, ActionType.QUIZ_PASSED)
        self._commit()
        return ActionResult(
            message=f"Nice! +{award.points} pts",
            points_awarded=award.points,
            badge_earned=award.badge_earned,
        )

    # -------------------------------------------------------------------
    # Community
    # -------------------------------------------------------------------
    def create_thread(self, title: str, body: str) -> ActionResult:
        title = title.strip()
        body = body.strip()
        if not title or not body:
            logger.info("Thread rejected: missing title or body")
            return ActionResult.rejected("Please write a title and details.")

        thread = ForumThread(
            id=_fresh_id("f", {t.id for t in self._state.threads}),
            author=self._state.profile.display_name or ANONYMOUS_AUTHOR,
            title=title,
            body=body,
            like_count=0,
        )
        self._state.threads.insert(0, thread)
        award = apply_award(self._state.profile, ActionType.THREAD_CREATED)
        self._commit()
        return ActionResult(
            message=f"Posted! +{award.points} pts",
            points_awarded=award.points,
            badge_earned=award.badge_earned,
        )

    def like_thread(self, thread_id: str) -> ActionResult:
        for thread in self._state.threads:
            if thread.id == thread_id:
                thread.like_count += 1
                self._commit()
                return ActionResult()
        return ActionResult.noop(f"Unknown thread {thread_id!r}")

    def share_idea(self, title: str) -> ActionResult:
        title = title.strip()
        if not title:
            logger.info("Idea rejected: missing title")
            return ActionResult.rejected("Please write your project idea.")

        idea = Idea(
            id=_fresh_id("i", {i.id for i in self._state.ideas}),
            title=title,
            vote_count=1,
        )
        self._state.ideas.insert(0, idea)
        award = apply_award(self._state.profile, ActionType.IDEA_SHARED)
        self._commit()
        return ActionResult(
            message=f"Idea shared! +{award.points} pts",
            points_awarded=award.points,
            badge_earned=award.badge_earned,
        )

    def upvote_idea(self, idea_id: str) -> ActionResult:
        for idea in self._state.ideas:
            if idea.id == idea_id:
                idea.vote_count += 1
                self._commit()
                return ActionResult()
        return ActionResult.noop(f"Unknown idea {idea_id!r}")

    # -------------------------------------------------------------------
    # Shop
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id: str) -> ActionResult:
        product = self._catalog.product(product_id)
        if product is None:
            return ActionResult.noop(f"Unknown product {product_id!r}")

        for line in self._state.cart:
            if line.product_id == product_id:
                line.quantity += 1
                break
        else:
            self._state.cart.append(CartLine(product_id=product_id, quantity=1))

        award = apply_award(self._state.profile, ActionType.CART_ADDED)
        self._commit()
        return ActionResult(
            message=f"{product.name} added to cart",
            points_awarded=award.points,
            badge_earned=award.badge_earned,
        )

    def remove_from_cart(self, product_id: str) -> ActionResult:
        """Drop the whole line for *product_id*, whatever its quantity."""
        kept = [line for line in self._state.cart if line.product_id != product_id]
        if len(kept) == len(self._state.cart):
            return ActionResult.noop(f"{product_id!r} is not in the cart")
        self._state.cart = kept
        self._commit()
        return ActionResult()

    # -------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------
    def reset(self) -> ActionResult:
        """Throw the session away and start over from the sample one."""
        self._state = default_snapshot(self._default_view)
        self._commit()
        logger.info("Session reset to sample state")
        return ActionResult(message="Session reset")
