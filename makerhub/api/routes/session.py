"""
makerhub.api.routes.session — Session operations
=================================================

One endpoint per store operation.  Store calls write to the database, so
they run on a worker thread via :func:`run_intent` and the event loop
stays free.  A process-wide lock around every call keeps the store's
one-intent-at-a-time contract: each intent finishes before the next one
starts, and reads never see a half-applied change.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from makerhub.api.deps import get_store
from makerhub.catalog import format_price
from makerhub.constants import QUIZ_QUESTION
from makerhub.engine.rank import RankProgress
from makerhub.services.session_service import ActionResult, ActionStatus, SessionStore

router = APIRouter(tags=["session"])
logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

_intent_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class ViewUpdate(BaseModel):
    view: str


class NameUpdate(BaseModel):
    name: str


class QuizAnswer(BaseModel):
    correct: bool


class ThreadCreate(BaseModel):
    title: str = ""
    body: str = ""


class IdeaCreate(BaseModel):
    title: str = ""


# ---------------------------------------------------------------------------
# Thread bridge
# ---------------------------------------------------------------------------
def _locked(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    with _intent_lock:
        return func(*args, **kwargs)


async def run_intent(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run *func* on a worker thread, serialized with every other intent."""
    return await asyncio.to_thread(_locked, func, *args, **kwargs)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _rank_dict(rank: RankProgress) -> dict:
    return {
        "current": {"key": rank.current.key, "name": rank.current.name,
                    "threshold": rank.current.threshold},
        "next": {"key": rank.next.key, "name": rank.next.name,
                 "threshold": rank.next.threshold},
        "progress_percent": rank.progress_percent,
        "is_max_rank": rank.is_max_rank,
    }


def _outcome(
    store: SessionStore, operation: Callable[..., ActionResult], *args
) -> tuple[ActionResult, int]:
    """Apply one operation and read the resulting point total."""
    result = operation(*args)
    return result, store.snapshot.profile.points


async def _apply(
    store: SessionStore, operation: Callable[..., ActionResult], *args
) -> dict:
    """Run a store operation; rejections become 422."""
    result, points = await run_intent(_outcome, store, operation, *args)
    if result.status is ActionStatus.REJECTED:
        raise HTTPException(422, result.message)
    return {
        "status": str(result.status),
        "message": result.message,
        "points_awarded": result.points_awarded,
        "badge_earned": result.badge_earned,
        "points": points,
    }


def _session_state(store: SessionStore) -> dict:
    total = store.cart_total()
    return {
        "snapshot": store.snapshot.model_dump(mode="json"),
        "rank": _rank_dict(store.rank()),
        "cart_total": total,
        "cart_total_display": format_price(total),
        "cart_count": store.cart_count(),
    }


def _rank_state(store: SessionStore) -> dict:
    return {
        **_rank_dict(store.rank()),
        "ladder": [
            {"key": tier.key, "name": tier.name, "threshold": tier.threshold, "reached": reached}
            for tier, reached in store.rank_ladder()
        ],
    }


def _badge_state(store: SessionStore) -> list[dict]:
    return [
        {"key": badge.key, "label": badge.label, "hint": badge.hint, "earned": earned}
        for badge, earned in store.badge_board()
    ]


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@router.get("/session")
async def get_session_state(store: SessionStore = Depends(get_store)):
    """Everything the presentation layer needs to render any page."""
    return await run_intent(_session_state, store)


@router.get("/rank")
async def get_rank(store: SessionStore = Depends(get_store)):
    return await run_intent(_rank_state, store)


@router.get("/badges")
async def get_badges(store: SessionStore = Depends(get_store)):
    return await run_intent(_badge_state, store)


@router.get("/quiz")
async def get_quiz():
    return {"question": QUIZ_QUESTION}


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
@router.put("/session/view")
async def set_view(body: ViewUpdate, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.set_view, body.view)


@router.put("/profile/name")
async def set_display_name(body: NameUpdate, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.set_display_name, body.name.strip())


@router.post("/courses/{course_id}/toggle")
async def toggle_course(course_id: str, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.toggle_course_completion, course_id)


@router.post("/quiz")
async def submit_quiz(body: QuizAnswer, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.submit_quiz, body.correct)


@router.post("/threads")
async def create_thread(body: ThreadCreate, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.create_thread, body.title, body.body)


@router.post("/threads/{thread_id}/like")
async def like_thread(thread_id: str, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.like_thread, thread_id)


@router.post("/ideas")
async def share_idea(body: IdeaCreate, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.share_idea, body.title)


@router.post("/ideas/{idea_id}/upvote")
async def upvote_idea(idea_id: str, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.upvote_idea, idea_id)


@router.post("/cart/{product_id}")
async def add_to_cart(product_id: str, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.add_to_cart, product_id)


@router.delete("/cart/{product_id}")
async def remove_from_cart(product_id: str, store: SessionStore = Depends(get_store)):
    return await _apply(store, store.remove_from_cart, product_id)


@router.post("/session/reset")
async def reset_session(store: SessionStore = Depends(get_store)):
    logger.info("Session reset requested")
    return await _apply(store, store.reset)
