"""
makerhub.services.seed — Default Sample Session
================================================

What a learner sees on first launch, or after a missing / corrupt slot:
a guest profile, a couple of forum threads and a few ideas to vote on.
"""

from __future__ import annotations

from makerhub.constants import DEFAULT_VIEW
from makerhub.services.snapshot import ForumThread, Idea, Profile, SessionSnapshot

SAMPLE_THREADS: tuple[ForumThread, ...] = (
    ForumThread(
        id="f1",
        author="Kiara",
        title="Help with line sensor on white tiles",
        body="My bot overshoots turns. Any tips on thresholds?",
        like_count=6,
    ),
    ForumThread(
        id="f2",
        author="Aman",
        title="Best budget soldering iron in India?",
        body="I need something reliable for school projects.",
        like_count=9,
    ),
)

SAMPLE_IDEAS: tuple[Idea, ...] = (
    Idea(id="i1", title="Smart Plant Watering", vote_count=15),
    Idea(id="i2", title="Accident Alert Helmet", vote_count=22),
    Idea(id="i3", title="Smart Dustbin (Auto-open)", vote_count=18),
)


def default_snapshot(view: str = DEFAULT_VIEW) -> SessionSnapshot:
    """A fresh sample session; every call returns independent objects."""
    return SessionSnapshot(
        view=view,
        profile=Profile(),
        enrolled={},
        threads=[t.model_copy() for t in SAMPLE_THREADS],
        ideas=[i.model_copy() for i in SAMPLE_IDEAS],
        cart=[],
    )
