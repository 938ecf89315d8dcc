"""
makerhub.services.snapshot — Session Snapshot Models
=====================================================

The complete serializable state of one learner's session.  A
:class:`SessionSnapshot` is exactly what the persistence slot stores and
restores; pydantic handles the JSON encoding and the shape validation on
the way back in.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_serializer

from makerhub.constants import DEFAULT_DISPLAY_NAME, DEFAULT_VIEW


class Profile(BaseModel):
    display_name: str = DEFAULT_DISPLAY_NAME
    points: int = Field(default=0, ge=0)
    badges: set[str] = Field(default_factory=set)

    @field_serializer("badges")
    def serialize_badges(self, badges: set[str]) -> list[str]:
        return sorted(badges)


class EnrollmentRecord(BaseModel):
    done: bool = False


class ForumThread(BaseModel):
    id: str
    author: str
    title: str
    body: str
    like_count: int = Field(default=0, ge=0)


class Idea(BaseModel):
    id: str
    title: str
    vote_count: int = Field(default=1, ge=1)


class CartLine(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class SessionSnapshot(BaseModel):
    """Current view, profile, enrollments, threads, ideas and cart."""

    view: str = DEFAULT_VIEW
    profile: Profile = Field(default_factory=Profile)
    enrolled: dict[str, EnrollmentRecord] = Field(default_factory=dict)
    threads: list[ForumThread] = Field(default_factory=list)
    ideas: list[Idea] = Field(default_factory=list)
    cart: list[CartLine] = Field(default_factory=list)
