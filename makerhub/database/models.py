"""
makerhub.database.models — SQLAlchemy 2.0 Data Models
======================================================

Tables:
- session_slots: durable key-value slots, one serialized session each
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all MakerHub ORM models."""


# ---------------------------------------------------------------------------
# SessionSlot: whole-snapshot key-value storage
# ---------------------------------------------------------------------------
class SessionSlot(Base):
    """One persisted session snapshot under a fixed storage key.

    The payload is always overwritten as a whole, never patched.
    """
    __tablename__ = "session_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SessionSlot key={self.key!r} bytes={len(self.payload_json)}>"
