"""
makerhub.services.persistence — Session Slot Persistence
=========================================================

Write-through storage for the session snapshot.  ``save`` overwrites the
whole slot after every state change; ``load`` runs once at startup and
answers ``None`` for a missing, unreadable or malformed slot so the caller
can fall back to the sample session.  A corrupt slot is never fatal.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from makerhub.constants import DEFAULT_STORAGE_KEY
from makerhub.database.engine import get_session
from makerhub.database.models import SessionSlot
from makerhub.services.snapshot import SessionSnapshot

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Reads and writes one :class:`SessionSnapshot` under a storage key."""

    def __init__(self, engine: Engine, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._engine = engine
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, snapshot: SessionSnapshot) -> bool:
        """Overwrite the slot with *snapshot*.

        Returns False if the write failed; the previously stored copy is
        then stale but in-memory state is unaffected.
        """
        payload = snapshot.model_dump_json()
        try:
            with get_session(self._engine) as session:
                session.merge(SessionSlot(key=self._key, payload_json=payload))
        except SQLAlchemyError:
            logger.exception("Could not write session slot %r; stored copy is stale", self._key)
            return False
        logger.debug("Session slot %r saved (%d bytes)", self._key, len(payload))
        return True

    def load(self, defaults: SessionSnapshot | None = None) -> SessionSnapshot | None:
        """Restore the stored snapshot, or ``None`` if there is no usable one.

        Fields missing (or null) in the stored record take their value
        from *defaults* when given, else the model defaults.
        """
        try:
            with Session(self._engine) as session:
                row = session.get(SessionSlot, self._key)
                raw = row.payload_json if row is not None else None
        except SQLAlchemyError:
            logger.warning("Session slot %r unreadable, starting fresh", self._key, exc_info=True)
            return None

        if raw is None:
            logger.info("No saved session under %r", self._key)
            return None

        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Session slot %r holds malformed JSON, starting fresh", self._key)
            return None
        if not isinstance(payload, dict):
            logger.warning("Session slot %r is not an object, starting fresh", self._key)
            return None

        stored = {k: v for k, v in payload.items() if v is not None}
        if defaults is not None:
            stored = {**defaults.model_dump(mode="json"), **stored}

        try:
            snapshot = SessionSnapshot.model_validate(stored)
        except ValidationError as exc:
            logger.warning(
                "Session slot %r failed validation (%d errors), starting fresh",
                self._key, exc.error_count(),
            )
            return None
        except RecursionError:
            logger.warning("Session slot %r is nested too deeply, starting fresh", self._key)
            return None

        logger.info("Session restored from slot %r", self._key)
        return snapshot

    def clear(self) -> None:
        """Delete the slot."""
        with get_session(self._engine) as session:
            session.execute(delete(SessionSlot).where(SessionSlot.key == self._key))
        logger.info("Session slot %r cleared", self._key)
