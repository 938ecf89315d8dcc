"""
makerhub.database.engine — Database Connection & Session Helper
================================================================

The session slot lives in whatever database ``DATABASE_URL`` points at.
Without one, a local SQLite file is used so the demo needs no setup.

Usage::

    from makerhub.database.engine import create_db_engine, init_db

    engine = create_db_engine()          # reads DATABASE_URL from .env
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS …
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from makerhub.database.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///makerhub.db"


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build a SQLAlchemy :class:`Engine`.

    Parameters
    ----------
    url:
        Explicit database URL.  Defaults to the ``DATABASE_URL`` env var,
        then to ``sqlite:///makerhub.db``.
    """
    url = url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL

    if url.startswith("sqlite"):
        # Store calls run on worker threads; an in-memory database must be
        # one shared connection or each thread would see an empty one.
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool if in_memory else None,
        )
    else:
        engine = create_engine(
            url,
            echo=False,
            pool_size=2,
            max_overflow=2,
            pool_pre_ping=True,   # Reconnect stale connections automatically
            pool_recycle=3600,
        )
    logger.info("Database engine created → %s", engine.url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create all tables defined in :mod:`makerhub.database.models`.

    Safe to call on every startup (``CREATE TABLE IF NOT EXISTS`` under
    the hood).
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """Yield a :class:`Session` that auto-commits on success and rolls back
    on exception.

    Usage::

        with get_session(engine) as session:
            session.merge(SessionSlot(key="makerhub_state", payload_json="{}"))
            # commit happens automatically on block exit
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
