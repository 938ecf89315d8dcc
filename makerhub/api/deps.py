"""
makerhub.api.deps — FastAPI dependency injection
=================================================
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine

from makerhub.catalog import DEFAULT_CATALOG, Catalog, load_catalog
from makerhub.config import MakerHubConfig, load_config
from makerhub.database.engine import create_db_engine, init_db
from makerhub.services.persistence import SnapshotRepository
from makerhub.services.session_service import SessionStore


@lru_cache(maxsize=1)
def get_config() -> MakerHubConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    cfg = get_config()
    if cfg.catalog_path is None:
        return DEFAULT_CATALOG
    return load_catalog(cfg.catalog_path)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    engine = create_db_engine()
    init_db(engine)
    return engine


@lru_cache(maxsize=1)
def get_store() -> SessionStore:
    """The process-wide session, resumed from its slot on first use."""
    cfg = get_config()
    return SessionStore.open(
        SnapshotRepository(get_engine(), cfg.storage_key),
        get_catalog(),
        default_view=cfg.default_view,
    )
