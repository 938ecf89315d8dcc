"""
makerhub.config — YAML Configuration Loader
============================================

Reads ``config.yaml`` for the handful of deployment settings MakerHub
needs: which storage slot holds the session, where an alternative catalog
lives, and which view a fresh session opens on.  Infrastructure secrets
(``DATABASE_URL``) come from the environment instead.

Usage::

    from makerhub.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.storage_key)       # "makerhub_state"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from makerhub.constants import DEFAULT_STORAGE_KEY, DEFAULT_VIEW, VIEWS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MakerHubConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    storage_key: str = DEFAULT_STORAGE_KEY
    catalog_path: str | None = None  # YAML catalog; None → built-in catalog
    default_view: str = DEFAULT_VIEW


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def default_config_path() -> Path:
    """Config path from ``MAKERHUB_CONFIG``, else ``./config.yaml``."""
    return Path(os.getenv("MAKERHUB_CONFIG", "config.yaml"))


def load_config(path: str | Path | None = None) -> MakerHubConfig:
    """Read *path* and return a :class:`MakerHubConfig` instance.

    A missing file is not an error: the demo runs on defaults out of the
    box.  Unknown keys are ignored.

    Raises
    ------
    ValueError
        If ``default_view`` names a view that does not exist.
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        logger.info("No config file at %s, using defaults", config_path)
        return MakerHubConfig()

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    default_view = str(raw.get("default_view", DEFAULT_VIEW))
    if default_view not in VIEWS:
        raise ValueError(
            f"Unknown default_view {default_view!r} in {config_path}; "
            f"expected one of: {', '.join(VIEWS)}"
        )

    return MakerHubConfig(
        storage_key=str(raw.get("storage_key") or DEFAULT_STORAGE_KEY),
        catalog_path=str(raw["catalog_path"]) if raw.get("catalog_path") else None,
        default_view=default_view,
    )
