"""
makerhub.api.main — FastAPI application entry point
====================================================

Run with::

    uvicorn makerhub.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from makerhub import __version__  # noqa: E402
from makerhub.api.deps import get_store  # noqa: E402
from makerhub.api.routes.catalog import router as catalog_router  # noqa: E402
from makerhub.api.routes.session import router as session_router  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: resume the session before serving."""
    store = app.dependency_overrides.get(get_store, get_store)()
    logger.info(
        "MakerHub API started: %s, %d pts",
        store.snapshot.profile.display_name,
        store.snapshot.profile.points,
    )
    yield
    logger.info("MakerHub API shutting down")


app = FastAPI(
    title="MakerHub API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router, prefix="/api")
app.include_router(catalog_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
