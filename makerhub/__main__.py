"""
makerhub.__main__ — Entry point for ``python -m makerhub``
===========================================================

Wiring:
1. Load .env (DATABASE_URL, CORS origins).
2. Configure logging.
3. Serve the FastAPI app; the session is resumed from its slot on startup.

Run with::

    python -m makerhub --port 8000
"""

from __future__ import annotations

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("makerhub")


def main() -> None:
    """Bootstrap and serve the MakerHub API."""
    parser = argparse.ArgumentParser(prog="makerhub", description="Serve the MakerHub API.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    load_dotenv()

    logger.info("Starting MakerHub on %s:%d…", args.host, args.port)
    try:
        uvicorn.run(
            "makerhub.api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
