"""
makerhub.api.routes.catalog — Read-only reference data
=======================================================
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from makerhub.api.deps import get_catalog
from makerhub.catalog import Catalog

router = APIRouter(tags=["catalog"])


@router.get("/catalog")
def get_full_catalog(catalog: Catalog = Depends(get_catalog)):
    """Courses, products, rank tiers, badges and blog posts in display order."""
    return {
        "courses": [asdict(c) for c in catalog.courses],
        "products": [asdict(p) for p in catalog.products],
        "ranks": [asdict(r) for r in catalog.ranks],
        "badges": [asdict(b) for b in catalog.badges],
        "blog": [asdict(b) for b in catalog.blog],
    }
