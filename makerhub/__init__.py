"""
MakerHub — A Learning & Community Portal for Young Makers
==========================================================
Courses with completion points, a discussion forum, an idea board and a
parts shop, tied together by a gamification layer (points, ranks, badges)
that reacts to what the learner does.  The whole session is one snapshot,
written through to a single key-value slot so it resumes on restart.

Package layout::

    makerhub/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Award values, badge keys, views
    ├── catalog.py         # Read-only courses / products / ranks / badges
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + session helper
    │   └── models.py      # session_slots key-value table
    ├── engine/
    │   ├── rank.py        # Rank calculator (pure)
    │   └── awards.py      # Action → points/badge rules (pure)
    ├── services/
    │   ├── snapshot.py        # Session snapshot models (pydantic)
    │   ├── persistence.py     # Slot save / load / clear
    │   ├── seed.py            # Default sample session
    │   └── session_service.py # The session store and its operations
    └── api/
        ├── main.py        # FastAPI app
        └── routes/        # Session + catalog endpoints
"""

__version__ = "0.1.0"
