"""
tests/test_api_routes.py — FastAPI Route Integration Tests
===========================================================

Drives the operations surface through the TestClient against a store
backed by the in-memory SQLite slot.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from makerhub.api.deps import get_catalog, get_store
from makerhub.api.main import app
from makerhub.api.routes.session import run_intent
from makerhub.catalog import DEFAULT_CATALOG
from makerhub.database.engine import create_db_engine, init_db
from makerhub.services.persistence import SnapshotRepository
from makerhub.services.session_service import SessionStore


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_catalog] = lambda: DEFAULT_CATALOG
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestReads:
    def test_session_state(self, client):
        data = client.get("/api/session").json()
        assert data["snapshot"]["view"] == "home"
        assert data["snapshot"]["profile"]["points"] == 0
        assert data["rank"]["current"]["key"] == "explorer"
        assert data["cart_total"] == 0
        assert data["cart_count"] == 0

    def test_catalog(self, client):
        data = client.get("/api/catalog").json()
        assert len(data["courses"]) == 4
        assert data["products"][0] == {"id": "p1", "name": "ESP8266 NodeMCU", "price": 239, "tag": "Wi-Fi MCU"}

    def test_rank_ladder(self, client):
        data = client.get("/api/rank").json()
        assert [step["reached"] for step in data["ladder"]] == [True, False, False, False, False]

    def test_badges(self, client):
        data = client.get("/api/badges").json()
        assert len(data) == 5
        assert not any(b["earned"] for b in data)

    def test_quiz_question(self, client):
        assert "H-bridge" in client.get("/api/quiz").json()["question"]


class TestMutations:
    def test_complete_course(self, client):
        resp = client.post("/api/courses/c3/toggle")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "applied"
        assert body["points_awarded"] == 150
        assert body["badge_earned"] == "firstCourse"
        assert body["points"] == 150

    def test_unknown_course_is_noop(self, client):
        body = client.post("/api/courses/nope/toggle").json()
        assert body["status"] == "noop"
        assert body["points"] == 0

    def test_quiz(self, client):
        assert client.post("/api/quiz", json={"correct": False}).json()["status"] == "noop"
        assert client.post("/api/quiz", json={"correct": True}).json()["points"] == 50

    def test_thread_rejected_with_422(self, client):
        resp = client.post("/api/threads", json={"title": "", "body": "x"})
        assert resp.status_code == 422
        assert client.get("/api/session").json()["snapshot"]["profile"]["points"] == 0

    def test_thread_and_like(self, client, store):
        resp = client.post("/api/threads", json={"title": "T", "body": "B"})
        assert resp.json()["points_awarded"] == 20
        thread_id = store.snapshot.threads[0].id
        client.post(f"/api/threads/{thread_id}/like")
        assert store.snapshot.threads[0].like_count == 1

    def test_idea_and_upvote(self, client, store):
        assert client.post("/api/ideas", json={"title": "   "}).status_code == 422
        client.post("/api/ideas", json={"title": "Smart lock"})
        client.post("/api/ideas/i1/upvote")
        snap = store.snapshot
        assert snap.ideas[0].title == "Smart lock"
        assert next(i for i in snap.ideas if i.id == "i1").vote_count == 16

    def test_cart(self, client):
        client.post("/api/cart/p1")
        client.post("/api/cart/p1")
        client.post("/api/cart/p2")
        data = client.get("/api/session").json()
        assert data["cart_total"] == 567
        assert data["cart_total_display"] == "₹567"
        assert data["cart_count"] == 3
        client.delete("/api/cart/p1")
        data = client.get("/api/session").json()
        assert data["snapshot"]["cart"] == [{"product_id": "p2", "quantity": 1}]

    def test_profile_name_is_trimmed(self, client, store):
        client.put("/api/profile/name", json={"name": "  Riya  "})
        assert store.snapshot.profile.display_name == "Riya"

    def test_view(self, client, store):
        client.put("/api/session/view", json={"view": "blog"})
        assert store.snapshot.view == "blog"

    def test_reset(self, client, store):
        client.post("/api/cart/p1")
        client.post("/api/session/reset")
        assert store.snapshot.cart == []
        assert store.snapshot.profile.points == 0


class TestIntentSerialization:
    def test_concurrent_intents_all_apply(self, store):
        async def burst():
            await asyncio.gather(*(run_intent(store.add_to_cart, "p1") for _ in range(40)))

        asyncio.run(burst())
        snap = store.snapshot
        assert snap.cart[0].quantity == 40
        assert snap.profile.points == 200

    def test_intent_returns_value(self, store):
        result = asyncio.run(run_intent(store.submit_quiz, True))
        assert result.points_awarded == 50

    def test_in_memory_database_is_shared_across_worker_threads(self):
        engine = create_db_engine("sqlite://")
        init_db(engine)
        repository = SnapshotRepository(engine, "threaded")
        store = SessionStore(repository, DEFAULT_CATALOG)

        asyncio.run(run_intent(store.add_to_cart, "p1"))
        restored = asyncio.run(run_intent(repository.load))
        assert restored is not None
        assert restored.cart[0].quantity == 1
