"""
Tests for api/routes/seed.py — POST /api/v1/seed
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient

import api.routes.seed as seed_routes
from api.app import create_app
from utils.config import KnownValues
from utils.seed import RESEED_LOCK


@pytest.fixture()
def small_seed(monkeypatch):
    monkeypatch.setattr(seed_routes._cfg, "seed_count", 40)
    return 40


class TestReseed:
    def test_returns_counts(self, app_client, small_seed):
        resp = app_client.post("/api/v1/seed")
        assert resp.status_code == 200
        body = resp.json()
        assert body["advocates"] == small_seed
        assert body["specialties"] == len(KnownValues.SPECIALTIES)
        assert 2 * small_seed <= body["advocateSpecialties"] <= 5 * small_seed

    def test_list_total_matches_after_reseed(self, app_client, small_seed):
        app_client.post("/api/v1/seed")
        body = app_client.get("/api/v1/advocates").json()
        assert body["total"] == small_seed

    def test_reseed_replaces_rows(self, app_client, small_seed):
        app_client.post("/api/v1/seed")
        # ids restart at 1 and the example specialties are gone.
        body = app_client.get("/api/v1/advocates/1").json()
        assert body["id"] == 1
        assert app_client.get("/api/v1/advocates?specialties=Trauma").json()["total"] == 0

    def test_reseed_twice_is_stable(self, app_client, small_seed):
        first = app_client.post("/api/v1/seed").json()
        second = app_client.post("/api/v1/seed").json()
        assert first == second
        assert app_client.get("/api/v1/advocates").json()["total"] == small_seed

    def test_filter_cache_invalidated(self, app_client, small_seed):
        before = app_client.get("/api/v1/advocates/filters").json()
        assert "Trauma" in before["specialties"]
        app_client.post("/api/v1/seed")
        after = app_client.get("/api/v1/advocates/filters").json()
        assert "Trauma" not in after["specialties"]
        assert len(after["specialties"]) == len(KnownValues.SPECIALTIES)

    def test_concurrent_reseed_rejected(self, app_client, small_seed):
        assert RESEED_LOCK.acquire(blocking=False)
        try:
            resp = app_client.post("/api/v1/seed")
        finally:
            RESEED_LOCK.release()
        assert resp.status_code == 409
        # Data untouched
        assert app_client.get("/api/v1/advocates").json()["total"] == 3

    def test_lock_released_after_reseed(self, app_client, small_seed):
        app_client.post("/api/v1/seed")
        assert not RESEED_LOCK.locked()

    def test_creates_missing_database(self, tmp_path, small_seed):
        db_path = tmp_path / "fresh" / "advocates.sqlite"
        client = TestClient(create_app(db_path=db_path))
        assert client.get("/api/v1/advocates").status_code == 503
        resp = client.post("/api/v1/seed")
        assert resp.status_code == 200
        assert db_path.exists()
        assert client.get("/api/v1/advocates").json()["total"] == small_seed

    def test_get_not_allowed(self, app_client):
        assert app_client.get("/api/v1/seed").status_code == 405
