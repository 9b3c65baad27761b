from __future__ import annotations

from datetime import datetime, timezone

from praxis.api.deps import get_store
from praxis.core.errors import DataSourceError
from praxis.core.settings import settings
from praxis.main import app
from praxis.stores.base import ProgressRecord
from praxis.stores.memory import InMemoryLearningStore


def test_health_reports_catalog(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["catalog"]["total_domains"] == 10


def test_dashboard_contract_is_camel_case(api, store):
    store.lesson_progress.append(
        ProgressRecord(user_id="u1", domain_id="capital-allocation", module_id="ceo-as-investor",
                       lesson_id="five-choices", status="completed", progress_percentage=100,
                       completed_at=datetime.now(timezone.utc), updated_at=datetime.now(timezone.utc))
    )
    resp = api.get("/dashboard/u1")
    assert resp.status_code == 200
    body = resp.json()
    for key in (
        "recommendation",
        "residencyData",
        "currentStreak",
        "longestStreak",
        "jumpBackInItems",
        "strengthenCoreShelves",
        "practiceSpotlight",
        "continueYearPath",
        "newContent",
        "popularContent",
        "roadmap",
        "weeklyGoal",
        "latestKeyInsight",
        "domainCompletions",
        "themedCollections",
        "moduleCollections",
        "learningPaths",
    ):
        assert key in body
    assert body["currentStreak"] == 1
    assert body["roadmap"]["completedCount"] == 1
    assert body["roadmap"]["nextLesson"]["lessonId"] == "per-share-value"
    assert body["moduleCollections"][0]["items"][0]["completed"] is True
    assert body["learningPaths"][0]["progress"].keys() == {"completed", "total", "percentage"}
    assert "x-request-id" in resp.headers


def test_dashboard_is_cached_and_invalidated(api, store, fake_cache, monkeypatch):
    monkeypatch.setattr(settings, "dashboard_cache_enabled", True)

    first = api.get("/dashboard/u2")
    assert first.status_code == 200
    assert "dashboard:u2" in fake_cache.data
    assert first.json()["roadmap"]["completedCount"] == 0

    store.lesson_progress.append(
        ProgressRecord(user_id="u2", domain_id="capital-allocation", module_id="ceo-as-investor",
                       lesson_id="five-choices", status="completed")
    )
    assert api.get("/dashboard/u2").json()["roadmap"]["completedCount"] == 0
    assert api.get("/dashboard/u2", params={"refresh": "true"}).json()["roadmap"]["completedCount"] == 1

    deleted = api.delete("/dashboard/u2/cache")
    assert deleted.status_code == 200
    assert deleted.json()["invalidated"] is True
    assert "dashboard:u2" not in fake_cache.data


def test_dashboard_survives_cache_outage(api, fake_cache, monkeypatch):
    monkeypatch.setattr(settings, "dashboard_cache_enabled", True)
    fake_cache.fail = True
    resp = api.get("/dashboard/u3")
    assert resp.status_code == 200
    assert resp.json()["roadmap"]["completedCount"] == 0


def test_recommendations_endpoint(api):
    resp = api.get("/recommendations/u1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["primary"]["type"] == "lesson"
    assert body["primary"]["lessonId"] == "five-choices"
    assert len(body["alternates"]) == 3


class UnavailableStore(InMemoryLearningStore):
    async def list_lesson_progress(self, user_id):
        raise DataSourceError("lesson_progress", "connection refused")


def test_recommendations_surface_store_outage_as_503(client):
    app.dependency_overrides[get_store] = lambda: UnavailableStore()
    try:
        resp = client.get("/recommendations/u1")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "data_source_unavailable"
    assert body["error"]["details"] == {"source": "lesson_progress"}


def test_dashboard_never_fails_on_store_outage(client):
    app.dependency_overrides[get_store] = lambda: UnavailableStore()
    try:
        resp = client.get("/dashboard/u1")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    body = resp.json()
    assert body["recommendation"] == {"primary": None, "alternates": []}
    assert body["roadmap"]["completedCount"] == 0


def test_curriculum_tree(client):
    resp = client.get("/curriculum")
    assert resp.status_code == 200
    body = resp.json()
    assert body["stats"]["total_lessons"] == 60
    first = body["domains"][0]
    assert first["id"] == "capital-allocation"
    assert [l["id"] for l in first["modules"][0]["lessons"]] == ["five-choices", "per-share-value", "opportunity-cost"]
    assert "cs_unit_economics_crisis" in first["related_simulations"]


def test_metrics_include_cache_and_sources(client):
    client.get("/curriculum")
    resp = client.get("/metrics/app")
    assert resp.status_code == 200
    body = resp.json()
    assert body["request_count"] >= 1
    assert "cache" in body
    assert "sources" in body
    assert "db_query_count" in body["database"]
