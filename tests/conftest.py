from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode runtime guards:
# - no schema bootstrap against a real database
# - no Redis round-trips for the dashboard aggregate
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_BOOTSTRAP_ON_START", "false")
os.environ.setdefault("DASHBOARD_CACHE_ENABLED", "false")

from praxis.api.deps import get_cache, get_store  # noqa: E402
from praxis.content.catalog import get_catalog  # noqa: E402
from praxis.main import app  # noqa: E402
from praxis.stores.memory import InMemoryLearningStore  # noqa: E402

# Wednesday afternoon; the week starts on Monday 2026-10-12.
FIXED_NOW = datetime(2026, 10, 14, 15, 30, tzinfo=timezone.utc)


class FakeCache:
    """Dict-backed stand-in for the Redis wrapper (get/set/delete only)."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.fail = False

    async def get(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        if self.fail:
            raise ConnectionError("redis down")
        self.data[key] = value
        return True

    async def delete(self, *keys):
        if self.fail:
            raise ConnectionError("redis down")
        return sum(1 for key in keys if self.data.pop(key, None) is not None)


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def store() -> InMemoryLearningStore:
    return InMemoryLearningStore()


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def api(client, store, fake_cache):
    """Client whose store and cache dependencies point at in-process fakes."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_cache] = lambda: fake_cache
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
