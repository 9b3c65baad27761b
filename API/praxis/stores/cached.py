"""
Redis read-through cache for the shared (non-user) store reads.

Residency article lists, popularity rankings, the newest-content lists and the
curated learning paths are the same for every user, so they are cached with a
short TTL; every per-user read is delegated untouched. Redis failures fall
through to the wrapped store.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import TypeAdapter

from praxis.core.cache_metrics import record_cache_error
from praxis.core.logging import DOMAIN_STORAGE, get_domain_logger
from praxis.stores.base import (
    ArticleActivity,
    ContentRecord,
    Debrief,
    LearningPathRecord,
    LearningStore,
    PopularLesson,
    PopularSimulation,
    ProfileSettings,
    ProgressRecord,
    SimulationRecord,
)

T = TypeVar("T")
logger = get_domain_logger(__name__, DOMAIN_STORAGE)

_STR_LIST = TypeAdapter(list[str])
_POPULAR_LESSONS = TypeAdapter(list[PopularLesson])
_POPULAR_SIMULATIONS = TypeAdapter(list[PopularSimulation])
_CONTENT_RECORDS = TypeAdapter(list[ContentRecord])
_LEARNING_PATHS = TypeAdapter(list[LearningPathRecord])


class CachedLearningStore(LearningStore):
    def __init__(self, inner: LearningStore, cache: Any, ttl_seconds: int = 3600):
        self._inner = inner
        self._cache = cache
        self._ttl = ttl_seconds

    async def _cached(self, key: str, adapter: TypeAdapter, load: Callable[[], Awaitable[T]]) -> T:
        try:
            raw = await self._cache.get(key)
            if raw is not None:
                return adapter.validate_json(raw)
        except Exception as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            record_cache_error(key)

        value = await load()

        try:
            await self._cache.set(key, adapter.dump_json(value).decode(), ex=self._ttl)
        except Exception as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)
            record_cache_error(key)
        return value

    # Shared reads

    async def list_residency_article_ids(self, residency_year: int) -> list[str]:
        return await self._cached(
            f"shared:residency_articles:{residency_year}",
            _STR_LIST,
            lambda: self._inner.list_residency_article_ids(residency_year),
        )

    async def list_popular_lessons(self, limit: int) -> list[PopularLesson]:
        return await self._cached(
            f"shared:popular_lessons:{limit}",
            _POPULAR_LESSONS,
            lambda: self._inner.list_popular_lessons(limit),
        )

    async def list_popular_simulations(self, limit: int) -> list[PopularSimulation]:
        return await self._cached(
            f"shared:popular_simulations:{limit}",
            _POPULAR_SIMULATIONS,
            lambda: self._inner.list_popular_simulations(limit),
        )

    async def list_recent_cases(self, since: datetime, limit: int) -> list[ContentRecord]:
        # Keyed by day: the window moves slower than the cache expires.
        return await self._cached(
            f"shared:recent_cases:{since.date().isoformat()}:{limit}",
            _CONTENT_RECORDS,
            lambda: self._inner.list_recent_cases(since, limit),
        )

    async def list_recent_articles(self, since: datetime, limit: int) -> list[ContentRecord]:
        return await self._cached(
            f"shared:recent_articles:{since.date().isoformat()}:{limit}",
            _CONTENT_RECORDS,
            lambda: self._inner.list_recent_articles(since, limit),
        )

    async def list_learning_paths(self) -> list[LearningPathRecord]:
        return await self._cached("shared:learning_paths", _LEARNING_PATHS, self._inner.list_learning_paths)

    # Per-user reads

    async def get_current_residency(self, user_id: str) -> int | None:
        return await self._inner.get_current_residency(user_id)

    async def get_profile(self, user_id: str) -> ProfileSettings | None:
        return await self._inner.get_profile(user_id)

    async def get_aggregate_scores(self, user_id: str) -> dict[str, float] | None:
        return await self._inner.get_aggregate_scores(user_id)

    async def list_completed_article_ids(self, user_id: str) -> list[str]:
        return await self._inner.list_completed_article_ids(user_id)

    async def list_completed_simulations(self, user_id: str) -> list[SimulationRecord]:
        return await self._inner.list_completed_simulations(user_id)

    async def list_in_progress_lessons(self, user_id: str, limit: int = 5) -> list[ProgressRecord]:
        return await self._inner.list_in_progress_lessons(user_id, limit)

    async def list_in_progress_simulations(self, user_id: str, limit: int = 5) -> list[SimulationRecord]:
        return await self._inner.list_in_progress_simulations(user_id, limit)

    async def list_lesson_progress(self, user_id: str) -> list[ProgressRecord]:
        return await self._inner.list_lesson_progress(user_id)

    async def list_progress_history(self, user_id: str) -> list[ProgressRecord]:
        return await self._inner.list_progress_history(user_id)

    async def list_recent_completed_articles(self, user_id: str, limit: int = 5) -> list[ArticleActivity]:
        return await self._inner.list_recent_completed_articles(user_id, limit)

    async def list_recent_simulations(self, user_id: str, limit: int = 3) -> list[SimulationRecord]:
        return await self._inner.list_recent_simulations(user_id, limit)

    async def list_debriefs(self, user_id: str) -> list[Debrief]:
        return await self._inner.list_debriefs(user_id)
