from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from praxis.content.catalog import Catalog, get_catalog
from praxis.core.settings import settings
from praxis.memory.cache import redis_client
from praxis.memory.database import SessionLocal
from praxis.recommendation.engine import RecommendationEngine
from praxis.stores.base import LearningStore
from praxis.stores.cached import CachedLearningStore
from praxis.stores.sql import SqlLearningStore


@lru_cache(maxsize=1)
def _default_store() -> LearningStore:
    return CachedLearningStore(
        SqlLearningStore(SessionLocal),
        redis_client,
        ttl_seconds=settings.shared_cache_ttl_seconds,
    )


def get_store() -> LearningStore:
    return _default_store()


def get_catalog_dep() -> Catalog:
    return get_catalog()


def get_cache():
    return redis_client


def get_recommender(
    store: LearningStore = Depends(get_store),
    catalog: Catalog = Depends(get_catalog_dep),
) -> RecommendationEngine:
    return RecommendationEngine(store, catalog)
