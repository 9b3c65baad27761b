from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from praxis.api.deps import get_cache, get_catalog_dep, get_recommender, get_store
from praxis.content.catalog import Catalog
from praxis.core.cache_metrics import record_cache_error
from praxis.core.logging import DOMAIN_DASHBOARD, get_domain_logger
from praxis.core.settings import settings
from praxis.dashboard.assembler import assemble_dashboard_data
from praxis.recommendation.engine import RecommendationEngine
from praxis.schemas.dashboard import DashboardData
from praxis.stores.base import LearningStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
logger = get_domain_logger(__name__, DOMAIN_DASHBOARD)


def dashboard_cache_key(user_id: str) -> str:
    return f"dashboard:{user_id}"


@router.get("/{user_id}", response_model=DashboardData, response_model_by_alias=True)
async def get_dashboard(
    user_id: str,
    refresh: bool = Query(default=False, description="Bypass the cached aggregate and rebuild it"),
    store: LearningStore = Depends(get_store),
    catalog: Catalog = Depends(get_catalog_dep),
    recommender: RecommendationEngine = Depends(get_recommender),
    cache=Depends(get_cache),
):
    """Every dashboard shelf for one user. Cached in Redis; failing sources degrade to empty shelves."""
    cache_key = dashboard_cache_key(user_id)
    if settings.dashboard_cache_enabled and not refresh:
        try:
            cached = await cache.get(cache_key)
            if cached:
                return DashboardData.model_validate_json(cached)
        except Exception as exc:
            logger.warning("Dashboard cache read failed for %s: %s", user_id, exc)
            record_cache_error(cache_key)

    data = await assemble_dashboard_data(user_id, store, catalog, recommender)

    if settings.dashboard_cache_enabled:
        try:
            await cache.set(cache_key, data.model_dump_json(by_alias=True), ex=settings.dashboard_cache_ttl_seconds)
        except Exception as exc:
            logger.warning("Dashboard cache write failed for %s: %s", user_id, exc)
            record_cache_error(cache_key)
    return data


@router.delete("/{user_id}/cache")
async def invalidate_dashboard(user_id: str, cache=Depends(get_cache)):
    cache_key = dashboard_cache_key(user_id)
    try:
        removed = await cache.delete(cache_key)
    except Exception as exc:
        logger.warning("Dashboard cache delete failed for %s: %s", user_id, exc)
        record_cache_error(cache_key)
        removed = 0
    return {"user_id": user_id, "invalidated": bool(removed)}
