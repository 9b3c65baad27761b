from __future__ import annotations

from fastapi import APIRouter

from praxis.core.app_metrics import get_metrics
from praxis.core.cache_metrics import get_cache_metrics
from praxis.core.source_metrics import get_source_metrics
from praxis.memory.database import get_query_metrics

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/app")
async def app_metrics():
    """Request latency (p50/p95), error rate, cache, data-source failure and query metrics, with alerts."""
    out = get_metrics()
    out["cache"] = get_cache_metrics()
    cache = out["cache"]
    if cache.get("cache_get_total", 0) >= 10 and (cache.get("cache_hit_ratio") or 1.0) < 0.5:
        out["alerts"] = list(out.get("alerts", [])) + ["low_cache_hit_ratio"]
    out["sources"] = get_source_metrics()
    if out["sources"].get("source_failures_recent", 0) >= 10:
        out["alerts"] = list(out.get("alerts", [])) + ["degraded_data_sources"]
    out["database"] = get_query_metrics()
    return out
