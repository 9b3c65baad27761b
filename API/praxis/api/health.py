from fastapi import APIRouter, Depends

from praxis.api.deps import get_catalog_dep
from praxis.content.catalog import Catalog
from praxis.core.settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(catalog: Catalog = Depends(get_catalog_dep)):
    return {
        "status": "ok",
        "service": "praxis-dashboard-api",
        "env": settings.app_env,
        "dashboard_cache_enabled": settings.dashboard_cache_enabled,
        "catalog": catalog.stats(),
    }
