from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from praxis.api.curriculum import router as curriculum_router
from praxis.api.dashboard import router as dashboard_router
from praxis.api.health import router as health_router
from praxis.api.metrics import router as metrics_router
from praxis.api.recommendations import router as recommendations_router
from praxis.content.catalog import get_catalog
from praxis.core.app_metrics import metrics_middleware
from praxis.core.bootstrap import initialize_database
from praxis.core.errors import (
    DataSourceError,
    data_source_exception_handler,
    http_exception_handler,
    request_id_middleware,
    unhandled_exception_handler,
    validation_exception_handler,
)
from praxis.core.logging import configure_logging
from praxis.core.settings import settings
from praxis.memory.database import SessionLocal, engine


configure_logging(settings.log_level)

app = FastAPI(title="Praxis Dashboard API", version="0.1.0")
app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(recommendations_router)
app.include_router(curriculum_router)
app.include_router(metrics_router)
app.middleware("http")(metrics_middleware)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(DataSourceError, data_source_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
async def on_startup():
    get_catalog()
    if settings.database_bootstrap_on_start:
        async with SessionLocal() as session:
            await initialize_database(session, engine)


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
