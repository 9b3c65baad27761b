import time
from threading import Lock

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from praxis.core.settings import settings

_cursor_starts: dict[int, float] = {}
_cursor_lock = Lock()
_query_lock = Lock()
_query_count = 0
_query_seconds = 0.0


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    with _cursor_lock:
        _cursor_starts[id(cursor)] = time.perf_counter()


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    global _query_count, _query_seconds
    with _cursor_lock:
        start = _cursor_starts.pop(id(cursor), None)
    if start is not None:
        with _query_lock:
            _query_count += 1
            _query_seconds += time.perf_counter() - start


def get_query_metrics() -> dict:
    with _query_lock:
        count, seconds = _query_count, _query_seconds
    return {
        "db_query_count": count,
        "db_query_avg_ms": round(seconds * 1000 / count, 2) if count else None,
    }


engine = create_async_engine(settings.database_url, pool_pre_ping=True)
event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
event.listen(engine.sync_engine, "after_cursor_execute", _after_cursor_execute)
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
