"""In-memory app metrics: request latency and error rates, with optional alerts."""
from __future__ import annotations

import time
from collections import deque
from threading import Lock

from starlette.requests import Request
from starlette.responses import Response

_LATENCY_WINDOW = 500
_ERROR_RATE_ALERT_THRESHOLD = 0.10
# Dashboard assembly fans out to many stores; budget is looser than a single query.
_LATENCY_P95_ALERT_MS = 3000

_lock = Lock()
_request_count = 0
_error_count = 0
_latencies: deque[float] = deque(maxlen=_LATENCY_WINDOW)
_dashboard_latencies: deque[float] = deque(maxlen=_LATENCY_WINDOW)


def record_request(duration_sec: float, is_error: bool, *, dashboard: bool = False) -> None:
    with _lock:
        global _request_count, _error_count
        _request_count += 1
        if is_error:
            _error_count += 1
        _latencies.append(duration_sec)
        if dashboard:
            _dashboard_latencies.append(duration_sec)


def _percentile_ms(values: list[float], fraction: float) -> float | None:
    if not values:
        return None
    sorted_ms = sorted(v * 1000 for v in values)
    return round(sorted_ms[int((len(sorted_ms) - 1) * fraction)], 2)


def get_metrics() -> dict:
    with _lock:
        total = _request_count
        errors = _error_count
        latencies = list(_latencies)
        dashboard_latencies = list(_dashboard_latencies)

    error_rate = (errors / total) if total else 0.0
    latency_ms_p95 = _percentile_ms(latencies, 0.95)

    alerts: list[str] = []
    if total and error_rate >= _ERROR_RATE_ALERT_THRESHOLD:
        alerts.append("high_error_rate")
    if latency_ms_p95 is not None and latency_ms_p95 >= _LATENCY_P95_ALERT_MS:
        alerts.append("high_latency_p95")

    return {
        "request_count": total,
        "error_count": errors,
        "error_rate": round(error_rate, 4),
        "latency_ms_p50": _percentile_ms(latencies, 0.50),
        "latency_ms_p95": latency_ms_p95,
        "dashboard_latency_ms_p95": _percentile_ms(dashboard_latencies, 0.95),
        "alerts": alerts,
    }


def reset_metrics() -> None:
    """Reset counters (e.g. for tests)."""
    with _lock:
        global _request_count, _error_count
        _request_count = 0
        _error_count = 0
        _latencies.clear()
        _dashboard_latencies.clear()


async def metrics_middleware(request: Request, call_next) -> Response:
    """Record request duration and status for app metrics (skips /health and /metrics)."""
    path = request.url.path
    if path == "/health" or path.startswith("/metrics"):
        return await call_next(request)
    start = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start
    record_request(duration, response.status_code >= 400, dashboard=path.startswith("/dashboard"))
    return response
