"""In-memory counters for data-source and shelf failures on the dashboard read path."""
from __future__ import annotations

from collections import Counter, deque
from threading import Lock

_RECENT_WINDOW = 50

_lock = Lock()
_failures: Counter[str] = Counter()
_timeouts: Counter[str] = Counter()
_recent: deque[str] = deque(maxlen=_RECENT_WINDOW)


def record_source_failure(label: str, *, timed_out: bool = False) -> None:
    with _lock:
        _failures[label] += 1
        if timed_out:
            _timeouts[label] += 1
        _recent.append(label)


def get_source_metrics() -> dict:
    with _lock:
        failures = dict(_failures)
        timeouts = dict(_timeouts)
        recent = len(_recent)
    return {
        "source_failures_total": sum(failures.values()),
        "source_failures_recent": recent,
        "source_failures_by_label": failures,
        "source_timeouts_by_label": timeouts,
    }


def reset_source_metrics() -> None:
    """Reset (e.g. for tests)."""
    with _lock:
        _failures.clear()
        _timeouts.clear()
        _recent.clear()
