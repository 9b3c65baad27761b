"""In-memory Redis cache metrics per keyspace (dashboard aggregates, shared catalog reads)."""
from __future__ import annotations

from collections import defaultdict
from threading import Lock

_lock = Lock()
_counts: dict[str, dict[str, int]] = defaultdict(lambda: {"hits": 0, "misses": 0, "sets": 0, "errors": 0})


def _keyspace(key: str) -> str:
    return key.split(":", 1)[0] if ":" in key else "default"


def record_cache_get(key: str, hit: bool) -> None:
    with _lock:
        bucket = _counts[_keyspace(key)]
        bucket["hits" if hit else "misses"] += 1


def record_cache_set(key: str) -> None:
    with _lock:
        _counts[_keyspace(key)]["sets"] += 1


def record_cache_error(key: str) -> None:
    with _lock:
        _counts[_keyspace(key)]["errors"] += 1


def get_cache_metrics() -> dict:
    with _lock:
        snapshot = {name: dict(bucket) for name, bucket in _counts.items()}
    hits = sum(b["hits"] for b in snapshot.values())
    misses = sum(b["misses"] for b in snapshot.values())
    total_gets = hits + misses
    hit_ratio = (hits / total_gets) if total_gets else None
    return {
        "cache_hits": hits,
        "cache_misses": misses,
        "cache_sets": sum(b["sets"] for b in snapshot.values()),
        "cache_errors": sum(b["errors"] for b in snapshot.values()),
        "cache_get_total": total_gets,
        "cache_hit_ratio": round(hit_ratio, 4) if hit_ratio is not None else None,
        "keyspaces": snapshot,
    }


def reset_cache_metrics() -> None:
    """Reset counters (e.g. for tests)."""
    with _lock:
        _counts.clear()
