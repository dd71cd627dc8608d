from __future__ import annotations

import hashlib
import json
import time
from collections import Counter
from typing import Any

_entries: dict[str, tuple[float, Any]] = {}
_hits: Counter[str] = Counter()
_misses: Counter[str] = Counter()


def _make_key(operation: str, arguments: dict[str, Any]) -> str:
    normalized = json.dumps(
        {"operation": operation, "arguments": arguments}, sort_keys=True, default=str
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def lookup(operation: str, arguments: dict[str, Any], ttl: float) -> tuple[bool, Any]:
    """Return ``(found, value)`` for a fetch result stored less than ``ttl`` seconds ago."""
    key = _make_key(operation, arguments)
    entry = _entries.get(key)
    if entry is not None:
        stored_at, value = entry
        if time.monotonic() - stored_at < ttl:
            _hits[operation] += 1
            return True, value
        del _entries[key]
    _misses[operation] += 1
    return False, None


def store(operation: str, arguments: dict[str, Any], value: Any, ttl: float) -> None:
    """Store a fetch result, dropping every entry older than ``ttl``."""
    now = time.monotonic()
    expired = [key for key, (stored_at, _) in _entries.items() if now - stored_at >= ttl]
    for key in expired:
        del _entries[key]
    _entries[_make_key(operation, arguments)] = (now, value)


def get_cache_stats() -> dict:
    hits = sum(_hits.values())
    misses = sum(_misses.values())
    total = hits + misses
    return {
        "size": len(_entries),
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / total * 100, 1) if total > 0 else 0.0,
        "by_operation": {
            op: {"hits": _hits[op], "misses": _misses[op]}
            for op in sorted(set(_hits) | set(_misses))
        },
    }


def clear_cache() -> None:
    _entries.clear()
    _hits.clear()
    _misses.clear()
