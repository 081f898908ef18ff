"""In-memory documentation cache with per-entry expiry.

Expiry is evaluated lazily: a read after ``expires_at`` deletes the entry and
reports a miss. There is no background sweeper, no capacity bound and no
invalidation API; the working set is one component library's documentation.

Values are opaque. Callers own the type of what they store under a key, and
only ever store a fully built value (a failed fetch writes nothing).
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import structlog

from flowdocs.models.cache import CacheEntry

log = structlog.get_logger()

REGISTRY_KEY = "registry"


def mdx_key(category: str, slug: str, kind: str) -> str:
    return f"mdx:{category}/{slug}/{kind}"


def example_key(category: str, slug: str, name: str) -> str:
    return f"example:{category}/{slug}/{name}"


def develop_key(category: str, slug: str) -> str:
    return f"develop:{category}/{slug}"


class Cache:
    """Process-local key/value store. Never suspends."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock

    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` on miss or expiry."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._store[key]
            log.debug("cache_expired", key=key)
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: timedelta) -> None:
        self._store[key] = CacheEntry(
            value=value,
            expires_at=self._clock() + ttl.total_seconds(),
        )

    def __len__(self) -> int:
        return len(self._store)
