from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Cached value with an absolute expiry on the cache's clock."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any
    expires_at: float
