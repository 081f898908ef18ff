"""Static MDX documents and example snippets, cached per document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import structlog

from flowdocs.cache import example_key, mdx_key
from flowdocs.config import CacheSettings, SourceSettings

if TYPE_CHECKING:
    from flowdocs.cache import Cache
    from flowdocs.fetcher import GitHubSource

log = structlog.get_logger()

DocKind = Literal["overview", "guidelines", "develop"]


class DocsFetcher:
    def __init__(
        self,
        source: GitHubSource,
        cache: Cache,
        source_settings: SourceSettings | None = None,
        cache_settings: CacheSettings | None = None,
    ) -> None:
        self._source = source
        self._cache = cache
        self._source_settings = source_settings or SourceSettings()
        self._cache_settings = cache_settings or CacheSettings()

    def _component_path(self, category: str, slug: str) -> str:
        return f"{self._source_settings.content_base}/{category}/{slug}"

    async def fetch_mdx(self, category: str, slug: str, kind: DocKind) -> str | None:
        """Raw MDX for one documentation tab, or ``None`` if the file does not exist."""
        key = mdx_key(category, slug, kind)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        content = await self._source.fetch_raw(f"{self._component_path(category, slug)}/{kind}.mdx")
        if content is None:
            log.debug("doc_missing", category=category, slug=slug, kind=kind)
            return None
        self._cache.set(key, content, self._cache_settings.mdx_ttl)
        return content

    async def fetch_example(self, category: str, slug: str, name: str = "default") -> str | None:
        """Source of a live-code example, or ``None`` if it does not exist."""
        key = example_key(category, slug, name)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        content = await self._source.fetch_raw(
            f"{self._component_path(category, slug)}/examples/{name}.tsx"
        )
        if content is not None:
            self._cache.set(key, content, self._cache_settings.example_ttl)
        return content
