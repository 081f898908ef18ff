"""Application state shared by all tool handlers for the server's lifetime."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from flowdocs.cache import Cache
from flowdocs.docs import DocsFetcher
from flowdocs.fetcher import GitHubSource, build_http_client
from flowdocs.registry import Registry
from flowdocs.scraper import BrowserManager, DevelopScraper

if TYPE_CHECKING:
    import httpx

    from flowdocs.config import Settings


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: Cache
    source: GitHubSource
    registry: Registry
    docs: DocsFetcher
    browser: BrowserManager
    scraper: DevelopScraper

    @classmethod
    def build(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
        cache: Cache | None = None,
    ) -> AppState:
        """Wire every component from settings."""
        if http_client is None:
            http_client = build_http_client(settings.source)
        if cache is None:
            cache = Cache()
        source = GitHubSource(http_client, settings.source)
        browser = BrowserManager(settings.browser)
        return cls(
            settings=settings,
            http_client=http_client,
            cache=cache,
            source=source,
            registry=Registry(source, cache, settings.source, settings.cache),
            docs=DocsFetcher(source, cache, settings.source, settings.cache),
            browser=browser,
            scraper=DevelopScraper(
                browser,
                cache,
                source_settings=settings.source,
                cache_settings=settings.cache,
                browser_settings=settings.browser,
            ),
        )

    async def aclose(self) -> None:
        """Stop the shared browser and release the HTTP client."""
        try:
            await self.browser.close()
        finally:
            await self.http_client.aclose()
