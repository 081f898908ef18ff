"""Property tables scraped from the rendered documentation site.

The develop tab of each component renders its property, event and
accessibility tables client-side, so they are read from a headless Chromium.
One browser process is shared and launched lazily; every scrape gets its own
browser context, closed on every exit path.

Accordion sections are expanded before reading. An accordion that does not
render its table in time contributes no rows; navigation and first-render
timeouts fail the scrape with ``RENDER_TIMEOUT``.
"""

from __future__ import annotations

import asyncio
import re
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Protocol

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from flowdocs.cache import develop_key
from flowdocs.config import BrowserSettings, CacheSettings, SourceSettings
from flowdocs.errors import ErrorCode, FlowDocsError
from flowdocs.models.develop import DevelopData, PropertiesSection, PropertyInfo

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from playwright.async_api import Browser, ElementHandle, Page, Playwright, Route

    from flowdocs.cache import Cache

log = structlog.get_logger()

NO_PROPERTY_DATA = "No property data found for this component."

# Reads the first table below a container into raw cell strings.
# The name column prefers its <code> element over the cell's plain text.
_READ_ROWS_JS = """
(container) => {
  const table = container.querySelector("table");
  if (!table) return [];
  return Array.from(table.querySelectorAll("tbody tr")).map((row) => {
    const cells = row.querySelectorAll("td");
    const text = (i) => cells[i]?.textContent?.trim() ?? "";
    const code = cells[0]?.querySelector("code");
    return {
      name: code?.textContent?.trim() ?? text(0),
      type: text(1),
      default: text(2),
      description: text(3),
    };
  });
}
"""


# ---------------------------------------------------------------------------
# Browser lifecycle
# ---------------------------------------------------------------------------


async def _abort_request(route: Route) -> None:
    await route.abort()


class BrowserManager:
    """Owns the shared Chromium process.

    ``acquire`` launches at most one browser at a time; a browser that lost
    its connection is discarded and replaced. ``close`` is safe to call when
    nothing was ever launched.
    """

    def __init__(self, settings: BrowserSettings | None = None) -> None:
        self._settings = settings or BrowserSettings()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def acquire(self) -> Browser:
        async with self._lock:
            if self._browser is not None:
                if self._browser.is_connected():
                    return self._browser
                log.warning("browser_disconnected")
                self._browser = None

            try:
                if self._playwright is None:
                    self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=self._settings.headless
                )
            except PlaywrightError as exc:
                raise FlowDocsError(
                    code=ErrorCode.BROWSER_LAUNCH_FAILED,
                    message=f"Browser launch failed: {exc.message}",
                    suggestion="Install the Chromium runtime: playwright install chromium",
                    recoverable=False,
                ) from exc

            log.info("browser_launched", headless=self._settings.headless)
            return self._browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Yield a page in a fresh, isolated browser context."""
        browser = await self.acquire()
        context = await browser.new_context()
        try:
            await context.route(
                re.compile(self._settings.blocked_resource_pattern), _abort_request
            )
            yield await context.new_page()
        finally:
            await context.close()

    async def close(self) -> None:
        async with self._lock:
            browser, self._browser = self._browser, None
            playwright, self._playwright = self._playwright, None

        try:
            if browser is not None:
                await browser.close()
                log.info("browser_closed")
        finally:
            if playwright is not None:
                await playwright.stop()


# ---------------------------------------------------------------------------
# Table extraction
# ---------------------------------------------------------------------------


class TableExtractor(Protocol):
    """Given a rendered page, extract zero or more named row sets."""

    # Selector that must be present before ``extract`` is called.
    ready_selector: str

    async def extract(self, page: Page) -> list[PropertiesSection]: ...


def _to_properties(rows: list[dict[str, Any]]) -> tuple[PropertyInfo, ...]:
    return tuple(
        PropertyInfo(
            name=row.get("name", ""),
            type=row.get("type", ""),
            default=row.get("default", ""),
            description=row.get("description", ""),
        )
        for row in rows
    )


async def _read_rows(container: ElementHandle | None) -> tuple[PropertyInfo, ...]:
    if container is None:
        return ()
    return _to_properties(await container.evaluate(_READ_ROWS_JS))


class FlowTableExtractor:
    """Selectors for the flow documentation site's develop tab."""

    main = "[class*='mainContent']"
    ready_selector = f"{main} .flow--table--table-container"
    primary_table = f"{main} > .flow--table--table-container"
    accordion = f"{main} > .flow--accordion"
    accordion_heading = ".flow--heading--heading-text"
    accordion_expanded_class = "flow--accordion--expanded"
    accordion_button = ".flow--accordion--header-button"
    accordion_content = ".flow--accordion--content-inner"

    def __init__(self, expand_timeout_ms: int = 5_000) -> None:
        self._expand_timeout_ms = expand_timeout_ms

    async def extract(self, page: Page) -> list[PropertiesSection]:
        sections: list[PropertiesSection] = []

        properties = await _read_rows(await page.query_selector(self.primary_table))
        if properties:
            sections.append(PropertiesSection(heading="Properties", properties=properties))

        for accordion in await page.query_selector_all(self.accordion):
            section = await self._extract_accordion(accordion)
            if section is not None:
                sections.append(section)

        return sections

    async def _extract_accordion(self, accordion: ElementHandle) -> PropertiesSection | None:
        heading_el = await accordion.query_selector(self.accordion_heading)
        heading = ((await heading_el.text_content()) or "").strip() if heading_el else ""

        classes = (await accordion.get_attribute("class")) or ""
        if self.accordion_expanded_class not in classes.split():
            button = await accordion.query_selector(self.accordion_button)
            if button is not None:
                await button.click()
                try:
                    await accordion.wait_for_selector(
                        f"{self.accordion_content} table", timeout=self._expand_timeout_ms
                    )
                except PlaywrightTimeoutError:
                    log.debug("accordion_expand_timeout", heading=heading)

        properties = await _read_rows(await accordion.query_selector(self.accordion_content))
        if not properties:
            return None
        return PropertiesSection(heading=heading or "Other", properties=properties)


# ---------------------------------------------------------------------------
# Scraping
# ---------------------------------------------------------------------------


class DevelopScraper:
    def __init__(
        self,
        browser: BrowserManager,
        cache: Cache,
        source_settings: SourceSettings | None = None,
        cache_settings: CacheSettings | None = None,
        browser_settings: BrowserSettings | None = None,
        extractor: TableExtractor | None = None,
    ) -> None:
        self._browser = browser
        self._cache = cache
        self._source_settings = source_settings or SourceSettings()
        self._cache_settings = cache_settings or CacheSettings()
        self._browser_settings = browser_settings or BrowserSettings()
        self._extractor = extractor or FlowTableExtractor(
            expand_timeout_ms=self._browser_settings.expand_timeout_ms
        )

    def develop_url(self, category: str, slug: str) -> str:
        return f"{self._source_settings.site_url}/04-components/{category}/{slug}/develop"

    async def scrape_develop(self, category: str, slug: str) -> DevelopData:
        key = develop_key(category, slug)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        url = self.develop_url(category, slug)
        try:
            async with self._browser.page() as page:
                await page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self._browser_settings.navigation_timeout_ms,
                )
                await page.wait_for_selector(
                    self._extractor.ready_selector,
                    timeout=self._browser_settings.render_timeout_ms,
                )
                sections = await self._extractor.extract(page)
        except PlaywrightTimeoutError as exc:
            raise FlowDocsError(
                code=ErrorCode.RENDER_TIMEOUT,
                message=(
                    f"Timed out loading property tables for {category}/{slug}. "
                    "The develop page may not have rendered in time."
                ),
                suggestion="Retry; the documentation site may be slow.",
                recoverable=True,
            ) from exc
        except PlaywrightError as exc:
            raise FlowDocsError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Failed to load {url}: {exc.message}",
                recoverable=True,
            ) from exc

        data = DevelopData(sections=tuple(sections))
        self._cache.set(key, data, self._cache_settings.develop_ttl)
        log.info("develop_scraped", category=category, slug=slug, sections=len(sections))
        return data


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def format_develop_data(data: DevelopData) -> str:
    """Render each section as a markdown table."""
    if not data.sections:
        return NO_PROPERTY_DATA

    parts: list[str] = []
    for section in data.sections:
        parts.append(f"## {section.heading}\n")
        parts.append("| Property | Type | Default | Description |")
        parts.append("|----------|------|---------|-------------|")
        for prop in section.properties:
            parts.append(
                f"| `{_cell(prop.name)}` | {_cell(prop.type)} | "
                f"{_cell(prop.default)} | {_cell(prop.description)} |"
            )
        parts.append("")

    return "\n".join(parts)
