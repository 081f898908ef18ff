"""Component registry: tree scanning, frontmatter parsing, index building and lookup.

The registry is rebuilt wholesale from the repository tree whenever the cached
copy expires. A component whose ``index.mdx`` is missing is still listed with
degraded metadata; any other failure aborts the build and nothing is cached.
"""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING

import structlog

from flowdocs.cache import REGISTRY_KEY
from flowdocs.config import CacheSettings, SourceSettings
from flowdocs.errors import ErrorCode, FlowDocsError
from flowdocs.models.registry import ComponentInfo, ComponentRegistry, ResolvedComponent

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flowdocs.cache import Cache
    from flowdocs.fetcher import GitHubSource
    from flowdocs.models.registry import TreeEntry

log = structlog.get_logger()

SUGGESTION_LIMIT = 5

_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---", re.DOTALL)
_KEY_RE = re.compile(r"^([A-Za-z_][\w-]*):\s*(.*)$")
_BLOCK_SCALAR_INDICATORS = frozenset({">", "|", ">-", "|-", ">+", "|+"})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def extract_component_paths(
    entries: Iterable[TreeEntry], content_base: str
) -> list[tuple[str, str]]:
    """Return ``(category, slug)`` for every ``<base>/<category>/<slug>/index.mdx``.

    Exactly one level of category and one of slug; deeper or shallower paths
    are ignored.
    """
    pattern = re.compile(rf"^{re.escape(content_base)}/([^/]+)/([^/]+)/index\.mdx$")
    pairs: list[tuple[str, str]] = []
    for entry in entries:
        match = pattern.match(entry.path)
        if match:
            pairs.append((match.group(1), match.group(2)))
    return pairs


def _join_value(lines: list[str]) -> str:
    parts = [line.strip() for line in lines]
    parts = [p for p in parts if p]
    if parts and parts[0] in _BLOCK_SCALAR_INDICATORS:
        parts = parts[1:]
    value = " ".join(parts)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return value


def parse_frontmatter(mdx: str) -> tuple[str, str]:
    """Extract ``(component, description)`` from an MDX frontmatter block.

    ``description`` may continue over indented lines; those are trimmed and
    rejoined with single spaces. Missing block or keys yield empty strings.
    """
    match = _FRONTMATTER_RE.match(mdx)
    if match is None:
        return "", ""

    fields: dict[str, list[str]] = {}
    current: str | None = None
    for line in match.group(1).splitlines():
        key_match = _KEY_RE.match(line)
        if key_match:
            current = key_match.group(1)
            fields[current] = [key_match.group(2)]
        elif current is not None and (not line.strip() or line[0].isspace()):
            fields[current].append(line)
        else:
            current = None

    return _join_value(fields.get("component", [])), _join_value(fields.get("description", []))


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def build_registry(components: Iterable[ComponentInfo]) -> ComponentRegistry:
    """Assemble the ordered component list and the slug lookup in one pass."""
    ordered = tuple(components)
    by_slug: dict[str, ComponentInfo] = {}
    for component in ordered:
        if component.slug in by_slug:
            log.warning(
                "registry_duplicate_slug",
                slug=component.slug,
                kept=component.category,
                dropped=by_slug[component.slug].category,
            )
        by_slug[component.slug] = component
    return ComponentRegistry(components=ordered, by_slug=by_slug)


async def _load_component(
    source: GitHubSource, settings: SourceSettings, category: str, slug: str
) -> ComponentInfo:
    raw = await source.fetch_raw(f"{settings.content_base}/{category}/{slug}/index.mdx")
    if raw is None:
        log.info("registry_metadata_missing", category=category, slug=slug)
        return ComponentInfo(slug=slug, name=slug, description="", category=category)

    name, description = parse_frontmatter(raw)
    return ComponentInfo(slug=slug, name=name or slug, description=description, category=category)


async def load_components(source: GitHubSource, settings: SourceSettings) -> list[ComponentInfo]:
    """Scan the tree and fetch every component's frontmatter concurrently.

    Every fetch settles before the first failure, in tree order, is raised.
    """
    entries = await source.fetch_tree()
    pairs = extract_component_paths(entries, settings.content_base)
    results = await asyncio.gather(
        *(_load_component(source, settings, category, slug) for category, slug in pairs),
        return_exceptions=True,
    )
    components: list[ComponentInfo] = []
    for result in results:
        if isinstance(result, BaseException):
            raise result
        components.append(result)
    return components


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def suggest_component(
    query: str, registry: ComponentRegistry, limit: int = SUGGESTION_LIMIT
) -> list[str]:
    """Slugs whose slug or display name contains ``query``, case-insensitively.

    Registry order, no ranking.
    """
    needle = query.lower()
    matches: list[str] = []
    for component in registry.components:
        if needle in component.slug.lower() or needle in component.name.lower():
            matches.append(component.slug)
            if len(matches) >= limit:
                break
    return matches


class Registry:
    """Cached access to the component registry."""

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

    async def get_registry(self) -> ComponentRegistry:
        cached = self._cache.get(REGISTRY_KEY)
        if cached is not None:
            return cached

        try:
            components = await load_components(self._source, self._source_settings)
        except FlowDocsError as exc:
            raise FlowDocsError(
                code=ErrorCode.REGISTRY_UNAVAILABLE,
                message=f"Component registry unavailable: {exc.message}",
                suggestion=exc.suggestion,
                recoverable=True,
            ) from exc
        except ValueError as exc:
            raise FlowDocsError(
                code=ErrorCode.REGISTRY_UNAVAILABLE,
                message=f"Component registry unavailable: malformed tree listing ({exc})",
                recoverable=True,
            ) from exc

        registry = build_registry(components)
        self._cache.set(REGISTRY_KEY, registry, self._cache_settings.registry_ttl)
        log.info("registry_built", components=len(registry.components))
        return registry

    async def list_components(self, category: str | None = None) -> list[ComponentInfo]:
        registry = await self.get_registry()
        if category:
            return [c for c in registry.components if c.category == category]
        return list(registry.components)

    async def categories(self) -> list[str]:
        registry = await self.get_registry()
        return sorted({c.category for c in registry.components})

    async def resolve_category(
        self, component: str, category: str | None = None
    ) -> ResolvedComponent | None:
        """Locate a component's documentation.

        An explicit category is trusted as given and the registry is not
        consulted. Otherwise the slug is looked up; ``None`` means not found.
        """
        if category:
            return ResolvedComponent(category=category, slug=component)

        registry = await self.get_registry()
        info = registry.by_slug.get(component)
        if info is None:
            return None
        return ResolvedComponent(category=info.category, slug=info.slug)
