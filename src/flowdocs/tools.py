"""Tool handlers: resolve the component, fetch its documents, render markdown.

Handlers return the rendered text or raise ``FlowDocsError``; the server turns
errors into structured ``isError`` results.
"""

from __future__ import annotations

from itertools import groupby
from typing import TYPE_CHECKING, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from flowdocs.errors import ErrorCode, FlowDocsError
from flowdocs.mdx import clean_mdx
from flowdocs.models.tools import ComponentDocsInput, ListComponentsInput
from flowdocs.registry import suggest_component
from flowdocs.scraper import format_develop_data

if TYPE_CHECKING:
    from flowdocs.models.registry import ComponentInfo, ResolvedComponent
    from flowdocs.state import AppState

log = structlog.get_logger()

_M = TypeVar("_M", bound=BaseModel)


def _validate(model: type[_M], **kwargs: object) -> _M:
    try:
        return model(**kwargs)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise FlowDocsError(
            code=ErrorCode.INVALID_INPUT,
            message=messages,
            recoverable=False,
        ) from exc


async def _resolve(
    state: AppState, component: str, category: str | None
) -> tuple[ResolvedComponent, ComponentInfo | None]:
    resolved = await state.registry.resolve_category(component, category)
    registry = await state.registry.get_registry()
    if resolved is None:
        suggestions = suggest_component(component, registry)
        log.info("component_not_found", component=component, suggestions=len(suggestions))
        hint = f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""
        raise FlowDocsError(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message=f'Component "{component}" not found.{hint}',
            suggestion="Call list_components to see every available component.",
            recoverable=False,
        )
    return resolved, registry.by_slug.get(resolved.slug)


async def list_components(state: AppState, category: str | None = None) -> str:
    """Markdown listing grouped by category, sorted by category then slug."""
    args = _validate(ListComponentsInput, category=category)
    components = await state.registry.list_components(args.category)

    if not components:
        if args.category:
            categories = await state.registry.categories()
            return (
                f'No components found in category "{args.category}". '
                f"Available categories: {', '.join(categories)}"
            )
        return "No components found."

    ordered = sorted(components, key=lambda c: (c.category, c.slug))
    lines: list[str] = []
    for cat, group in groupby(ordered, key=lambda c: c.category):
        lines.append(f"## {cat}\n")
        for c in group:
            lines.append(f"- **{c.name}** (`{c.slug}`): {c.description}")
        lines.append("")
    return "\n".join(lines)


async def get_component_overview(
    state: AppState, component: str, category: str | None = None
) -> str:
    args = _validate(ComponentDocsInput, component=component, category=category)
    resolved, info = await _resolve(state, args.component, args.category)
    name = info.name if info else args.component

    mdx = await state.docs.fetch_mdx(resolved.category, resolved.slug, "overview")
    if mdx is None:
        raise FlowDocsError(
            code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f'No overview found for "{args.component}".',
            recoverable=False,
        )

    example = await state.docs.fetch_example(resolved.category, resolved.slug, "default")

    parts = [f"# {name} — Overview\n"]
    if info and info.description:
        parts.append(f"> {info.description}\n")
    parts.append(clean_mdx(mdx))
    if example:
        parts.append("\n## Default Example\n")
        parts.append(f"```tsx\n{example}\n```")
    return "\n".join(parts)


async def get_component_develop(
    state: AppState, component: str, category: str | None = None
) -> str:
    args = _validate(ComponentDocsInput, component=component, category=category)
    resolved, info = await _resolve(state, args.component, args.category)
    name = info.name if info else args.component

    mdx = await state.docs.fetch_mdx(resolved.category, resolved.slug, "develop")
    prose = clean_mdx(mdx) if mdx else ""

    data = await state.scraper.scrape_develop(resolved.category, resolved.slug)

    parts = [f"# {name} — Develop\n"]
    if prose:
        parts.append(prose)
        parts.append("")
    parts.append(format_develop_data(data))
    return "\n".join(parts)


async def get_component_guidelines(
    state: AppState, component: str, category: str | None = None
) -> str:
    args = _validate(ComponentDocsInput, component=component, category=category)
    resolved, info = await _resolve(state, args.component, args.category)
    name = info.name if info else args.component

    mdx = await state.docs.fetch_mdx(resolved.category, resolved.slug, "guidelines")
    if mdx is None:
        return f'No guidelines available for "{name}".'

    parts = [f"# {name} — Guidelines\n"]
    if info and info.description:
        parts.append(f"> {info.description}\n")
    parts.append(clean_mdx(mdx))
    return "\n".join(parts)
