"""MCP server entry point.

Run with ``flowdocs`` or ``python -m flowdocs.server``. Logs go to stderr so
the stdio transport keeps stdout for protocol messages.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

from flowdocs import tools
from flowdocs.config import LoggingSettings, Settings
from flowdocs.errors import FlowDocsError
from flowdocs.state import AppState

log = structlog.get_logger()

_COMPONENT_HELP = "Component slug (e.g. 'button', 'text-field')."
_CATEGORY_HELP = "Category slug; auto-detected if omitted."


def configure_logging(settings: LoggingSettings) -> None:
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.level]
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


async def _run(call: Awaitable[str]) -> CallToolResult:
    try:
        text = await call
    except FlowDocsError as exc:
        log.info("tool_error", code=exc.code.value, message=exc.message)
        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps(exc.to_payload()))],
            isError=True,
        )
    return CallToolResult(content=[TextContent(type="text", text=text)])


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


def create_server(settings: Settings) -> FastMCP:
    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[AppState]:
        state = AppState.build(settings)
        try:
            yield state
        finally:
            await state.aclose()
            log.info("server_stopped")

    mcp = FastMCP(
        "flowdocs",
        lifespan=lifespan,
        host=settings.server.host,
        port=settings.server.port,
    )

    @mcp.tool(
        description=(
            "List all components in the mittwald flow component library, "
            "optionally filtered by category."
        ),
        structured_output=False,
    )
    async def list_components(ctx: Context, category: str | None = None) -> CallToolResult:
        """category: Filter by category slug (e.g. 'actions', 'form-controls')."""
        return await _run(tools.list_components(_state(ctx), category))

    @mcp.tool(
        description=(
            "Get the overview documentation for a mittwald flow component, "
            "including playground examples and usage information. "
            f"component: {_COMPONENT_HELP} category: {_CATEGORY_HELP}"
        ),
        structured_output=False,
    )
    async def get_component_overview(
        ctx: Context, component: str, category: str | None = None
    ) -> CallToolResult:
        return await _run(tools.get_component_overview(_state(ctx), component, category))

    @mcp.tool(
        description=(
            "Get the development documentation for a mittwald flow component, "
            "including property tables, events, and accessibility props. "
            f"component: {_COMPONENT_HELP} category: {_CATEGORY_HELP}"
        ),
        structured_output=False,
    )
    async def get_component_develop(
        ctx: Context, component: str, category: str | None = None
    ) -> CallToolResult:
        return await _run(tools.get_component_develop(_state(ctx), component, category))

    @mcp.tool(
        description=(
            "Get the usage guidelines for a mittwald flow component, "
            "including best practices, dos and don'ts. "
            f"component: {_COMPONENT_HELP} category: {_CATEGORY_HELP}"
        ),
        structured_output=False,
    )
    async def get_component_guidelines(
        ctx: Context, component: str, category: str | None = None
    ) -> CallToolResult:
        return await _run(tools.get_component_guidelines(_state(ctx), component, category))

    return mcp


def main() -> None:
    settings = Settings()
    configure_logging(settings.logging)
    log.info("server_starting", transport=settings.server.transport)
    server = create_server(settings)
    server.run(transport="streamable-http" if settings.server.transport == "http" else "stdio")


if __name__ == "__main__":
    main()
