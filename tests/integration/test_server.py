"""Server wiring: tool registration, the structured error envelope and shutdown."""

from __future__ import annotations

import json

import httpx
import pytest
import structlog

from flowdocs.config import LoggingSettings, Settings
from flowdocs.errors import ErrorCode, FlowDocsError
from flowdocs.server import _run, configure_logging, create_server
from flowdocs.state import AppState


async def _ok() -> str:
    return "# Button"


async def _fail() -> str:
    raise FlowDocsError(
        code=ErrorCode.BROWSER_LAUNCH_FAILED,
        message="Browser launch failed: missing executable",
        suggestion="Install the Chromium runtime: playwright install chromium",
    )


async def _crash() -> str:
    raise RuntimeError("unexpected")


class TestRun:
    async def test_success_is_plain_text(self) -> None:
        result = await _run(_ok())
        assert result.isError is False
        assert result.content[0].text == "# Button"

    async def test_flowdocs_error_is_structured(self) -> None:
        result = await _run(_fail())
        assert result.isError is True
        payload = json.loads(result.content[0].text)
        assert payload["error"]["code"] == "BROWSER_LAUNCH_FAILED"
        assert payload["error"]["recoverable"] is False
        assert "playwright install chromium" in payload["error"]["suggestion"]

    async def test_unexpected_errors_propagate(self) -> None:
        with pytest.raises(RuntimeError):
            await _run(_crash())


class TestCreateServer:
    async def test_registers_four_tools(self) -> None:
        server = create_server(Settings())
        names = {tool.name for tool in await server.list_tools()}
        assert names == {
            "list_components",
            "get_component_overview",
            "get_component_develop",
            "get_component_guidelines",
        }

    async def test_component_argument_required(self) -> None:
        server = create_server(Settings())
        tools = {tool.name: tool for tool in await server.list_tools()}
        schema = tools["get_component_overview"].inputSchema
        assert schema["required"] == ["component"]
        assert "ctx" not in schema["properties"]


class TestAppStateClose:
    async def test_closes_browser_and_http_client(self) -> None:
        state = AppState.build(Settings(), http_client=httpx.AsyncClient())
        await state.aclose()
        assert state.http_client.is_closed is True
        assert state.browser.running is False

    async def test_http_client_closed_when_browser_close_fails(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        state = AppState.build(Settings(), http_client=httpx.AsyncClient())

        async def _broken_close() -> None:
            raise RuntimeError("browser close failed")

        monkeypatch.setattr(state.browser, "close", _broken_close)
        with pytest.raises(RuntimeError, match="browser close failed"):
            await state.aclose()
        assert state.http_client.is_closed is True


class TestConfigureLogging:
    @pytest.mark.parametrize("fmt", ["json", "text"])
    def test_configures_both_formats(self, fmt: str) -> None:
        try:
            configure_logging(LoggingSettings(level="DEBUG", format=fmt))
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()
