"""Integration fixtures: a fully wired AppState against a mocked GitHub.

The mocked repository holds two components, ``actions/button`` (complete
documentation) and ``forms/text-field`` (index only).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from flowdocs.config import Settings
from flowdocs.state import AppState
from tests.helpers import CONTENT_BASE, TREE_URL, frontmatter, raw_url, tree_payload

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from flowdocs.cache import Cache

BUTTON_OVERVIEW = """---
title: Overview
---
import { Button } from "@mittwald/flow-react-components";

# Playground

<LiveCodeEditor example="default" />

Buttons start actions.
"""

BUTTON_GUIDELINES = """<DoAndDont>
<Do>
Use one primary button per view.
</Do>
</DoAndDont>
"""

BUTTON_DEVELOP = """# Usage

Import the component from the package root.

<PropertiesTables />
"""

BUTTON_EXAMPLE = "<Button>Click</Button>"


@pytest.fixture()
def github() -> Iterator[respx.MockRouter]:
    with respx.mock(assert_all_called=False) as router:
        router.get(TREE_URL).mock(
            return_value=httpx.Response(
                200,
                json=tree_payload(
                    f"{CONTENT_BASE}/actions/button/index.mdx",
                    f"{CONTENT_BASE}/actions/button/overview.mdx",
                    f"{CONTENT_BASE}/forms/text-field/index.mdx",
                    "package.json",
                ),
            )
        )
        router.get(raw_url("actions/button/index.mdx")).mock(
            return_value=httpx.Response(200, text=frontmatter("Button", "Triggers an action."))
        )
        router.get(raw_url("forms/text-field/index.mdx")).mock(
            return_value=httpx.Response(200, text=frontmatter("TextField", "Single-line input."))
        )
        for path, body in {
            "actions/button/overview.mdx": BUTTON_OVERVIEW,
            "actions/button/guidelines.mdx": BUTTON_GUIDELINES,
            "actions/button/develop.mdx": BUTTON_DEVELOP,
            "actions/button/examples/default.tsx": BUTTON_EXAMPLE,
        }.items():
            router.get(raw_url(path)).mock(return_value=httpx.Response(200, text=body))
        for path in (
            "forms/text-field/overview.mdx",
            "forms/text-field/guidelines.mdx",
            "forms/text-field/develop.mdx",
            "forms/text-field/examples/default.tsx",
        ):
            router.get(raw_url(path)).mock(return_value=httpx.Response(404))
        yield router


@pytest.fixture()
async def app_state(cache: Cache) -> AsyncIterator[AppState]:
    """AppState wired with the test cache and a plain HTTP client."""
    async with httpx.AsyncClient() as client:
        yield AppState.build(Settings(), http_client=client, cache=cache)
