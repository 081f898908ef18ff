"""Shared fixtures: a sample component registry and a cache on a manual clock."""

from __future__ import annotations

import pytest

from flowdocs.cache import Cache
from flowdocs.models.registry import ComponentInfo, ComponentRegistry
from flowdocs.registry import build_registry
from tests.helpers import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> Cache:
    return Cache(clock=clock)


@pytest.fixture()
def sample_components() -> list[ComponentInfo]:
    return [
        ComponentInfo(
            slug="button",
            name="Button",
            description="Triggers an action.",
            category="actions",
        ),
        ComponentInfo(
            slug="button-group",
            name="ButtonGroup",
            description="Groups related buttons.",
            category="actions",
        ),
        ComponentInfo(
            slug="text-field",
            name="TextField",
            description="Single-line text input.",
            category="form-controls",
        ),
    ]


@pytest.fixture()
def sample_registry(sample_components: list[ComponentInfo]) -> ComponentRegistry:
    return build_registry(sample_components)
