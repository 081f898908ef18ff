"""Test helpers: GitHub URLs for the default source settings and a manual clock."""

from __future__ import annotations

from flowdocs.config import SourceSettings

SOURCE = SourceSettings()
CONTENT_BASE = SOURCE.content_base
TREE_URL = f"{SOURCE.api_url}/repos/{SOURCE.repo}/git/trees/{SOURCE.branch}?recursive=1"
RAW_BASE = f"{SOURCE.raw_url}/{SOURCE.repo}/{SOURCE.branch}"


def raw_url(path: str) -> str:
    return f"{RAW_BASE}/{CONTENT_BASE}/{path}"


def tree_payload(*paths: str, truncated: bool = False) -> dict:
    return {
        "sha": "abc123",
        "truncated": truncated,
        "tree": [{"path": p, "type": "blob", "mode": "100644"} for p in paths],
    }


def frontmatter(component: str, description: str) -> str:
    return f"---\ncomponent: {component}\ndescription: {description}\n---\n\n# {component}\n"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
