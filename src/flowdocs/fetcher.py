"""GitHub access: recursive tree listing and raw file fetches.

404 on a raw file is a normal outcome (``None``); every other failure becomes
``FlowDocsError(FETCH_FAILED)``. No retries are performed here.
"""

from __future__ import annotations

import httpx
import structlog

from flowdocs.config import SourceSettings
from flowdocs.errors import ErrorCode, FlowDocsError
from flowdocs.models.registry import TreeEntry, TreeListing

log = structlog.get_logger()


def build_http_client(settings: SourceSettings | None = None) -> httpx.AsyncClient:
    """Create the shared client used for all GitHub requests."""
    settings = settings or SourceSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


class GitHubSource:
    """Read-only view of the documentation repository on one branch."""

    def __init__(self, client: httpx.AsyncClient, settings: SourceSettings | None = None) -> None:
        self._client = client
        self._settings = settings or SourceSettings()

    @property
    def tree_url(self) -> str:
        s = self._settings
        return f"{s.api_url}/repos/{s.repo}/git/trees/{s.branch}?recursive=1"

    def raw_url(self, path: str) -> str:
        s = self._settings
        return f"{s.raw_url}/{s.repo}/{s.branch}/{path}"

    async def fetch_tree(self) -> list[TreeEntry]:
        """List every path on the configured branch.

        A body that does not match ``TreeListing`` raises
        ``pydantic.ValidationError``.
        """
        url = self.tree_url
        response = await self._get(url, headers={"Accept": "application/vnd.github.v3+json"})
        if not response.is_success:
            raise FlowDocsError(
                code=ErrorCode.FETCH_FAILED,
                message=(
                    f"GitHub API error: {response.status_code} {response.reason_phrase} ({url})"
                ),
                suggestion="GitHub may be rate limiting or unavailable. Try again later.",
                recoverable=True,
            )

        listing = TreeListing.model_validate_json(response.content)
        if listing.truncated:
            log.warning("tree_truncated", url=url)
        return listing.tree

    async def fetch_raw(self, path: str) -> str | None:
        """Fetch a file's raw text. Returns ``None`` when the file does not exist."""
        url = self.raw_url(path)
        response = await self._get(url)
        if response.status_code == 404:
            log.debug("raw_not_found", url=url)
            return None
        if not response.is_success:
            raise FlowDocsError(
                code=ErrorCode.FETCH_FAILED,
                message=(
                    f"GitHub raw fetch error: {response.status_code} "
                    f"{response.reason_phrase} ({url})"
                ),
                recoverable=True,
            )
        return response.text

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        try:
            return await self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise FlowDocsError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="Check network connectivity and try again.",
                recoverable=True,
            ) from exc
