"""GitHub Content Client — fetches raw repository files for filter import.

Invariants:
    - Only the raw file bytes are returned; nothing is parsed or persisted here
    - Any non-200 answer or transport failure becomes RemoteRepositoryError
    - The underlying httpx.AsyncClient is owned by this object and closed via aclose()

Design Decisions:
    - raw.githubusercontent.com over the REST contents API: no base64 decoding,
      no rate-limited token needed for public repositories
    - Client injectable: tests pass an httpx.AsyncClient built on MockTransport
"""

import logging
from urllib.parse import quote

import httpx

from app.core.errors import ErrorContext, RemoteRepositoryError

logger = logging.getLogger(__name__)


def build_github_http_client(timeout_seconds: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers={"Accept": "application/octet-stream, text/plain, */*"},
    )


class GitHubContentClient:
    """Reads files from public GitHub repositories by owner/repo/path."""

    def __init__(
        self,
        base_url: str,
        branch: str,
        http_client: httpx.AsyncClient,
    ):
        self._base_url = base_url.rstrip("/")
        self._branch = branch
        self._http = http_client

    def file_url(self, owner: str, repo: str, path: str) -> str:
        return "/".join((
            self._base_url,
            quote(owner, safe=""),
            quote(repo, safe=""),
            quote(self._branch, safe=""),
            quote(path.lstrip("/"), safe="/"),
        ))

    async def fetch_file(self, owner: str, repo: str, path: str) -> bytes:
        """Return the raw bytes of `path` on the default branch of owner/repo."""
        url = self.file_url(owner, repo, path)
        ctx = ErrorContext(operation="import_filter_file_github", debug_info={"url": url})
        try:
            res = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.error(f"GitHub fetch failed for {url}: {e}")
            raise RemoteRepositoryError(
                f"failed to fetch {owner}/{repo}/{path}: {e}", context=ctx,
            ) from e

        if res.status_code != httpx.codes.OK:
            raise RemoteRepositoryError(
                f"failed to fetch {owner}/{repo}/{path}: "
                f"github responded with status {res.status_code}",
                status_code=res.status_code, context=ctx,
            )
        return res.content

    async def aclose(self) -> None:
        await self._http.aclose()
