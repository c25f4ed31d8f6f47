"""Remote Provider — forwards filter operations to a remote content service.

Invariants:
    - Every call carries the caller's bearer token; no token -> TokenUnavailableError
    - Response bodies are returned as received (already serialized JSON)
    - Any non-2xx answer -> RemoteProviderError("<status>: <body>")
    - Transport failures -> RemoteProviderError, never a bare httpx exception

Design Decisions:
    - One shared httpx.AsyncClient for the process lifetime (connection reuse),
      closed by the application lifespan
    - Query parameters forwarded verbatim: the remote service owns validation
    - Filter ids percent-encoded as a single path segment
"""

import logging
from urllib.parse import quote

import httpx
from starlette.requests import Request

from app.core.errors import ErrorContext, RemoteProviderError, TokenUnavailableError
from app.infrastructure.credentials import extract_request_token
from app.infrastructure.github_client import GitHubContentClient
from app.schemas.meshery_filter import MesheryFilter

logger = logging.getLogger(__name__)

FILTERS_PATH = "/api/content/filters"


def _filter_path(filter_id: str) -> str:
    return f"{FILTERS_PATH}/{quote(filter_id, safe='')}"


def build_remote_http_client(base_url: str, timeout_seconds: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout_seconds),
        headers={"Accept": "application/json"},
    )


class RemoteProvider:
    """Provider backed by a remote content service reachable over HTTP."""

    name = "remote"

    def __init__(self, http_client: httpx.AsyncClient, github: GitHubContentClient):
        self._http = http_client
        self._github = github

    async def _send(
        self, operation: str, method: str, url: str, token: str, **kwargs,
    ) -> bytes:
        ctx = ErrorContext(operation=operation, provider=self.name)
        try:
            res = await self._http.request(
                method, url, headers={"Authorization": f"Bearer {token}"}, **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error(
                f"Remote provider {operation} transport failure: {e}",
                extra={"operation": operation, "provider": self.name},
            )
            raise RemoteProviderError(f"remote provider unreachable: {e}", context=ctx) from e

        if not res.is_success:
            raise RemoteProviderError(
                f"{res.status_code}: {res.text.strip()}",
                status_code=res.status_code, context=ctx,
            )
        return res.content

    async def _token(self, request: Request) -> str:
        token = extract_request_token(request)
        if not token:
            raise TokenUnavailableError(
                context=ErrorContext(operation="get_provider_token", provider=self.name),
            )
        return token

    async def get_meshery_filters(
        self, request: Request, page: str, page_size: str, search: str, order: str,
    ) -> bytes:
        token = await self._token(request)
        params = {
            key: value
            for key, value in (
                ("page", page), ("page_size", page_size),
                ("search", search), ("order", order),
            )
            if value
        }
        return await self._send(
            "get_meshery_filters", "GET", FILTERS_PATH, token, params=params,
        )

    async def get_meshery_filter(self, request: Request, filter_id: str) -> bytes:
        token = await self._token(request)
        return await self._send(
            "get_meshery_filter", "GET", _filter_path(filter_id), token,
        )

    async def delete_meshery_filter(self, request: Request, filter_id: str) -> bytes:
        token = await self._token(request)
        return await self._send(
            "delete_meshery_filter", "DELETE", _filter_path(filter_id), token,
        )

    async def save_meshery_filter(
        self, token: str, meshery_filter: MesheryFilter,
    ) -> bytes:
        return await self._send(
            "save_meshery_filter", "POST", FILTERS_PATH, token,
            json={"meshery_filter": meshery_filter.model_dump(mode="json", exclude_none=True)},
        )

    async def import_filter_file_github(
        self, request: Request, owner: str, repo: str, path: str,
    ) -> bytes:
        return await self._github.fetch_file(owner, repo, path)

    async def get_provider_token(self, request: Request) -> str:
        return await self._token(request)

    async def close(self) -> None:
        await self._http.aclose()
        await self._github.aclose()
