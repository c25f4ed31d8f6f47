"""Provider Protocol — the operation contract between the filter dispatcher and its backend.

Invariants:
    - The dispatcher depends only on Provider, never on a concrete backend
    - Every operation returns serialized payload bytes (or a token string)
    - Failures are raised, never returned; the dispatcher decides how they surface

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
      (ADR: ExMA anti-pattern)
    - Async methods: implementations do IO (database, HTTP) on the event loop
    - request passed through untouched so providers can read cookies/headers
      for credentials without the dispatcher knowing which ones
"""

from typing import Protocol

from starlette.requests import Request

from app.schemas.meshery_filter import MesheryFilter


class Provider(Protocol):
    """Backend capability for filter persistence, repository import and tokens."""

    async def get_meshery_filters(
        self, request: Request, page: str, page_size: str, search: str, order: str,
    ) -> bytes: ...

    async def get_meshery_filter(self, request: Request, filter_id: str) -> bytes: ...

    async def delete_meshery_filter(self, request: Request, filter_id: str) -> bytes: ...

    async def save_meshery_filter(
        self, token: str, meshery_filter: MesheryFilter,
    ) -> bytes: ...

    async def import_filter_file_github(
        self, request: Request, owner: str, repo: str, path: str,
    ) -> bytes: ...

    async def get_provider_token(self, request: Request) -> str: ...
