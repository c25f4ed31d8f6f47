"""Local Provider — filters stored in the service's own database.

Invariants:
    - page defaults to 0, page_size to 10; both must be integers (page_size >= 1)
    - search matches filter names case-insensitively as a literal substring
      (% and _ are not wildcards)
    - order is "<column> [asc|desc]" over name/created_at/updated_at;
      anything else falls back to "updated_at desc"
    - Filter ids must parse as UUIDs; unknown ids raise FilterNotFoundError
    - save updates an existing id, otherwise inserts (keeping a supplied id)
    - The token argument of save is accepted but unused: local storage has no remote auth

Design Decisions:
    - Payloads serialized through the Pydantic schemas: same JSON shape the
      remote content service returns, clients need one parser
    - Order sanitized against a column whitelist: the raw query string never
      reaches SQL
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import asc, desc, func, select
from starlette.requests import Request

from app.core.errors import ErrorContext, FilterNotFoundError, InvalidFilterQueryError
from app.infrastructure.credentials import extract_request_token
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.github_client import GitHubContentClient
from app.models.meshery_filter import MesheryFilterRecord
from app.schemas.meshery_filter import FilterPage, MesheryFilter

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10

_ORDERABLE_COLUMNS = {
    "name": MesheryFilterRecord.name,
    "created_at": MesheryFilterRecord.created_at,
    "updated_at": MesheryFilterRecord.updated_at,
}


def parse_page_number(name: str, raw: str, default: int, minimum: int = 0) -> int:
    """Parse an optional integer query parameter."""
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidFilterQueryError(f"invalid {name} '{raw}': not an integer", name)
    if value < minimum:
        raise InvalidFilterQueryError(f"invalid {name} '{raw}': must be >= {minimum}", name)
    return value


def sanitize_order(order: str):
    """Translate an order string into a SQLAlchemy ordering clause."""
    parts = order.split()
    column = _ORDERABLE_COLUMNS.get(parts[0]) if parts else None
    if column is None or len(parts) > 2:
        return desc(MesheryFilterRecord.updated_at)
    if len(parts) == 2 and parts[1].lower() == "desc":
        return desc(column)
    return asc(column)


def parse_filter_id(filter_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(filter_id)
    except ValueError:
        raise InvalidFilterQueryError(
            f"invalid filter id '{filter_id}'", "id",
            ErrorContext(filter_id=filter_id, provider=LocalProvider.name),
        )


def _to_filter(record: MesheryFilterRecord) -> MesheryFilter:
    return MesheryFilter.model_validate(record, from_attributes=True)


class LocalProvider:
    """Provider backed by the local SQL database and public GitHub."""

    name = "local"

    def __init__(self, db: DatabaseSessionManager, github: GitHubContentClient):
        self._db = db
        self._github = github

    async def get_meshery_filters(
        self, request: Request, page: str, page_size: str, search: str, order: str,
    ) -> bytes:
        page_no = parse_page_number("page", page, DEFAULT_PAGE)
        size = parse_page_number("page_size", page_size, DEFAULT_PAGE_SIZE, minimum=1)

        query = select(MesheryFilterRecord)
        count_query = select(func.count()).select_from(MesheryFilterRecord)
        if search:
            matches = MesheryFilterRecord.name.icontains(search, autoescape=True)
            query = query.where(matches)
            count_query = count_query.where(matches)
        query = (
            query.order_by(sanitize_order(order))
            .offset(page_no * size)
            .limit(size)
        )

        async with self._db.session() as db:
            total = (await db.execute(count_query)).scalar_one()
            records = (await db.execute(query)).scalars().all()

        return FilterPage(
            page=page_no,
            page_size=size,
            total_count=total,
            filters=[_to_filter(r) for r in records],
        ).model_dump_json().encode()

    async def get_meshery_filter(self, request: Request, filter_id: str) -> bytes:
        uid = parse_filter_id(filter_id)
        async with self._db.session() as db:
            record = await db.get(MesheryFilterRecord, uid)
        if record is None:
            raise FilterNotFoundError(filter_id)
        return _to_filter(record).model_dump_json().encode()

    async def delete_meshery_filter(self, request: Request, filter_id: str) -> bytes:
        uid = parse_filter_id(filter_id)
        async with self._db.session() as db:
            record = await db.get(MesheryFilterRecord, uid)
            if record is None:
                raise FilterNotFoundError(filter_id)
            deleted = _to_filter(record)
            await db.delete(record)
            await db.commit()
        logger.info(
            f"Filter {filter_id} removed from local store",
            extra={"filter_id": filter_id, "provider": self.name},
        )
        return deleted.model_dump_json().encode()

    async def save_meshery_filter(
        self, token: str, meshery_filter: MesheryFilter,
    ) -> bytes:
        now = datetime.now(timezone.utc)
        async with self._db.session() as db:
            record = None
            if meshery_filter.id is not None:
                record = await db.get(MesheryFilterRecord, meshery_filter.id)
            if record is None:
                record = MesheryFilterRecord(
                    id=meshery_filter.id or uuid.uuid4(), created_at=now,
                )
                db.add(record)
            record.name = meshery_filter.name
            record.filter_file = meshery_filter.filter_file
            record.location = meshery_filter.location
            record.visibility = meshery_filter.visibility
            record.catalog_data = meshery_filter.catalog_data
            record.user_id = meshery_filter.user_id
            record.updated_at = now
            await db.commit()
            await db.refresh(record)
            saved = _to_filter(record)
        logger.info(
            f"Filter {saved.id} saved to local store",
            extra={"filter_id": str(saved.id), "provider": self.name},
        )
        return saved.model_dump_json().encode()

    async def import_filter_file_github(
        self, request: Request, owner: str, repo: str, path: str,
    ) -> bytes:
        return await self._github.fetch_file(owner, repo, path)

    async def get_provider_token(self, request: Request) -> str:
        return extract_request_token(request) or ""

    async def close(self) -> None:
        await self._github.aclose()
