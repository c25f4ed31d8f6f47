"""Filter ORM — persists filter artifacts for the local provider.

Invariants:
    - id is UUID primary key (client-supplied ids are kept on insert)
    - name and filter_file are non-nullable text (empty string allowed)
    - updated_at moves on every save, created_at never changes

Design Decisions:
    - JSON columns for location/catalog_data: opaque to the service, stored as-is
    - Generic Uuid type: same model works on PostgreSQL and SQLite (tests)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MesheryFilterRecord(Base):
    """A stored filter artifact."""
    __tablename__ = "meshery_filters"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    filter_file: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default="private",
    )
    catalog_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )
