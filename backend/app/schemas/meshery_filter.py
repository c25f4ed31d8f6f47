"""Filter Schemas — Pydantic shapes for filter request bodies and provider payloads.

Invariants:
    - MesheryFilter is the only shape a save request body may decode into
    - A body that is not a JSON object, or has mistyped fields, fails validation
    - Unknown keys are ignored (forward compatible with newer clients)
    - Field values are only type-checked: visibility is any string, the provider
      decides which values it accepts
    - id absent => provider creates; id present => provider updates or inserts with that id

Design Decisions:
    - Every field optional: the dispatcher only checks structure, providers own
      business validation (ADR: thin translation layer)
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MesheryFilter(BaseModel):
    """A named filter artifact (WASM filter source or config) managed by a provider."""
    model_config = ConfigDict(extra="ignore")

    id: UUID | None = None
    name: str = ""
    filter_file: str = ""
    location: dict[str, Any] | None = None
    visibility: str = "private"
    catalog_data: dict[str, Any] | None = None
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FilterPage(BaseModel):
    """Paginated listing returned by providers for GET /api/filter."""
    page: int = Field(ge=0)
    page_size: int = Field(ge=0)
    total_count: int = Field(ge=0)
    filters: list[MesheryFilter]
