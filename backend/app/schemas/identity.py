"""Caller Context Schemas — opaque identity and preference values threaded through handlers.

Invariants:
    - The filter dispatcher never reads these fields; it only forwards the objects
    - Preference is per browser session, User is per request

Design Decisions:
    - Pydantic models over dicts: dependency functions return typed values,
      tests can construct them directly
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class User(BaseModel):
    """Acting caller, resolved from request headers or the configured local user."""
    user_id: str
    username: str
    provider: str = "local"


class Preference(BaseModel):
    """Per-session UI/usage preferences."""
    session_id: str | None = None
    anonymous_usage_stats: bool = True
    anonymous_perf_results: bool = True
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
