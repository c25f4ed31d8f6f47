"""ORM Models — SQLAlchemy declarative models used by the local provider.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs (ADR: standard SQLAlchemy pattern)
"""

from app.models.meshery_filter import MesheryFilterRecord  # noqa: F401
