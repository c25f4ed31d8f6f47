"""Filters table — storage for the local provider.

Revision ID: 001_meshery_filters
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_meshery_filters"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "meshery_filters",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("filter_file", sa.Text, nullable=False, server_default=""),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column(
            "visibility", sa.String(20), nullable=False, server_default="private",
        ),
        sa.Column("catalog_data", sa.JSON, nullable=True),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_meshery_filters_name", "meshery_filters", ["name"])
    op.create_index("ix_meshery_filters_updated_at", "meshery_filters", ["updated_at"])


def downgrade() -> None:
    op.drop_index("ix_meshery_filters_updated_at", table_name="meshery_filters")
    op.drop_index("ix_meshery_filters_name", table_name="meshery_filters")
    op.drop_table("meshery_filters")
