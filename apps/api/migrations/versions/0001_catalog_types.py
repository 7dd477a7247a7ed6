"""catalog types (races/character/fruit/organization/haki types) + ships

Revision ID: 0001_catalog_types
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_catalog_types"
down_revision = None
branch_labels = None
depends_on = None

TYPE_TABLES = ("races", "character_types", "devil_fruit_types", "organization_types", "haki_types")


def _timestamps():
    return [
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    ]


def upgrade() -> None:
    for table in TYPE_TABLES:
        extra = [sa.Column("color", sa.String(50), nullable=True)] if table == "haki_types" else []
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(50), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            *extra,
            *_timestamps(),
        )
        op.create_index(f"ix_{table}_name", table, ["name"], unique=True)

    op.create_table(
        "ships",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default="active"),
        sa.Column("image_url", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_ships_name", "ships", ["name"], unique=True)
    op.create_index("ix_ships_status", "ships", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_ships_status", table_name="ships")
    op.drop_index("ix_ships_name", table_name="ships")
    op.drop_table("ships")
    for table in reversed(TYPE_TABLES):
        op.drop_index(f"ix_{table}_name", table_name=table)
        op.drop_table(table)
