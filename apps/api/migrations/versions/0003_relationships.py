"""character join rows: organizations, haki, character types, devil fruits

Revision ID: 0003_relationships
Revises: 0002_characters_fruits_organizations
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0003_relationships"
down_revision = "0002_characters_fruits_organizations"
branch_labels = None
depends_on = None

# table -> (target column, target table, unique constraint name, extra columns)
LINKS = {
    "character_organizations": (
        "organization_id",
        "organizations",
        "uq_character_organization",
        lambda: [
            sa.Column("role", sa.String(100), nullable=True),
            sa.Column("joined_date", sa.String(50), nullable=True),
            sa.Column("left_date", sa.String(50), nullable=True),
            sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.true()),
        ],
    ),
    "character_haki": (
        "haki_type_id",
        "haki_types",
        "uq_character_haki",
        lambda: [
            sa.Column("mastery_level", sa.Text(), nullable=False, server_default="basic"),
            sa.Column("awakened", sa.Boolean(), nullable=False, server_default=sa.false()),
        ],
    ),
    "character_character_types": (
        "character_type_id",
        "character_types",
        "uq_character_character_type",
        lambda: [sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.true())],
    ),
    "character_devil_fruits": (
        "devil_fruit_id",
        "devil_fruits",
        "uq_character_devil_fruit",
        lambda: [sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.true())],
    ),
}


def upgrade() -> None:
    for table, (target_col, target_table, uq_name, extra) in LINKS.items():
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("character_id", sa.Integer(), sa.ForeignKey("characters.id", ondelete="CASCADE"), nullable=False),
            sa.Column(target_col, sa.Integer(), sa.ForeignKey(f"{target_table}.id", ondelete="CASCADE"), nullable=False),
            *extra(),
            sa.Column("created_at", sa.Text(), nullable=False),
            sa.Column("updated_at", sa.Text(), nullable=False),
            sa.UniqueConstraint("character_id", target_col, name=uq_name),
        )
        op.create_index(f"ix_{table}_character_id", table, ["character_id"], unique=False)
        op.create_index(f"ix_{table}_{target_col}", table, [target_col], unique=False)

    op.create_index("ix_character_organizations_is_current", "character_organizations", ["is_current"], unique=False)


def downgrade() -> None:
    for table in reversed(list(LINKS)):
        op.drop_table(table)
