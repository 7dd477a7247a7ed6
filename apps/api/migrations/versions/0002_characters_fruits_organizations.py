"""characters, devil fruits, organizations

Revision ID: 0002_characters_fruits_organizations
Revises: 0001_catalog_types
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_characters_fruits_organizations"
down_revision = "0001_catalog_types"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("alias", sa.String(100), nullable=True),
        sa.Column("japanese_name", sa.String(100), nullable=True),
        sa.Column("race_id", sa.Integer(), sa.ForeignKey("races.id"), nullable=True),
        sa.Column("character_type_id", sa.Integer(), sa.ForeignKey("character_types.id"), nullable=True),
        sa.Column("bounty", sa.BigInteger(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("is_alive", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("origin", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("abilities", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(255), nullable=True),
        sa.Column("first_appearance", sa.String(100), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_characters_name", "characters", ["name"], unique=True)
    op.create_index("ix_characters_race_id", "characters", ["race_id"], unique=False)
    op.create_index("ix_characters_character_type_id", "characters", ["character_type_id"], unique=False)
    op.create_index("ix_characters_bounty", "characters", ["bounty"], unique=False)

    op.create_table(
        "devil_fruits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("japanese_name", sa.String(100), nullable=True),
        sa.Column("type_id", sa.Integer(), sa.ForeignKey("devil_fruit_types.id"), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("abilities", sa.Text(), nullable=True),
        sa.Column("weaknesses", sa.Text(), nullable=True),
        sa.Column("current_user_id", sa.Integer(), sa.ForeignKey("characters.id"), nullable=True),
        sa.Column("previous_users", sa.JSON(), nullable=True),
        sa.Column("image_url", sa.String(255), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_devil_fruits_name", "devil_fruits", ["name"], unique=True)
    op.create_index("ix_devil_fruits_type_id", "devil_fruits", ["type_id"], unique=False)
    op.create_index("ix_devil_fruits_current_user_id", "devil_fruits", ["current_user_id"], unique=False)

    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("organization_type_id", sa.Integer(), sa.ForeignKey("organization_types.id"), nullable=False),
        sa.Column("leader_id", sa.Integer(), sa.ForeignKey("characters.id"), nullable=True),
        sa.Column("ship_id", sa.Integer(), sa.ForeignKey("ships.id"), nullable=True),
        sa.Column("base_location", sa.String(100), nullable=True),
        sa.Column("total_bounty", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("status", sa.Text(), nullable=False, server_default="active"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_organizations_name", "organizations", ["name"], unique=True)
    op.create_index("ix_organizations_organization_type_id", "organizations", ["organization_type_id"], unique=False)
    op.create_index("ix_organizations_leader_id", "organizations", ["leader_id"], unique=False)
    op.create_index("ix_organizations_ship_id", "organizations", ["ship_id"], unique=False)
    op.create_index("ix_organizations_status", "organizations", ["status"], unique=False)


def downgrade() -> None:
    op.drop_table("organizations")
    op.drop_table("devil_fruits")
    op.drop_table("characters")
