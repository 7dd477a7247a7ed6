"""seed base catalog types

Revision ID: 0004_seed_catalog
Revises: 0003_relationships
Create Date: 2026-10-19
"""
from __future__ import annotations

from datetime import datetime, timezone

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0004_seed_catalog"
down_revision = "0003_relationships"
branch_labels = None
depends_on = None

SEED = {
    "devil_fruit_types": [
        ("Paramecia", "Grants superhuman abilities, most common type"),
        ("Zoan", "Allows transformation into animals or hybrid forms"),
        ("Logia", "Grants power to transform into natural elements"),
    ],
    "races": [
        ("Human", "Regular humans, the most common race"),
        ("Fishman", "Fish-human hybrids with superior strength underwater"),
        ("Mink", "Animal-human hybrids from Zou with electro abilities"),
        ("Giant", "Enormous humanoids with incredible strength"),
        ("Dwarf", "Tiny people with superhuman speed from Tontatta Kingdom"),
        ("Skeleton", "Undead brought back by Devil Fruit power"),
        ("Lunarian", "Ancient race with wings and ability to create fire"),
    ],
    "character_types": [
        ("Pirate", "Someone who sails under a pirate flag"),
        ("Captain", "Leader of a pirate crew or ship"),
        ("Marine", "Member of the World Government military"),
        ("Admiral", "Highest rank in Marine forces"),
        ("Yonko", "One of the Four Emperors ruling the New World"),
        ("Revolutionary", "Member of Revolutionary Army"),
        ("Swordsman", "Master of sword techniques"),
        ("Navigator", "Expert in navigation and weather"),
        ("Civilian", "Regular citizen not affiliated with pirates or marines"),
    ],
    "organization_types": [
        ("Pirate Crew", "Group of pirates sailing together under one flag"),
        ("Marine Division", "Military unit of World Government Marines"),
        ("Revolutionary Army", "Organization opposing the World Government"),
        ("Cipher Pol", "Secret intelligence agency of World Government"),
        ("Yonko Crew", "Crew led by one of the Four Emperors"),
    ],
}

HAKI = [
    ("Observation Haki", "Sense the presence and emotions of others, predict movements", "Red"),
    ("Armament Haki", "Spiritual armor for offense and defense, can touch Logia users", "Black"),
    ("Conqueror Haki", "Exert willpower over others, knock out the weak-willed", "Dark Red/Black"),
]


def _now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _table(name: str, with_color: bool = False) -> sa.Table:
    cols = [
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
        sa.column("created_at", sa.Text),
        sa.column("updated_at", sa.Text),
    ]
    if with_color:
        cols.append(sa.column("color", sa.String))
    return sa.table(name, *cols)


def upgrade() -> None:
    now = _now()
    for table, rows in SEED.items():
        op.bulk_insert(
            _table(table),
            [{"name": n, "description": d, "created_at": now, "updated_at": now} for n, d in rows],
        )
    op.bulk_insert(
        _table("haki_types", with_color=True),
        [{"name": n, "description": d, "color": c, "created_at": now, "updated_at": now} for n, d, c in HAKI],
    )


def downgrade() -> None:
    for table, rows in list(SEED.items()) + [("haki_types", HAKI)]:
        t = sa.table(table, sa.column("name", sa.String))
        op.execute(t.delete().where(t.c.name.in_([r[0] for r in rows])))
