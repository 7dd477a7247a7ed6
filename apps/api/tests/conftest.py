"""Shared fixtures: in-memory SQLite engine, seeded catalog, app client, auth headers."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any, Dict, List

import bcrypt
import pytest

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "gomu-gomu"

# settings are read once and cached; set the environment before importing the app
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-please-change"
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, create_engine  # noqa: E402

from app.core import db  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.repository import Repository  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.main import create_app  # noqa: E402
from app.modules.catalog_types.models import CharacterType, FruitType, HakiType, OrganizationType, Race  # noqa: E402
from app.modules.characters.models import (  # noqa: E402
    Character,
    CharacterDevilFruit,
    CharacterHaki,
    CharacterOrganization,
)
from app.modules.devil_fruits.models import DevilFruit  # noqa: E402
from app.modules.organizations.models import Organization  # noqa: E402
from app.modules.ships.models import Ship  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    db.enable_sqlite_foreign_keys(eng)
    db.init_schema(eng)
    db.set_engine(eng)
    yield eng
    db.set_engine(None)
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


def _add(session: Session, model, **values: Any):
    return Repository(session, model).create(values)


@pytest.fixture
def seeded(session) -> SimpleNamespace:
    """A small, fixed catalog. Ids are assigned in insertion order starting at 1."""
    logia = _add(session, FruitType, name="Logia", description="Elemental transformation")
    zoan = _add(session, FruitType, name="Zoan", description="Animal transformation")

    human = _add(session, Race, name="Human", description="Regular humans")
    _add(session, Race, name="Fishman", description="Fish-human hybrids")

    pirate = _add(session, CharacterType, name="Pirate")
    marine = _add(session, CharacterType, name="Marine")

    crew = _add(session, OrganizationType, name="Pirate Crew")
    _add(session, OrganizationType, name="Marine Division")

    _add(session, HakiType, name="Observation Haki", color="Red")
    armament = _add(session, HakiType, name="Armament Haki", color="Black")
    conqueror = _add(session, HakiType, name="Conqueror Haki", color="Dark Red/Black")

    sunny = _add(session, Ship, name="Thousand Sunny", status="active")
    merry = _add(session, Ship, name="Going Merry", status="destroyed")

    luffy = _add(
        session,
        Character,
        name="Monkey D. Luffy",
        alias="Straw Hat",
        race_id=human.id,
        character_type_id=pirate.id,
        bounty=3_000_000_000,
        age=19,
        height=174,
        is_alive=True,
    )
    zoro = _add(
        session,
        Character,
        name="Roronoa Zoro",
        alias="Pirate Hunter",
        race_id=human.id,
        character_type_id=pirate.id,
        bounty=1_111_000_000,
        age=21,
        is_alive=True,
    )
    smoker = _add(session, Character, name="Smoker", race_id=human.id, character_type_id=marine.id, age=36, is_alive=True)
    ace = _add(session, Character, name="Portgas D. Ace", race_id=human.id, bounty=550_000_000, age=20, is_alive=False)

    mera = _add(session, DevilFruit, name="Mera Mera no Mi", type_id=logia.id, previous_users=[ace.id])
    moku = _add(session, DevilFruit, name="Moku Moku no Mi", type_id=logia.id, current_user_id=smoker.id)
    gomu = _add(session, DevilFruit, name="Gomu Gomu no Mi", type_id=zoan.id, current_user_id=luffy.id)

    straw_hats = _add(
        session,
        Organization,
        name="Straw Hat Pirates",
        organization_type_id=crew.id,
        leader_id=luffy.id,
        ship_id=sunny.id,
        total_bounty=8_816_001_000,
        status="active",
    )

    _add(session, CharacterOrganization, character_id=luffy.id, organization_id=straw_hats.id, role="Captain", is_current=True)
    _add(session, CharacterOrganization, character_id=zoro.id, organization_id=straw_hats.id, role="Swordsman", is_current=True)
    _add(session, CharacterHaki, character_id=luffy.id, haki_type_id=conqueror.id, mastery_level="master", awakened=True)
    _add(session, CharacterHaki, character_id=zoro.id, haki_type_id=armament.id, mastery_level="advanced")
    _add(session, CharacterDevilFruit, character_id=luffy.id, devil_fruit_id=gomu.id, is_current=True)

    return SimpleNamespace(
        logia=logia.id,
        zoan=zoan.id,
        human=human.id,
        pirate=pirate.id,
        marine=marine.id,
        crew=crew.id,
        armament=armament.id,
        conqueror=conqueror.id,
        sunny=sunny.id,
        merry=merry.id,
        luffy=luffy.id,
        zoro=zoro.id,
        smoker=smoker.id,
        ace=ace.id,
        mera=mera.id,
        moku=moku.id,
        gomu=gomu.id,
        straw_hats=straw_hats.id,
    )


@pytest.fixture
def app(engine):
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(ADMIN_USERNAME)}"}


@pytest.fixture
def statements(engine) -> List[str]:
    """SQL statements executed on the engine while the test runs (after earlier fixtures)."""
    seen: List[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield seen
    event.remove(engine, "before_cursor_execute", _record)
