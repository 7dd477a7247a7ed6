from __future__ import annotations

from typing import Optional
from sqlalchemy import BigInteger, Column, UniqueConstraint
from sqlmodel import SQLModel, Field


class Character(SQLModel, table=True):
    __tablename__ = "characters"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    alias: Optional[str] = Field(default=None, max_length=100)
    japanese_name: Optional[str] = Field(default=None, max_length=100)
    race_id: Optional[int] = Field(default=None, foreign_key="races.id", index=True)
    character_type_id: Optional[int] = Field(default=None, foreign_key="character_types.id", index=True)
    bounty: Optional[int] = Field(default=None, sa_column=Column(BigInteger, index=True))
    age: Optional[int] = None
    height: Optional[float] = None
    is_alive: bool = Field(default=True)
    origin: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    abilities: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=255)
    first_appearance: Optional[str] = Field(default=None, max_length=100)

    created_at: str
    updated_at: str


# --- join rows (many-to-many with their own validity window) ---
class CharacterOrganization(SQLModel, table=True):
    __tablename__ = "character_organizations"
    __table_args__ = (UniqueConstraint("character_id", "organization_id", name="uq_character_organization"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    character_id: int = Field(foreign_key="characters.id", ondelete="CASCADE", index=True)
    organization_id: int = Field(foreign_key="organizations.id", ondelete="CASCADE", index=True)
    role: Optional[str] = Field(default=None, max_length=100)
    joined_date: Optional[str] = Field(default=None, max_length=50)
    left_date: Optional[str] = Field(default=None, max_length=50)
    is_current: bool = Field(default=True, index=True)

    created_at: str
    updated_at: str


class CharacterHaki(SQLModel, table=True):
    __tablename__ = "character_haki"
    __table_args__ = (UniqueConstraint("character_id", "haki_type_id", name="uq_character_haki"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    character_id: int = Field(foreign_key="characters.id", ondelete="CASCADE", index=True)
    haki_type_id: int = Field(foreign_key="haki_types.id", ondelete="CASCADE", index=True)
    mastery_level: str = Field(default="basic")  # basic|intermediate|advanced|master
    awakened: bool = Field(default=False)

    created_at: str
    updated_at: str


class CharacterCharacterType(SQLModel, table=True):
    __tablename__ = "character_character_types"
    __table_args__ = (UniqueConstraint("character_id", "character_type_id", name="uq_character_character_type"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    character_id: int = Field(foreign_key="characters.id", ondelete="CASCADE", index=True)
    character_type_id: int = Field(foreign_key="character_types.id", ondelete="CASCADE", index=True)
    is_current: bool = Field(default=True)

    created_at: str
    updated_at: str


class CharacterDevilFruit(SQLModel, table=True):
    __tablename__ = "character_devil_fruits"
    __table_args__ = (UniqueConstraint("character_id", "devil_fruit_id", name="uq_character_devil_fruit"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    character_id: int = Field(foreign_key="characters.id", ondelete="CASCADE", index=True)
    devil_fruit_id: int = Field(foreign_key="devil_fruits.id", ondelete="CASCADE", index=True)
    is_current: bool = Field(default=True)

    created_at: str
    updated_at: str
