from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


class CatalogTypeBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, unique=True, index=True)
    description: Optional[str] = None

    created_at: str
    updated_at: str


class Race(CatalogTypeBase, table=True):
    __tablename__ = "races"


class CharacterType(CatalogTypeBase, table=True):
    __tablename__ = "character_types"


class FruitType(CatalogTypeBase, table=True):
    __tablename__ = "devil_fruit_types"


class OrganizationType(CatalogTypeBase, table=True):
    __tablename__ = "organization_types"


class HakiType(CatalogTypeBase, table=True):
    __tablename__ = "haki_types"

    color: Optional[str] = Field(default=None, max_length=50)
