from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

from app.modules.catalog_types.schemas import CatalogTypeSummary


class CharacterIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    alias: Any = None
    japanese_name: Any = None
    race_id: Any = None
    character_type_id: Any = None
    bounty: Any = None
    age: Any = None
    height: Any = None
    is_alive: Any = None
    origin: Any = None
    description: Any = None
    abilities: Any = None
    image_url: Any = None
    first_appearance: Any = None


class CharacterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    alias: Optional[str] = None
    japanese_name: Optional[str] = None
    race_id: Optional[int] = None
    character_type_id: Optional[int] = None
    bounty: Optional[int] = None
    age: Optional[int] = None
    height: Optional[float] = None
    is_alive: bool = True
    origin: Optional[str] = None
    description: Optional[str] = None
    abilities: Optional[str] = None
    image_url: Optional[str] = None
    first_appearance: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    race: Optional[CatalogTypeSummary] = None
    character_type: Optional[CatalogTypeSummary] = None
