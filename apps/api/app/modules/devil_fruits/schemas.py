from __future__ import annotations

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict

from app.modules.catalog_types.schemas import CatalogTypeSummary


class DevilFruitIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    japanese_name: Any = None
    type_id: Any = None
    description: Any = None
    abilities: Any = None
    weaknesses: Any = None
    current_user_id: Any = None
    previous_users: Any = None
    image_url: Any = None


class FruitUserSummary(BaseModel):
    id: int
    name: str
    alias: Optional[str] = None


class DevilFruitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    japanese_name: Optional[str] = None
    type_id: int
    description: Optional[str] = None
    abilities: Optional[str] = None
    weaknesses: Optional[str] = None
    current_user_id: Optional[int] = None
    previous_users: Optional[List[int]] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    type: Optional[CatalogTypeSummary] = None
    current_user: Optional[FruitUserSummary] = None
