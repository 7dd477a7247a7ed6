from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

from app.modules.catalog_types.schemas import CatalogTypeSummary
from app.modules.ships.schemas import ShipSummary


class OrganizationIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    organization_type_id: Any = None
    leader_id: Any = None
    ship_id: Any = None
    base_location: Any = None
    total_bounty: Any = None
    status: Any = None  # active|disbanded|destroyed
    description: Any = None


class CharacterSummary(BaseModel):
    id: int
    name: str
    alias: Optional[str] = None


class OrganizationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    organization_type_id: int
    leader_id: Optional[int] = None
    ship_id: Optional[int] = None
    base_location: Optional[str] = None
    total_bounty: int = 0
    status: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    organization_type: Optional[CatalogTypeSummary] = None
    leader: Optional[CharacterSummary] = None
    ship: Optional[ShipSummary] = None


class MemberOut(BaseModel):
    id: int
    name: str
    alias: Optional[str] = None
    bounty: Optional[int] = None
    is_alive: bool = True
    role: Optional[str] = None
    joined_date: Optional[str] = None
