from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class ShipIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    description: Any = None
    status: Any = None  # active|destroyed|retired
    image_url: Any = None


class ShipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    status: str
    image_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ShipSummary(BaseModel):
    id: int
    name: str
    status: Optional[str] = None
