from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


# status: active|destroyed|retired
class Ship(SQLModel, table=True):
    __tablename__ = "ships"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    description: Optional[str] = None
    status: str = Field(default="active", index=True)
    image_url: Optional[str] = Field(default=None, max_length=255)

    created_at: str
    updated_at: str
