from __future__ import annotations

from typing import List, Optional
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class DevilFruit(SQLModel, table=True):
    __tablename__ = "devil_fruits"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    japanese_name: Optional[str] = Field(default=None, max_length=100)
    type_id: int = Field(foreign_key="devil_fruit_types.id", index=True)
    description: Optional[str] = None
    abilities: Optional[str] = None
    weaknesses: Optional[str] = None
    current_user_id: Optional[int] = Field(default=None, foreign_key="characters.id", index=True)
    previous_users: Optional[List[int]] = Field(default=None, sa_column=Column(JSON))  # ordered character ids
    image_url: Optional[str] = Field(default=None, max_length=255)

    created_at: str
    updated_at: str
