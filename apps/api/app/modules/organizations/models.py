from __future__ import annotations

from typing import Optional
from sqlalchemy import BigInteger, Column
from sqlmodel import SQLModel, Field


# status: active|disbanded|destroyed
class Organization(SQLModel, table=True):
    __tablename__ = "organizations"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    organization_type_id: int = Field(foreign_key="organization_types.id", index=True)
    leader_id: Optional[int] = Field(default=None, foreign_key="characters.id", index=True)
    ship_id: Optional[int] = Field(default=None, foreign_key="ships.id", index=True)
    base_location: Optional[str] = Field(default=None, max_length=100)
    total_bounty: int = Field(default=0, sa_column=Column(BigInteger, nullable=False, default=0))
    status: str = Field(default="active", index=True)
    description: Optional[str] = None

    created_at: str
    updated_at: str
