from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


# request bodies are shared by POST and PUT; unset fields stay unset (partial update).
# Field values are left untyped: FieldRule validation owns type checks and INVALID_<FIELD> codes.
class CatalogTypeIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    description: Any = None


class HakiTypeIn(CatalogTypeIn):
    color: Any = None


class CatalogTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class HakiTypeOut(CatalogTypeOut):
    color: Optional[str] = None


class CatalogTypeSummary(BaseModel):
    id: int
    name: str
