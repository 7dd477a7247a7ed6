from __future__ import annotations

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class LoginIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    username: str
    role: str


class LoginOut(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserOut


class VerifyOut(BaseModel):
    user: Dict[str, Any]


class HashIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    password: Optional[str] = None


class HashOut(BaseModel):
    hash: str
    note: str
