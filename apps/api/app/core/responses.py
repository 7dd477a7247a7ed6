from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

from app.core.catalog import Page

T = TypeVar("T")


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ItemEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class ListEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: List[T]
    count: int


class PageEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: List[T]
    count: int
    pagination: PaginationOut


class DeletedOut(BaseModel):
    id: int
    name: Optional[str] = None
    deleted: bool = True


def ok(data: Any, message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": True, "message": message, "data": data}


def ok_list(items: List[Any], message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": True, "message": message, "data": items, "count": len(items)}


def ok_page(page: Page, message: Optional[str] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": page.items,
        "count": len(page.items),
        "pagination": page.pagination(),
    }


def failure(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message, "error": code}
    if details is not None:
        body["details"] = details
    return body
