# no `from __future__ import annotations` here: FastAPI reads the closure-typed
# endpoint signatures below at runtime.
import json
from typing import Any, Callable, Dict, Type

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from app.core.catalog import CatalogService
from app.core.db import get_session
from app.core.errors import parse_id
from app.core.family import Family
from app.core.rate_limit import sensitive_limit
from app.core.responses import DeletedOut, ItemEnvelope, PageEnvelope, ok, ok_page
from app.core.security import require_auth

# order matters: the sensitive tier rejects before the token is even looked at
MUTATING = [Depends(sensitive_limit), Depends(require_auth)]


def service_provider(family: Family, cls: Type[CatalogService] = CatalogService) -> Callable[..., CatalogService]:
    def _provide(session: Session = Depends(get_session)) -> CatalogService:
        return cls(family, session)

    _provide.__name__ = f"get_{family.key.replace('-', '_')}_service"
    return _provide


def body_reader(in_model: Type[BaseModel]) -> Callable[..., Any]:
    """Parse the JSON body as a dependency, so it is solved after MUTATING.

    Returns only the fields the client sent; an absent body reads as {}.
    """

    async def _read(request: Request) -> Dict[str, Any]:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw.strip() else {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            pos = getattr(e, "pos", getattr(e, "start", 0))
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body", pos), "msg": "JSON decode error", "input": {}}]
            )
        try:
            parsed = in_model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError([{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)])
        return parsed.model_dump(exclude_unset=True)

    _read.__name__ = f"read_{in_model.__name__}"
    return _read


def _body_doc(in_model: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": in_model.model_json_schema()}},
        }
    }


def add_crud_routes(
    router: APIRouter,
    family: Family,
    provide: Callable[..., CatalogService],
    out_model: Type[BaseModel],
    in_model: Type[BaseModel],
) -> None:
    """Register list/get/create/update/delete on `router` (after any family-specific routes)."""
    label, plural = family.label, family.plural

    @router.get("", response_model=PageEnvelope[out_model])
    def list_items(request: Request, svc: CatalogService = Depends(provide)) -> Dict[str, Any]:
        return ok_page(svc.list(request.query_params), f"{plural} retrieved successfully")

    @router.get("/{item_id}", response_model=ItemEnvelope[out_model])
    def get_item(item_id: str, svc: CatalogService = Depends(provide)) -> Dict[str, Any]:
        return ok(svc.get(parse_id(item_id, f"{label.lower()} ID")))

    read_body = body_reader(in_model)
    body_doc = _body_doc(in_model)

    @router.post("", status_code=201, response_model=ItemEnvelope[out_model], dependencies=MUTATING, openapi_extra=body_doc)
    def create_item(body: Dict[str, Any] = Depends(read_body), svc: CatalogService = Depends(provide)) -> Dict[str, Any]:
        return ok(svc.create(body), f"{label} created successfully")

    @router.put("/{item_id}", response_model=ItemEnvelope[out_model], dependencies=MUTATING, openapi_extra=body_doc)
    def update_item(
        item_id: str, body: Dict[str, Any] = Depends(read_body), svc: CatalogService = Depends(provide)
    ) -> Dict[str, Any]:
        iid = parse_id(item_id, f"{label.lower()} ID")
        return ok(svc.update(iid, body), f"{label} updated successfully")

    @router.delete("/{item_id}", response_model=ItemEnvelope[DeletedOut], dependencies=MUTATING)
    def delete_item(item_id: str, svc: CatalogService = Depends(provide)) -> Dict[str, Any]:
        iid = parse_id(item_id, f"{label.lower()} ID")
        return ok(svc.delete(iid), f"{label} deleted successfully")
