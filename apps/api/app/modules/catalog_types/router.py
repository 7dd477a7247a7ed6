from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from app.core.rate_limit import general_limit
from app.core.routing import add_crud_routes, service_provider
from .schemas import CatalogTypeIn, CatalogTypeOut, HakiTypeIn, HakiTypeOut
from .service import CHARACTER_TYPES, FRUIT_TYPES, HAKI_TYPES, ORGANIZATION_TYPES, RACES


def _build(family, out_model=CatalogTypeOut, in_model=CatalogTypeIn) -> APIRouter:
    router = APIRouter(prefix=f"/api/{family.key}", tags=[family.key], dependencies=[Depends(general_limit)])
    add_crud_routes(router, family, service_provider(family), out_model, in_model)
    return router


routers: List[APIRouter] = [
    _build(FRUIT_TYPES),
    _build(RACES),
    _build(CHARACTER_TYPES),
    _build(ORGANIZATION_TYPES),
    _build(HAKI_TYPES, HakiTypeOut, HakiTypeIn),
]
