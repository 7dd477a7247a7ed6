from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.core.errors import parse_id
from app.core.rate_limit import general_limit
from app.core.responses import PageEnvelope, ok_page
from app.core.routing import add_crud_routes, service_provider
from .schemas import DevilFruitIn, DevilFruitOut
from .service import DEVIL_FRUITS, DevilFruitService

router = APIRouter(prefix="/api/devil-fruits", tags=["devil-fruits"], dependencies=[Depends(general_limit)])

get_devil_fruit_service = service_provider(DEVIL_FRUITS, DevilFruitService)


@router.get("/type/{type_id}", response_model=PageEnvelope[DevilFruitOut])
def api_list_devil_fruits_by_type(type_id: str, request: Request, svc: DevilFruitService = Depends(get_devil_fruit_service)) -> Dict[str, Any]:
    page = svc.list_by_type(parse_id(type_id, "fruit type ID"), request.query_params)
    return ok_page(page, "Devil fruits retrieved successfully")


add_crud_routes(router, DEVIL_FRUITS, get_devil_fruit_service, DevilFruitOut, DevilFruitIn)
