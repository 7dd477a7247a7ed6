from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.core.rate_limit import general_limit
from app.core.responses import PageEnvelope, ok_page
from app.core.routing import add_crud_routes, service_provider
from .schemas import ShipIn, ShipOut
from .service import SHIPS, ShipService

router = APIRouter(prefix="/api/ships", tags=["ships"], dependencies=[Depends(general_limit)])

get_ship_service = service_provider(SHIPS, ShipService)


@router.get("/status/{status}", response_model=PageEnvelope[ShipOut])
def api_list_ships_by_status(status: str, request: Request, svc: ShipService = Depends(get_ship_service)) -> Dict[str, Any]:
    page = svc.list_by_status(status, request.query_params)
    return ok_page(page, f"Ships with status '{status}' retrieved successfully")


add_crud_routes(router, SHIPS, get_ship_service, ShipOut, ShipIn)
