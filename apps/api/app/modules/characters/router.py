from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.core.rate_limit import general_limit
from app.core.responses import PageEnvelope, ok_page
from app.core.routing import add_crud_routes, service_provider
from .schemas import CharacterIn, CharacterOut
from .service import CHARACTERS, CharacterService

router = APIRouter(prefix="/api/characters", tags=["characters"], dependencies=[Depends(general_limit)])

get_character_service = service_provider(CHARACTERS, CharacterService)


@router.get("/search", response_model=PageEnvelope[CharacterOut])
def api_search_characters(
    request: Request,
    q: Optional[str] = Query(None, description="case-insensitive match on name, alias, japanese name, description"),
    svc: CharacterService = Depends(get_character_service),
) -> Dict[str, Any]:
    page = svc.search(q, request.query_params)
    return ok_page(page, f"Found {page.total} characters matching '{(q or '').strip()}'")


add_crud_routes(router, CHARACTERS, get_character_service, CharacterOut, CharacterIn)
