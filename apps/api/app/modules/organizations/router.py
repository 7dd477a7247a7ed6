from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.core.errors import parse_id
from app.core.rate_limit import general_limit
from app.core.responses import ListEnvelope, PageEnvelope, ok_list, ok_page
from app.core.routing import add_crud_routes, service_provider
from .schemas import MemberOut, OrganizationIn, OrganizationOut
from .service import ORGANIZATIONS, OrganizationService

router = APIRouter(prefix="/api/organizations", tags=["organizations"], dependencies=[Depends(general_limit)])

get_organization_service = service_provider(ORGANIZATIONS, OrganizationService)


@router.get("/type/{organization_type_id}", response_model=PageEnvelope[OrganizationOut])
def api_list_organizations_by_type(
    organization_type_id: str,
    request: Request,
    svc: OrganizationService = Depends(get_organization_service),
) -> Dict[str, Any]:
    type_id = parse_id(organization_type_id, "organization type ID")
    return ok_page(svc.list_by_type(type_id, request.query_params), "Organizations retrieved successfully")


@router.get("/{item_id}/members", response_model=ListEnvelope[MemberOut])
def api_list_organization_members(item_id: str, svc: OrganizationService = Depends(get_organization_service)) -> Dict[str, Any]:
    members = svc.members(parse_id(item_id, "organization ID"))
    return ok_list(members, "Organization members retrieved successfully")


add_crud_routes(router, ORGANIZATIONS, get_organization_service, OrganizationOut, OrganizationIn)
