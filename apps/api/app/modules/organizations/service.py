from __future__ import annotations

from typing import Any, Dict, List, Mapping

from sqlmodel import SQLModel, select

from app.core.catalog import CatalogService, Page, summary
from app.core.family import Dependent, Family, Reference
from app.core.query import ListSpec, RangeFilter
from app.core.validation import FieldRule
from app.modules.catalog_types.models import OrganizationType
from app.modules.catalog_types.service import ORGANIZATION_TYPES
from app.modules.characters.models import Character, CharacterOrganization
from app.modules.organizations.models import Organization
from app.modules.ships.models import Ship

ORGANIZATION_STATUSES = ("active", "disbanded", "destroyed")

ORGANIZATIONS = Family(
    key="organizations",
    model=Organization,
    label="Organization",
    plural="Organizations",
    fields=(
        FieldRule("name", "text", required=True, nullable=False, max_length=100),
        FieldRule("organization_type_id", "ref", label="Organization type", required=True, nullable=False),
        FieldRule("leader_id", "ref", label="Leader"),
        FieldRule("ship_id", "ref", label="Ship"),
        FieldRule("base_location", "text", max_length=100),
        FieldRule("total_bounty", "int", nullable=False, min_value=0, default=0),
        FieldRule("status", "choice", nullable=False, choices=ORGANIZATION_STATUSES, default="active"),
        FieldRule("description", "text"),
    ),
    list_spec=ListSpec(
        sortable=("id", "name", "total_bounty", "status", "created_at", "updated_at"),
        search_columns=("name", "base_location", "description"),
        fk_filters=("organization_type_id", "leader_id", "ship_id"),
        choice_filters={"status": ORGANIZATION_STATUSES},
        ranges=(RangeFilter("total_bounty", "min_total_bounty", "max_total_bounty"),),
    ),
    dependents=(
        Dependent(CharacterOrganization, "organization_id", "current members", {"is_current": True}),
    ),
    references=(
        Reference("organization_type_id", OrganizationType, "Organization type"),
        Reference("leader_id", Character, "Character"),
        Reference("ship_id", Ship, "Ship"),
    ),
)


class OrganizationService(CatalogService):
    def present(self, rows: List[SQLModel]) -> List[Dict[str, Any]]:
        types = self.lookup(OrganizationType, (r.organization_type_id for r in rows))
        leaders = self.lookup(Character, (r.leader_id for r in rows))
        ships = self.lookup(Ship, (r.ship_id for r in rows))

        out = []
        for r in rows:
            d = r.model_dump()
            d["organization_type"] = summary(types.get(r.organization_type_id), "id", "name")
            d["leader"] = summary(leaders.get(r.leader_id), "id", "name", "alias")
            d["ship"] = summary(ships.get(r.ship_id), "id", "name", "status")
            out.append(d)
        return out

    def list_by_type(self, type_id: int, raw: Mapping[str, Any]) -> Page:
        self.guard.ensure_exists(ORGANIZATION_TYPES, type_id)
        return self.list(raw, fixed_filters={"organization_type_id": type_id})

    def members(self, item_id: int) -> List[Dict[str, Any]]:
        self.guard.ensure_exists(self.family, item_id)
        stmt = (
            select(Character, CharacterOrganization)
            .join(CharacterOrganization, CharacterOrganization.character_id == Character.id)
            .where(CharacterOrganization.organization_id == item_id, CharacterOrganization.is_current == True)  # noqa: E712
            .order_by(Character.name.asc(), Character.id.asc())
        )
        members = []
        for character, link in self.session.exec(stmt).all():
            m = summary(character, "id", "name", "alias", "bounty", "is_alive")
            m["role"] = link.role
            m["joined_date"] = link.joined_date
            members.append(m)
        return members
