from __future__ import annotations

from typing import Any, Mapping

from app.core.catalog import CatalogService, Page
from app.core.errors import bad_request
from app.core.family import Dependent, Family
from app.core.query import ListSpec
from app.core.validation import FieldRule, check_choice
from app.modules.organizations.models import Organization
from app.modules.ships.models import Ship

SHIP_STATUSES = ("active", "destroyed", "retired")

SHIPS = Family(
    key="ships",
    model=Ship,
    label="Ship",
    plural="Ships",
    fields=(
        FieldRule("name", "text", required=True, nullable=False, max_length=100),
        FieldRule("description", "text"),
        FieldRule("status", "choice", nullable=False, choices=SHIP_STATUSES, default="active"),
        FieldRule("image_url", "url", label="Image URL", max_length=255),
    ),
    list_spec=ListSpec(
        sortable=("id", "name", "status", "created_at", "updated_at"),
        search_columns=("name", "description"),
        choice_filters={"status": SHIP_STATUSES},
    ),
    dependents=(Dependent(Organization, "ship_id", "organizations"),),
)


class ShipService(CatalogService):
    def list_by_status(self, status: str, raw: Mapping[str, Any]) -> Page:
        violation = check_choice(status, label="Status", code="INVALID_STATUS", choices=SHIP_STATUSES)
        if violation is not None:
            raise bad_request(violation.code, violation.message)
        return self.list(raw, fixed_filters={"status": status})
