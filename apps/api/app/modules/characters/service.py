from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from sqlmodel import SQLModel

from app.core.catalog import CatalogService, Page, summary
from app.core.errors import bad_request
from app.core.family import Dependent, Family, Reference
from app.core.query import ListSpec, RangeFilter
from app.core.validation import FieldRule
from app.modules.catalog_types.models import CharacterType, Race
from app.modules.characters.models import Character, CharacterHaki, CharacterOrganization
from app.modules.devil_fruits.models import DevilFruit
from app.modules.organizations.models import Organization

CHARACTERS = Family(
    key="characters",
    model=Character,
    label="Character",
    plural="Characters",
    fields=(
        FieldRule("name", "text", required=True, nullable=False, max_length=100),
        FieldRule("alias", "text", max_length=100),
        FieldRule("japanese_name", "text", max_length=100),
        FieldRule("race_id", "ref", label="Race"),
        FieldRule("character_type_id", "ref", label="Character type"),
        FieldRule("bounty", "int", min_value=0),
        FieldRule("age", "int", min_value=0, max_value=1000),
        FieldRule("height", "number", min_value=0, max_value=1000),
        FieldRule("is_alive", "bool", nullable=False, default=True),
        FieldRule("origin", "text", max_length=100),
        FieldRule("description", "text"),
        FieldRule("abilities", "text"),
        FieldRule("image_url", "url", label="Image URL", max_length=255),
        FieldRule("first_appearance", "text", max_length=100),
    ),
    list_spec=ListSpec(
        sortable=("id", "name", "japanese_name", "bounty", "age", "height", "created_at", "updated_at"),
        search_columns=("name", "alias", "japanese_name", "description"),
        fk_filters=("race_id", "character_type_id"),
        bool_filters=("is_alive",),
        ranges=(RangeFilter("bounty", "min_bounty", "max_bounty"),),
    ),
    dependents=(
        Dependent(DevilFruit, "current_user_id", "devil fruits"),
        Dependent(Organization, "leader_id", "led organizations"),
        Dependent(CharacterOrganization, "character_id", "current memberships", {"is_current": True}),
        Dependent(CharacterHaki, "character_id", "haki records"),
    ),
    references=(
        Reference("race_id", Race, "Race"),
        Reference("character_type_id", CharacterType, "Character type"),
    ),
)


class CharacterService(CatalogService):
    def present(self, rows: List[SQLModel]) -> List[Dict[str, Any]]:
        races = self.lookup(Race, (r.race_id for r in rows))
        types = self.lookup(CharacterType, (r.character_type_id for r in rows))

        out = []
        for r in rows:
            d = r.model_dump()
            d["race"] = summary(races.get(r.race_id), "id", "name")
            d["character_type"] = summary(types.get(r.character_type_id), "id", "name")
            out.append(d)
        return out

    def search(self, q: Optional[str], raw: Mapping[str, Any]) -> Page:
        term = (q or "").strip()
        if not term:
            raise bad_request("MISSING_SEARCH_QUERY", "Search query parameter 'q' is required")
        return self.list({**raw, "search": term})
