from __future__ import annotations

from typing import Any, Dict, List, Mapping

from sqlmodel import SQLModel

from app.core.catalog import CatalogService, Page, summary
from app.core.family import Dependent, Family, Reference
from app.core.query import ListSpec
from app.core.validation import FieldRule
from app.modules.catalog_types.models import FruitType
from app.modules.catalog_types.service import FRUIT_TYPES
from app.modules.characters.models import Character, CharacterDevilFruit
from app.modules.devil_fruits.models import DevilFruit

DEVIL_FRUITS = Family(
    key="devil-fruits",
    model=DevilFruit,
    label="Devil fruit",
    plural="Devil fruits",
    fields=(
        FieldRule("name", "text", required=True, nullable=False, max_length=100),
        FieldRule("japanese_name", "text", max_length=100),
        FieldRule("type_id", "ref", label="Fruit type", required=True, nullable=False),
        FieldRule("description", "text"),
        FieldRule("abilities", "text"),
        FieldRule("weaknesses", "text"),
        FieldRule("current_user_id", "ref", label="Current user"),
        FieldRule("previous_users", "ref_list", label="Previous users"),
        FieldRule("image_url", "url", label="Image URL", max_length=255),
    ),
    list_spec=ListSpec(
        sortable=("id", "name", "japanese_name", "type_id", "created_at", "updated_at"),
        default_sort="id",
        search_columns=("name", "japanese_name", "description"),
        fk_filters=("type_id", "current_user_id"),
    ),
    dependents=(
        Dependent(CharacterDevilFruit, "devil_fruit_id", "current users", {"is_current": True}),
    ),
    references=(
        Reference("type_id", FruitType, "Fruit type"),
        Reference("current_user_id", Character, "Character"),
        Reference("previous_users", Character, "Character", many=True),
    ),
)


class DevilFruitService(CatalogService):
    def present(self, rows: List[SQLModel]) -> List[Dict[str, Any]]:
        types = self.lookup(FruitType, (r.type_id for r in rows))
        users = self.lookup(Character, (r.current_user_id for r in rows))

        out = []
        for r in rows:
            d = r.model_dump()
            d["type"] = summary(types.get(r.type_id), "id", "name")
            d["current_user"] = summary(users.get(r.current_user_id), "id", "name", "alias")
            out.append(d)
        return out

    def list_by_type(self, type_id: int, raw: Mapping[str, Any]) -> Page:
        self.guard.ensure_exists(FRUIT_TYPES, type_id)
        return self.list(raw, fixed_filters={"type_id": type_id})
