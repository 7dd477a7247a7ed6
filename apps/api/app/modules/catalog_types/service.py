from __future__ import annotations

from typing import Dict, Tuple

from app.core.family import Dependent, Family
from app.core.query import ListSpec
from app.core.validation import FieldRule
from app.modules.catalog_types.models import CharacterType, FruitType, HakiType, OrganizationType, Race
from app.modules.characters.models import Character, CharacterCharacterType, CharacterHaki
from app.modules.devil_fruits.models import DevilFruit
from app.modules.organizations.models import Organization

NAME_MAX = 50

_BASE_FIELDS: Tuple[FieldRule, ...] = (
    FieldRule("name", "text", required=True, nullable=False, max_length=NAME_MAX),
    FieldRule("description", "text"),
)
_BASE_SORT = ("id", "name", "created_at", "updated_at")


def _type_family(key: str, model, label: str, plural: str, dependents=(), default_sort: str = "name", extra_fields=(), extra_sort=()) -> Family:
    return Family(
        key=key,
        model=model,
        label=label,
        plural=plural,
        fields=_BASE_FIELDS + tuple(extra_fields),
        list_spec=ListSpec(
            sortable=_BASE_SORT + tuple(extra_sort),
            default_sort=default_sort,
            search_columns=("name", "description"),
        ),
        dependents=tuple(dependents),
    )


FRUIT_TYPES = _type_family(
    "fruit-types",
    FruitType,
    "Fruit type",
    "Fruit types",
    dependents=[Dependent(DevilFruit, "type_id", "devil fruits")],
    default_sort="id",
)

RACES = _type_family(
    "races",
    Race,
    "Race",
    "Races",
    dependents=[Dependent(Character, "race_id", "characters")],
)

CHARACTER_TYPES = _type_family(
    "character-types",
    CharacterType,
    "Character type",
    "Character types",
    dependents=[
        Dependent(Character, "character_type_id", "characters"),
        Dependent(CharacterCharacterType, "character_type_id", "character type assignments"),
    ],
)

ORGANIZATION_TYPES = _type_family(
    "organization-types",
    OrganizationType,
    "Organization type",
    "Organization types",
    dependents=[Dependent(Organization, "organization_type_id", "organizations")],
)

HAKI_TYPES = _type_family(
    "haki-types",
    HakiType,
    "Haki type",
    "Haki types",
    dependents=[Dependent(CharacterHaki, "haki_type_id", "character haki records")],
    extra_fields=[FieldRule("color", "text", max_length=50)],
    extra_sort=["color"],
)

FAMILIES: Dict[str, Family] = {
    f.key: f for f in (FRUIT_TYPES, RACES, CHARACTER_TYPES, ORGANIZATION_TYPES, HAKI_TYPES)
}
