from __future__ import annotations

import pytest

from app.core.catalog import CatalogService
from app.core.errors import CatalogError
from app.core.repository import Repository
from app.modules.catalog_types.service import CHARACTER_TYPES, FRUIT_TYPES, HAKI_TYPES, ORGANIZATION_TYPES, RACES
from app.modules.characters.service import CHARACTERS, CharacterService
from app.modules.devil_fruits.service import DEVIL_FRUITS, DevilFruitService
from app.modules.organizations.service import ORGANIZATIONS, OrganizationService
from app.modules.ships.service import SHIPS, ShipService

# family, service class, seeded item, create body that reuses the item's name, expected dependents
EVERY_FAMILY = [
    (FRUIT_TYPES, CatalogService, "logia", lambda s: {"name": "Logia"}, {"devil fruits": 2}),
    (RACES, CatalogService, "human", lambda s: {"name": "Human"}, {"characters": 4}),
    (CHARACTER_TYPES, CatalogService, "pirate", lambda s: {"name": "Pirate"}, {"characters": 2}),
    (ORGANIZATION_TYPES, CatalogService, "crew", lambda s: {"name": "Pirate Crew"}, {"organizations": 1}),
    (HAKI_TYPES, CatalogService, "armament", lambda s: {"name": "Armament Haki"}, {"character haki records": 1}),
    (
        CHARACTERS,
        CharacterService,
        "luffy",
        lambda s: {"name": "Monkey D. Luffy"},
        {"devil fruits": 1, "led organizations": 1, "current memberships": 1, "haki records": 1},
    ),
    (DEVIL_FRUITS, DevilFruitService, "gomu", lambda s: {"name": "Gomu Gomu no Mi", "type_id": s.zoan}, {"current users": 1}),
    (
        ORGANIZATIONS,
        OrganizationService,
        "straw_hats",
        lambda s: {"name": "Straw Hat Pirates", "organization_type_id": s.crew},
        {"current members": 2},
    ),
    (SHIPS, ShipService, "sunny", lambda s: {"name": "Thousand Sunny"}, {"organizations": 1}),
]
FAMILY_IDS = [f[0].key for f in EVERY_FAMILY]


def _raises(code: str, fn, *args):
    with pytest.raises(CatalogError) as exc:
        fn(*args)
    assert exc.value.code == code
    return exc.value


def _is_write(sql: str) -> bool:
    return sql.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE"))


@pytest.mark.parametrize("family, cls, item, body, breakdown", EVERY_FAMILY, ids=FAMILY_IDS)
def test_duplicate_name_on_create_performs_no_write(session, seeded, statements, family, cls, item, body, breakdown):
    svc = cls(family, session)
    before = Repository(session, family.model).count()

    err = _raises("DUPLICATE_NAME", svc.create, body(seeded))
    assert err.status_code == 409
    assert err.message == f"{family.label} with this name already exists"
    assert not any(_is_write(s) for s in statements)
    assert Repository(session, family.model).count() == before


def test_name_uniqueness_is_case_sensitive(session, seeded):
    svc = CatalogService(FRUIT_TYPES, session)
    created = svc.create({"name": "logia"})
    assert created["name"] == "logia"


@pytest.mark.parametrize("family, cls, item, body, breakdown", EVERY_FAMILY, ids=FAMILY_IDS)
def test_empty_update_is_rejected_before_any_statement(session, seeded, statements, family, cls, item, body, breakdown):
    svc = cls(family, session)
    err = _raises("NO_FIELDS_PROVIDED", svc.update, getattr(seeded, item), {})
    assert err.status_code == 400
    assert statements == []


def test_update_ignores_own_name_but_rejects_anothers(session, seeded):
    svc = CharacterService(CHARACTERS, session)
    assert svc.update(seeded.luffy, {"name": "Monkey D. Luffy", "age": 20})["age"] == 20
    _raises("DUPLICATE_NAME", svc.update, seeded.zoro, {"name": "Monkey D. Luffy"})


def test_update_missing_row_is_not_found(session, seeded):
    err = _raises("NOT_FOUND", CatalogService(RACES, session).update, 999, {"name": "Giant"})
    assert err.status_code == 404
    assert err.message == "Race with ID 999 not found"


def test_partial_update_leaves_omitted_fields_and_clears_explicit_null(session, seeded):
    svc = CharacterService(CHARACTERS, session)
    out = svc.update(seeded.luffy, {"alias": None})
    assert out["alias"] is None
    assert out["bounty"] == 3_000_000_000
    assert out["race_id"] == seeded.human


@pytest.mark.parametrize("family, cls, item, body, breakdown", EVERY_FAMILY, ids=FAMILY_IDS)
def test_delete_with_dependents_reports_count_and_keeps_row(session, seeded, statements, family, cls, item, body, breakdown):
    svc = cls(family, session)
    item_id = getattr(seeded, item)

    err = _raises("HAS_ASSOCIATIONS", svc.delete, item_id)
    assert err.status_code == 409
    assert "associated" in err.message
    assert err.details == {"associated_count": sum(breakdown.values()), "breakdown": breakdown}
    assert not any(_is_write(s) for s in statements)
    assert svc.get(item_id)["id"] == item_id


def test_delete_without_dependents(session, seeded):
    svc = CharacterService(CHARACTERS, session)
    assert svc.delete(seeded.ace) == {"id": seeded.ace, "name": "Portgas D. Ace", "deleted": True}
    _raises("NOT_FOUND", svc.get, seeded.ace)


def test_get_is_idempotent(session, seeded):
    svc = OrganizationService(ORGANIZATIONS, session)
    assert svc.get(seeded.straw_hats) == svc.get(seeded.straw_hats)


def test_references_must_exist(session, seeded):
    svc = DevilFruitService(DEVIL_FRUITS, session)
    err = _raises("INVALID_TYPE_ID", svc.create, {"name": "Hito Hito no Mi", "type_id": 99})
    assert err.message == "Fruit type with ID 99 does not exist"
    _raises("INVALID_PREVIOUS_USERS", svc.create, {"name": "Hito Hito no Mi", "type_id": seeded.zoan, "previous_users": [seeded.luffy, 999]})


def test_list_pages_and_counts(session, seeded):
    page = CharacterService(CHARACTERS, session).list({"limit": "3", "sortBy": "id"})
    assert page.total == 4
    assert [c["id"] for c in page.items] == [seeded.luffy, seeded.zoro, seeded.smoker]
    assert (page.total_pages, page.has_next, page.has_prev) == (2, True, False)
    assert page.items[0]["race"] == {"id": seeded.human, "name": "Human"}
