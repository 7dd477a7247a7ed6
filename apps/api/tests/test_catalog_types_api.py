from __future__ import annotations

import pytest

FAMILIES = ["fruit-types", "races", "character-types", "organization-types", "haki-types"]


def test_create_fruit_type_then_duplicate(client, seeded, auth_headers):
    payload = {"name": "Paramecia", "description": "Superhuman powers"}

    r = client.post("/api/fruit-types", json=payload, headers=auth_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Paramecia"
    assert body["data"]["id"] > 0
    assert body["data"]["created_at"]

    again = client.post("/api/fruit-types", json=payload, headers=auth_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "DUPLICATE_NAME"


def test_race_name_too_long(client, seeded, auth_headers):
    r = client.put(f"/api/races/{seeded.human}", json={"name": "A" * 51}, headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "INVALID_NAME"
    assert "50 characters" in body["message"]


def test_delete_fruit_type_with_fruits(client, seeded, auth_headers):
    r = client.delete(f"/api/fruit-types/{seeded.logia}", headers=auth_headers)
    assert r.status_code == 409
    body = r.json()
    assert body["error"] == "HAS_ASSOCIATIONS"
    assert "associated" in body["message"]
    assert body["details"]["associated_count"] == 2


def test_delete_unused_type(client, seeded, auth_headers):
    created = client.post("/api/races", json={"name": "Giant"}, headers=auth_headers).json()["data"]
    r = client.delete(f"/api/races/{created['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"] == {"id": created["id"], "name": "Giant", "deleted": True}
    assert client.get(f"/api/races/{created['id']}").status_code == 404


@pytest.mark.parametrize("family", FAMILIES)
def test_mutations_require_a_token(client, seeded, statements, family):
    for method, path in (("post", f"/api/{family}"), ("put", f"/api/{family}/1"), ("delete", f"/api/{family}/1")):
        kwargs = {"json": {"name": "Anything"}} if method != "delete" else {}
        r = getattr(client, method)(path, **kwargs)
        assert r.status_code == 401
        assert r.json()["error"] == "NO_TOKEN"
    assert statements == []


@pytest.mark.parametrize("family", FAMILIES)
def test_list_is_public_and_paginated(client, seeded, family):
    r = client.get(f"/api/{family}", params={"limit": 100})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["count"] == len(body["data"])
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 100


@pytest.mark.parametrize("params", [{"limit": 101}, {"page": 0}, {"limit": "abc"}])
def test_list_rejects_bad_pagination(client, seeded, params):
    r = client.get("/api/races", params=params)
    assert r.status_code == 400
    assert r.json()["error"] == "INVALID_PAGINATION"


def test_list_rejects_unknown_sort_column(client, seeded, statements):
    r = client.get("/api/races", params={"sortBy": "secret"})
    assert r.status_code == 400
    assert r.json()["error"] == "INVALID_SORT"
    assert statements == []


@pytest.mark.parametrize("raw_id", ["0", "-1", "abc", "1.5"])
def test_get_rejects_invalid_id(client, seeded, raw_id):
    r = client.get(f"/api/races/{raw_id}")
    assert r.status_code == 400
    assert r.json()["error"] == "INVALID_ID"


def test_get_twice_returns_identical_payloads(client, seeded):
    first = client.get(f"/api/races/{seeded.human}")
    second = client.get(f"/api/races/{seeded.human}")
    assert first.status_code == 200
    assert first.json() == second.json()


def test_haki_type_carries_color(client, seeded, auth_headers):
    r = client.post("/api/haki-types", json={"name": "Emperor's Haki", "color": "Purple"}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["data"]["color"] == "Purple"

    listed = client.get("/api/haki-types", params={"sortBy": "color"}).json()["data"]
    assert [h["color"] for h in listed] == sorted(h["color"] for h in listed)


def test_fruit_types_default_to_id_order(client, seeded):
    names = [t["name"] for t in client.get("/api/fruit-types").json()["data"]]
    assert names == ["Logia", "Zoan"]


def test_search_is_case_insensitive_substring(client, seeded):
    r = client.get("/api/races", params={"search": "FISH"})
    assert [x["name"] for x in r.json()["data"]] == ["Fishman"]


def test_update_trims_and_clears_description(client, seeded, auth_headers):
    r = client.put(
        f"/api/races/{seeded.human}",
        json={"name": "  Human  ", "description": "   "},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Human"
    assert data["description"] is None


def test_empty_update_body(client, seeded, auth_headers, statements):
    r = client.put(f"/api/races/{seeded.human}", json={}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "NO_FIELDS_PROVIDED"
    assert statements == []
