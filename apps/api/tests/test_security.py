from __future__ import annotations

from dataclasses import replace

import jwt
import pytest

from app.core.config import get_settings
from app.core.errors import CatalogError
from app.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_token_round_trip_carries_role():
    claims = decode_access_token(create_access_token("admin"))
    assert claims["sub"] == "admin"
    assert claims["role"] == "admin"
    assert claims["exp"] > claims["iat"]


def test_missing_secret_is_a_configuration_error():
    settings = replace(get_settings(), jwt_secret=None)
    with pytest.raises(CatalogError) as exc:
        create_access_token("admin", settings=settings)
    assert exc.value.code == "AUTH_NOT_CONFIGURED"
    assert exc.value.status_code == 500


def test_password_hash_check():
    hashed = hash_password("sanji", rounds=4)
    assert verify_password("sanji", hashed)
    assert not verify_password("zoro", hashed)
    assert not verify_password("sanji", "not-a-bcrypt-hash")


@pytest.mark.parametrize(
    "header, code",
    [
        (None, "NO_TOKEN"),
        ("Token abc", "BAD_FORMAT"),
        ("Bearer", "BAD_FORMAT"),
        ("Bearer a b", "BAD_FORMAT"),
        ("bearer abc", "BAD_FORMAT"),
        ("Bearer not.a.jwt", "INVALID_TOKEN"),
    ],
)
def test_gate_rejections(client, header, code):
    headers = {"Authorization": header} if header is not None else {}
    r = client.get("/api/auth/verify", headers=headers)
    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["error"] == code
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_expired_token_reports_expiry(client):
    token = create_access_token("admin", settings=replace(get_settings(), jwt_expires_in=-30))
    r = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["error"] == "INVALID_TOKEN"
    assert r.json()["message"] == "Token expired"


def test_token_signed_with_another_secret_is_rejected(client):
    s = get_settings()
    forged = jwt.encode({"sub": "admin", "role": "admin"}, "another-secret", algorithm=s.jwt_algorithm)
    r = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"


def test_valid_token_exposes_claims(client, auth_headers):
    r = client.get("/api/auth/verify", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["user"]["username"] == "admin"
