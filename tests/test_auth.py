from datetime import timedelta

import pytest

from smartnotes.core.exceptions import AuthError
from smartnotes.services import auth_service
from smartnotes.services.token_service import create_access_token, decode_access_token, verify_token


def test_register_returns_token_and_public_user(client) -> None:
    response = client.post(
        "/api/auth/register", json={"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"}
    )

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"token", "user"}
    assert set(body["user"]) == {"id", "name", "email"}
    assert body["user"]["name"] == "Ana"
    assert body["user"]["email"] == "ana@example.com"
    assert decode_access_token(body["token"])["sub"] == body["user"]["id"]


def test_register_stores_hash_not_password(client, db) -> None:
    client.post("/api/auth/register", json={"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"})

    stored = db["user"].find_one({"email": "ana@example.com"})
    assert stored["password_hash"] != "s3cret-pass"
    assert stored["password_hash"].startswith("$argon2id$")
    assert auth_service.verify_password("s3cret-pass", stored["password_hash"])


def test_register_then_login(client, register) -> None:
    created = register()

    response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "s3cret-pass"})

    assert response.status_code == 200
    body = response.json()
    assert body["user"] == created["user"]
    assert decode_access_token(body["token"])["sub"] == created["user"]["id"]


def test_register_duplicate_email_conflicts(client, register) -> None:
    register()

    response = client.post(
        "/api/auth/register", json={"name": "Otra", "email": "ana@example.com", "password": "another-pass"}
    )

    assert response.status_code == 409
    assert response.json()["message"] == "Email already registered"


def test_register_duplicate_email_is_case_insensitive(client, register) -> None:
    register()

    response = client.post(
        "/api/auth/register", json={"name": "Otra", "email": "  ANA@Example.com ", "password": "another-pass"}
    )

    assert response.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "ana@example.com", "password": "x"},
        {"name": "Ana", "password": "x"},
        {"name": "Ana", "email": "ana@example.com"},
        {"name": "  ", "email": "ana@example.com", "password": "x"},
        {},
    ],
)
def test_register_missing_fields(client, payload) -> None:
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing fields"


def test_login_wrong_password_and_unknown_email_look_the_same(client, register) -> None:
    register()

    wrong = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "nope"})
    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "s3cret-pass"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["message"] == unknown.json()["message"] == "Invalid credentials"


def test_login_missing_fields(client) -> None:
    response = client.post("/api/auth/login", json={"email": "ana@example.com"})

    assert response.status_code == 400


def test_malformed_body_is_bad_request(client) -> None:
    response = client.post(
        "/api/auth/login", content="not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_verify_token_rejects_expired() -> None:
    token = create_access_token(user_id="abc", expires_in=timedelta(seconds=-30))

    with pytest.raises(AuthError) as exc:
        verify_token(token)
    assert exc.value.message == "Token expired"


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_verify_token_rejects_missing_or_malformed(token) -> None:
    with pytest.raises(AuthError):
        verify_token(token)


def test_token_expires_in_seven_days() -> None:
    payload = decode_access_token(create_access_token(user_id="abc"))

    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


def test_verify_password_handles_garbage_hash() -> None:
    assert auth_service.verify_password("x", "not-an-argon2-hash") is False
    assert auth_service.verify_password("x", None) is False
