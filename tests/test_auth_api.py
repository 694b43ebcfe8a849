from datetime import timedelta

from socialfeed.core.security import create_access_token
from socialfeed.modules.auth.services import auth as auth_service

from conftest import PASSWORD, auth_headers, register


def test_register_returns_public_user_and_token(client) -> None:
    response = register(client, name="  Alice  ", email="Alice@X.com")
    assert response.status_code == 201
    data = response.json()

    user = data["user"]
    assert set(user) == {"id", "name", "email", "profile_picture_url", "created_at"}
    assert user["name"] == "Alice"
    assert user["email"] == "alice@x.com"
    assert user["profile_picture_url"] is None
    assert data["token"]


def test_register_then_login(client) -> None:
    register(client)
    response = client.post("/api/login", json={"email": "alice@x.com", "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"id", "name", "email", "token"}
    assert data["email"] == "alice@x.com"

    profile = client.get("/api/profile", headers=auth_headers(data["token"]))
    assert profile.status_code == 200


def test_login_is_case_insensitive_on_email(client) -> None:
    register(client)
    response = client.post("/api/login", json={"email": "ALICE@x.com", "password": PASSWORD})
    assert response.status_code == 200


def test_duplicate_email_conflicts_case_insensitively(client) -> None:
    assert register(client, email="alice@x.com").status_code == 201
    response = register(client, name="Other", email="ALICE@X.COM")
    assert response.status_code == 409
    assert response.json() == {"message": "User already exists"}


def test_unique_index_rejects_duplicate_email(client, monkeypatch) -> None:
    assert register(client, email="alice@x.com").status_code == 201

    # Without the lookup, only the unique index on users.email stands in the way
    monkeypatch.setattr(auth_service, "get_user_by_email", lambda *args: None)

    response = register(client, name="Other", email="Alice@X.com")
    assert response.status_code == 409
    assert response.json() == {"message": "User already exists"}


def test_register_validation_errors(client) -> None:
    response = client.post(
        "/api/register",
        json={"name": "", "email": "nope", "password": "short", "password_confirmation": "other"},
    )
    assert response.status_code == 400
    body = response.json()
    assert [e["field"] for e in body["errors"]] == [
        "name", "email", "password", "password_confirmation"
    ]
    assert "Name is required" in body["message"]


def test_register_with_empty_body(client) -> None:
    response = client.post("/api/register", json={})
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 4


def test_wrong_password_and_unknown_email_look_identical(client) -> None:
    register(client)
    wrong_password = client.post("/api/login", json={"email": "alice@x.com", "password": "wrongpass1"})
    unknown_email = client.post("/api/login", json={"email": "nobody@x.com", "password": PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid credentials"}


def test_login_requires_fields(client) -> None:
    response = client.post("/api/login", json={"email": "alice@x.com"})
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "password", "message": "Password is required"}]


def test_logout_with_valid_token(client, alice) -> None:
    _, headers = alice
    response = client.post("/api/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Successfully logged out"}


def test_logout_without_token(client) -> None:
    response = client.post("/api/logout")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_guard_rejects_bad_tokens(client, settings, alice) -> None:
    user, _ = alice
    expired = create_access_token(settings, user["id"], expires_delta=timedelta(seconds=-5))
    ghost = create_access_token(settings, "3f0b7c1e-4a52-4a8e-9a43-0d1f2f0c9a11")

    for token in ["garbage", expired, ghost]:
        response = client.get("/api/profile", headers=auth_headers(token))
        assert response.status_code == 401, token


def test_stored_password_is_hashed(client, db) -> None:
    from socialfeed.modules.user_management.services.user import get_user_by_email

    register(client)
    user = get_user_by_email(db, "alice@x.com")
    assert user.hashed_password != PASSWORD
    assert user.hashed_password.startswith("$2")
