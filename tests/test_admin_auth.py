import pytest

from app.core.config import settings
from app.core.errors import ValidationFailed
from app.core.security import ADMIN_SCOPE, create_access_token, create_refresh_token, hash_password
from app.services import admin_service
from tests.factories import auth_headers


def login(client, email="admin@example.com", password="correct-horse", path="/api/admin/login"):
    return client.post(path, json={"email": email, "password": password})


def test_login_returns_tokens_and_sets_cookie(client, admin_user):
    r = login(client)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["access_token"] and body["refresh_token"]
    assert body["admin"]["email"] == "admin@example.com"
    assert "password_hash" not in body["admin"]
    assert settings.ADMIN_COOKIE_NAME in r.cookies
    assert "httponly" in r.headers["set-cookie"].lower()


@pytest.mark.parametrize("path", ["/api/admin/login-db", "/api/admin/login-simple"])
def test_legacy_login_paths(client, admin_user, path):
    assert login(client, path=path).status_code == 200


def test_login_is_case_insensitive_on_email(client, admin_user):
    assert login(client, email="  ADMIN@example.com ").status_code == 200


def test_login_failures(client, db, admin_user):
    assert login(client, password="wrong").status_code == 401
    assert login(client, email="nobody@example.com").status_code == 401
    assert login(client, email="", password="").status_code == 400

    admin_user.active = False
    db.commit()
    assert login(client).status_code == 401


def test_login_records_last_login(client, db, admin_user):
    assert admin_user.last_login_at is None
    login(client)
    db.refresh(admin_user)
    assert admin_user.last_login_at is not None


def test_cookie_session(client, admin_user):
    login(client)
    r = client.get("/api/admin/me")
    assert r.status_code == 200
    assert r.json()["admin"]["role"] == "admin"
    assert client.get("/api/admin/auth").json() == {"success": True, "message": "Authenticated"}

    client.post("/api/admin/logout")
    assert client.get("/api/admin/me").status_code == 401


def test_bearer_session(client, admin_headers):
    assert client.get("/api/admin/me", headers=admin_headers).status_code == 200


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer not-a-jwt"},
    {"Authorization": "Bearer " + create_refresh_token("someone", ADMIN_SCOPE)},
])
def test_rejected_tokens(client, headers):
    assert client.get("/api/admin/auth", headers=headers).status_code == 401


def test_expired_token(client, admin_user):
    token = create_access_token(admin_user.id, ADMIN_SCOPE, expires_minutes=-1)
    assert client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_customer_token_is_not_an_admin_token(client, customer_headers):
    assert client.get("/api/admin/me", headers=customer_headers).status_code == 401


def test_deactivated_admin_loses_access(client, db, admin_user, admin_headers):
    admin_user.active = False
    db.commit()
    assert client.get("/api/admin/me", headers=admin_headers).status_code == 401


def test_refresh(client, admin_user):
    refresh = login(client).json()["refresh_token"]
    r = client.post("/api/admin/refresh", json={"refresh_token": refresh})
    assert r.status_code == 200
    assert r.json()["access_token"]
    # an access token is not accepted as a refresh token
    access = create_access_token(admin_user.id, ADMIN_SCOPE)
    assert client.post("/api/admin/refresh", json={"refresh_token": access}).status_code == 401


def test_create_admin_requires_super_admin(client, admin_headers):
    body = {"email": "new@example.com", "password": "long-enough", "role": "manager"}
    assert client.post("/api/admin/create", json=body, headers=admin_headers).status_code == 403


def test_create_then_update_admin(client, super_admin):
    headers = auth_headers(super_admin.id)
    body = {"email": "New@Example.com", "password": "long-enough", "full_name": "New", "role": "manager"}
    r = client.post("/api/admin/create", json=body, headers=headers)
    assert r.status_code == 200
    assert r.json()["created"] is True
    assert r.json()["admin"]["email"] == "new@example.com"

    body["role"] = "admin"
    r = client.post("/api/admin/create", json=body, headers=headers)
    assert r.json()["created"] is False
    assert r.json()["admin"]["role"] == "admin"

    body["password"] = "short"
    assert client.post("/api/admin/create", json=body, headers=headers).status_code == 400


def test_upsert_admin_validation(db):
    with pytest.raises(ValidationFailed):
        admin_service.upsert_admin(db, "not-an-email", "long-enough")
    with pytest.raises(ValidationFailed):
        admin_service.upsert_admin(db, "a@example.com", "long-enough", role="owner")


def test_check_lists_admins_without_hashes(client, super_admin, admin_user, admin_headers):
    body = client.get("/api/admin/check", headers=admin_headers).json()
    assert body["success"] is True
    assert body["adminCount"] == 2
    assert all("password_hash" not in a for a in body["admins"])


def test_password_diagnostic(client, admin_headers):
    known = hash_password("pa55word")
    r = client.post("/api/admin/test-password", json={"password": "pa55word", "hash": known}, headers=admin_headers)
    tests = r.json()["tests"]
    assert tests["newHash"]["matches"] is True
    assert tests["suppliedHash"]["matches"] is True
    r = client.post("/api/admin/test-password", json={"password": "x", "hash": "garbage"}, headers=admin_headers)
    assert r.json()["tests"]["suppliedHash"]["matches"] is False


def test_customer_signup_and_login(client):
    r = client.post("/api/auth/signup", json={"email": "Mehmet@Example.com", "password": "secret1"})
    assert r.status_code == 201
    token = r.json()["access_token"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    assert me["email"] == "mehmet@example.com"
    assert me["role"] == "customer"

    assert client.post("/api/auth/signup", json={"email": "mehmet@example.com", "password": "secret1"}).status_code == 409
    assert client.post("/api/auth/signup", json={"email": "x@example.com", "password": "123"}).status_code == 400
    assert client.post("/api/auth/login", json={"email": "mehmet@example.com", "password": "secret1"}).status_code == 200
    assert client.post("/api/auth/login", json={"email": "mehmet@example.com", "password": "nope"}).status_code == 401


def test_admin_token_is_not_a_customer_token(client, admin_headers):
    assert client.get("/api/auth/me", headers=admin_headers).status_code == 401
