from datetime import timedelta

from conftest import auth_headers, register
from tasktracker.config import Settings
from tasktracker.models.user import User, UserRole
from tasktracker.services.auth_service import AuthService
from tasktracker.utils.security import Identity, create_access_token, token_for


def test_register_returns_token_and_public_user(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Admin User", "email": "admin@example.com", "password": "admin123", "role": "admin"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert set(body["user"]) == {"id", "name", "email", "role"}
    assert body["user"]["role"] == "admin"


def test_duplicate_registration_is_rejected_without_new_record(client, db, employee):
    response = client.post(
        "/api/auth/register",
        json={"name": "Someone Else", "email": "john@example.com", "password": "another1", "role": "admin"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"
    assert db.query(User).filter(User.email == "john@example.com").count() == 1


def test_email_is_matched_case_insensitively(client, employee):
    response = client.post(
        "/api/auth/register",
        json={"name": "Shouty", "email": "JOHN@Example.com", "password": "another1", "role": "employee"},
    )
    assert response.status_code == 400

    response = client.post("/api/auth/login", json={"email": "John@Example.COM", "password": "secret123"})
    assert response.status_code == 200


def test_register_validation_errors_are_field_level(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "", "email": "not-an-email", "password": "123", "role": "manager"},
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"name", "email", "password", "role"}


def test_login_success(client, employee):
    response = client.post("/api/auth/login", json={"email": "john@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == employee["user"]["id"]
    assert "hashed_password" not in body["user"]


def test_wrong_password_and_unknown_email_fail_identically(client, employee):
    wrong_password = client.post("/api/auth/login", json={"email": "john@example.com", "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials"}


def test_login_requires_password(client):
    response = client.post("/api/auth/login", json={"email": "john@example.com", "password": ""})
    assert response.status_code == 400


def test_me_returns_profile(client, employee):
    response = client.get("/api/auth/me", headers=employee["headers"])
    assert response.status_code == 200
    assert response.json() == {"user": employee["user"]}


def test_me_for_vanished_user_is_404(client, settings):
    token = token_for(Identity(id=999, email="gone@example.com", role=UserRole.EMPLOYEE), settings)
    response = client.get("/api/auth/me", headers=auth_headers(token))
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_expired_token_is_rejected(client, settings, employee):
    token = create_access_token(
        {"sub": "john@example.com", "id": employee["user"]["id"], "email": "john@example.com", "role": "employee"},
        settings,
        expires_delta=timedelta(seconds=-5),
    )
    assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 401


def test_token_signed_with_other_key_is_rejected(client, settings, employee):
    settings_copy = Settings(secret_key="some-other-key")
    token = token_for(Identity(id=employee["user"]["id"], email="john@example.com", role=UserRole.EMPLOYEE), settings_copy)
    assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 401


def test_malformed_token_is_rejected(client):
    response = client.get("/api/tasks", headers=auth_headers("not.a.jwt"))
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_registered_admin_can_use_admin_routes(client):
    admin = register(client, "Boss", "boss@example.com", "admin")
    assert client.get("/api/tasks/users", headers=admin["headers"]).status_code == 200


def test_bearer_tokens_are_resolved_by_the_auth_service(client, employee, monkeypatch):
    seen = []
    authenticate = AuthService.authenticate

    def recording(self, token):
        seen.append(token)
        return authenticate(self, token)

    monkeypatch.setattr(AuthService, "authenticate", recording)
    assert client.get("/api/auth/me", headers=employee["headers"]).status_code == 200
    assert seen == [employee["token"]]


def test_me_hides_unexpected_errors(client, employee, monkeypatch):
    def broken(self, user_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(AuthService, "get_current_user", broken)
    response = client.get("/api/auth/me", headers=employee["headers"])
    assert response.status_code == 500
    assert response.json() == {"detail": "Could not load user"}
