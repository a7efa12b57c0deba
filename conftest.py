"""Shared pytest fixtures: an app on a throwaway SQLite file per test."""

import pytest
from fastapi.testclient import TestClient

from tasktracker.app import create_app
from tasktracker.config import Settings
from tasktracker.database import init_db

DEFAULT_PASSWORD = "secret123"


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        secret_key="test-secret-key",
        bcrypt_rounds=4,
        max_page_limit=50,
        log_level="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app):
    init_db(app.state.engine)
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, name: str, email: str, role: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    body["headers"] = auth_headers(body["token"])
    return body


@pytest.fixture()
def admin(client):
    return register(client, "Admin User", "admin@example.com", "admin")


@pytest.fixture()
def employee(client):
    return register(client, "John Doe", "john@example.com", "employee")


@pytest.fixture()
def other_employee(client):
    return register(client, "Jane Smith", "jane@example.com", "employee")


@pytest.fixture()
def make_task(client, admin):
    """Create a task as admin and return the response body"""

    def _make(assignee: dict, title: str = "Fix bug", due_date: str = "2024-02-10", description: str = "Steps in ticket"):
        response = client.post(
            "/api/tasks",
            json={
                "title": title,
                "description": description,
                "assignedTo": assignee["user"]["id"],
                "dueDate": due_date,
            },
            headers=admin["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make
