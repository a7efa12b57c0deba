# tasktracker/client/api.py
# Thin HTTP client for the Task Tracker API; holds the signed-in session

import logging
from typing import Any, Dict, List, Optional

import requests

from tasktracker.client.formatting import build_query

logger = logging.getLogger(__name__)

BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """A request failed; ``message`` is safe to show to the user"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TaskTrackerClient:
    def __init__(self, base_url: str = BASE_URL, session=None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    def fork(self) -> "TaskTrackerClient":
        """Same sign-in on a separate HTTP session, for use from another thread.

        An injected session is shared as is; the caller owns its thread safety.
        """
        other = TaskTrackerClient(
            self.base_url,
            session=None if self._owns_session else self.session,
            timeout=self.timeout,
        )
        other.token = self.token
        other.user = self.user
        return other

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, json=None, params=None, auth: bool = True):
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        kwargs = {"headers": headers, "json": json, "params": params}
        # requests needs an explicit timeout; test clients may not accept one
        if isinstance(self.session, requests.Session):
            kwargs["timeout"] = self.timeout

        try:
            response = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            logger.error("Request %s %s failed: %s", method, path, e)
            raise ApiError("Could not reach the server")

        if response.status_code >= 400:
            raise ApiError(_error_message(response), response.status_code)
        return response.json()

    # Authentication

    def _remember(self, payload: dict) -> dict:
        self.token = payload["token"]
        self.user = payload["user"]
        return self.user

    def register(self, name: str, email: str, password: str, role: str = "employee", sign_in: bool = True) -> dict:
        """Create an account. With ``sign_in=False`` the current session is kept
        (how an admin adds employees)."""
        payload = self._request(
            "POST",
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
            auth=False,
        )
        if sign_in:
            return self._remember(payload)
        return payload["user"]

    def login(self, email: str, password: str) -> dict:
        payload = self._request("POST", "/api/auth/login", json={"email": email, "password": password}, auth=False)
        return self._remember(payload)

    def logout(self) -> None:
        self.token = None
        self.user = None

    def me(self) -> dict:
        return self._request("GET", "/api/auth/me")["user"]

    def health(self) -> dict:
        return self._request("GET", "/api/health", auth=False)

    # Tasks

    def list_tasks(self, status: str = "", assigned_to: Any = "", page: int = 1, limit: int = 10) -> dict:
        params = build_query({"status": status, "assignedTo": assigned_to, "page": page, "limit": limit})
        return self._request("GET", "/api/tasks", params=params)

    def get_task(self, task_id: Any) -> dict:
        return self._request("GET", f"/api/tasks/{task_id}")

    def create_task(self, title: str, description: str, assigned_to: Any, due_date: str) -> dict:
        return self._request(
            "POST",
            "/api/tasks",
            json={"title": title, "description": description, "assignedTo": assigned_to, "dueDate": due_date},
        )

    def update_task(self, task_id: Any, **fields) -> dict:
        """Send only the given fields: title, description, dueDate, status"""
        return self._request("PUT", f"/api/tasks/{task_id}", json=fields)

    def delete_task(self, task_id: Any) -> dict:
        return self._request("DELETE", f"/api/tasks/{task_id}")

    def list_employees(self) -> List[dict]:
        return self._request("GET", "/api/tasks/users")


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Request failed with status {response.status_code}"

    detail = body.get("detail") if isinstance(body, dict) else None
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        return "; ".join(e.get("message", "Invalid value") for e in errors)
    if isinstance(detail, str):
        return detail
    return f"Request failed with status {response.status_code}"
