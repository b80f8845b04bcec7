"""
HTTP client for the Taskboard API.

Wraps a ``requests.Session`` and turns the API's response envelope into
either the payload or an exception.  The stored bearer token is attached to
every authenticated call.  Nothing is retried: a failed call raises at once.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from .storage import CredentialStore

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """
    A request failed or the server answered with ``success: false``.

    Attributes:
        status_code: HTTP status of the response, or ``None`` when the
            server could not be reached.
        message: Human-readable message suitable for showing to the user.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AuthenticationRequired(ApiClientError):
    """The server rejected the stored credential (HTTP 401)."""


class TaskApiClient:
    """
    Client for the task and account endpoints.

    Args:
        base_url: Origin of the API server, e.g. ``"http://localhost:5000"``.
        store: Where the bearer token is read from.
        session: HTTP session to use; a fresh ``requests.Session`` by default.
        timeout: Per-request timeout in seconds; ``None`` waits indefinitely.
    """

    def __init__(
        self,
        base_url: str,
        store: CredentialStore,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if json is not None:
            headers["Content-Type"] = "application/json"
        if authenticated:
            token = self.store.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.session.request(
                method=method,
                url=self._url(path),
                headers=headers,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiClientError("Unable to reach the server. Please try again.") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            payload = {}

        message = payload.get("message") or f"Request failed with status {response.status_code}"
        if response.status_code == 401:
            raise AuthenticationRequired(message, status_code=401)
        if response.status_code >= 400 or not payload.get("success"):
            raise ApiClientError(message, status_code=response.status_code)
        return payload

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/tasks")["tasks"]

    def create_task(self, title: str, description: str = "") -> dict[str, Any]:
        body = {"title": title, "description": description}
        return self._request("POST", "/api/tasks", json=body)["task"]

    def set_status(self, task_id: str, status: str) -> dict[str, Any]:
        return self._request("PATCH", f"/api/tasks/{task_id}", json={"status": status})["task"]

    def toggle_task(self, task_id: str) -> dict[str, Any]:
        return self._request("POST", f"/api/tasks/{task_id}/toggle")["task"]

    def delete_task(self, task_id: str) -> str:
        return self._request("DELETE", f"/api/tasks/{task_id}")["message"]

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        body = {"name": name, "email": email, "password": password}
        return self._request("POST", "/api/register", json=body, authenticated=False)["user"]

    def login(self, email: str, password: str) -> tuple[str, dict[str, Any]]:
        """Return ``(token, user)`` for valid credentials."""
        body = {"email": email, "password": password}
        payload = self._request("POST", "/api/login", json=body, authenticated=False)
        return payload["token"], payload["user"]
