"""
Page controllers for the Taskboard client.

Each page gets its element handles, the API client, the credential store
and two callables from its host: ``navigate(path)`` to change page and,
for the dashboard, ``confirm(question) -> bool`` for destructive actions.

The dashboard never edits its task list locally.  After every successful
mutation it re-reads the full list from the server; on failure it shows an
alert and leaves the rendered list as it was.  A 401 at any point signs
the user out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..models import TaskStatus
from .api import ApiClientError, AuthenticationRequired, TaskApiClient
from .render import Element, clear_alert, render_alert, render_tasks
from .storage import CredentialStore

logger = logging.getLogger(__name__)

LOGIN_PATH = "/"
REGISTER_PATH = "/register"
DASHBOARD_PATH = "/dashboard"

DELETE_CONFIRMATION = "Are you sure you want to delete this task?"

Navigate = Callable[[str], None]
Confirm = Callable[[str], bool]


@dataclass
class DashboardElements:
    tasks: Element
    total: Element
    completed: Element
    alert: Element
    user_name: Element


class DashboardPage:
    """Task list with add, status change and delete actions."""

    def __init__(
        self,
        api: TaskApiClient,
        store: CredentialStore,
        elements: DashboardElements,
        *,
        navigate: Navigate,
        confirm: Confirm,
    ):
        self.api = api
        self.store = store
        self.elements = elements
        self.navigate = navigate
        self.confirm = confirm
        self.tasks: list[dict[str, Any]] = []

    def load(self) -> bool:
        """Enter the page; signed-out users are sent to the login page."""
        if not self.store.get_token():
            self.navigate(LOGIN_PATH)
            return False
        self.elements.user_name.set_text(self.store.get_user().get("name") or "User")
        return self.refresh()

    def refresh(self) -> bool:
        try:
            tasks = self.api.list_tasks()
        except AuthenticationRequired:
            self.logout()
            return False
        except ApiClientError as exc:
            logger.error("Failed to fetch tasks: %s", exc.message)
            render_alert(self.elements.alert, exc.message)
            return False

        self.tasks = tasks
        render_tasks(
            tasks,
            list_element=self.elements.tasks,
            total_element=self.elements.total,
            completed_element=self.elements.completed,
        )
        return True

    def _mutate(self, action: Callable[[], Any]) -> bool:
        try:
            action()
        except AuthenticationRequired:
            self.logout()
            return False
        except ApiClientError as exc:
            render_alert(self.elements.alert, exc.message)
            return False

        clear_alert(self.elements.alert)
        return self.refresh()

    def add_task(self, title: str, description: str = "") -> bool:
        title = title.strip()
        if not title:
            render_alert(self.elements.alert, "Title is required")
            return False
        return self._mutate(lambda: self.api.create_task(title, description.strip()))

    def mark_done(self, task_id: str) -> bool:
        return self._mutate(lambda: self.api.set_status(task_id, TaskStatus.DONE.value))

    def mark_pending(self, task_id: str) -> bool:
        return self._mutate(lambda: self.api.set_status(task_id, TaskStatus.PENDING.value))

    def toggle(self, task_id: str) -> bool:
        return self._mutate(lambda: self.api.toggle_task(task_id))

    def delete_task(self, task_id: str) -> bool:
        if not self.confirm(DELETE_CONFIRMATION):
            return False
        return self._mutate(lambda: self.api.delete_task(task_id))

    def logout(self) -> None:
        self.store.clear()
        self.navigate(LOGIN_PATH)


class LoginPage:
    def __init__(
        self,
        api: TaskApiClient,
        store: CredentialStore,
        alert: Element,
        *,
        navigate: Navigate,
    ):
        self.api = api
        self.store = store
        self.alert = alert
        self.navigate = navigate

    def load(self) -> bool:
        """Skip the form when a token is already stored."""
        if self.store.get_token():
            self.navigate(DASHBOARD_PATH)
            return False
        return True

    def submit(self, email: str, password: str) -> bool:
        try:
            token, user = self.api.login(email.strip(), password)
        except ApiClientError as exc:
            render_alert(self.alert, exc.message or "Login failed")
            return False

        self.store.save(token, user)
        render_alert(self.alert, "Login successful! Redirecting...", kind="success")
        self.navigate(DASHBOARD_PATH)
        return True


class RegisterPage:
    def __init__(self, api: TaskApiClient, alert: Element, *, navigate: Navigate):
        self.api = api
        self.alert = alert
        self.navigate = navigate

    def submit(self, name: str, email: str, password: str) -> bool:
        try:
            self.api.register(name.strip(), email.strip(), password)
        except ApiClientError as exc:
            render_alert(self.alert, exc.message or "Registration failed")
            return False

        render_alert(
            self.alert, "Registration successful! Redirecting to login...", kind="success"
        )
        self.navigate(LOGIN_PATH)
        return True
