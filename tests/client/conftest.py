"""
Fixtures for the client package tests.
"""

from __future__ import annotations

import pytest

from taskboard.client import (
    CredentialStore,
    DashboardElements,
    Element,
    TaskApiClient,
)

from .fakes import BASE_URL, FakeSession


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def store() -> CredentialStore:
    store = CredentialStore()
    store.save("stored-token", {"id": 1, "name": "Ada", "email": "ada@example.com"})
    return store


@pytest.fixture
def api(fake_session, store) -> TaskApiClient:
    return TaskApiClient(BASE_URL, store, session=fake_session)


@pytest.fixture
def elements() -> DashboardElements:
    return DashboardElements(
        tasks=Element("tasksList"),
        total=Element("totalTasks"),
        completed=Element("completedTasks"),
        alert=Element("alertContainer"),
        user_name=Element("userName"),
    )


@pytest.fixture
def navigation() -> list[str]:
    return []
