"""
Shared pytest fixtures for the Taskboard test suite.

Provides the Flask application, test client, a clean database per test,
bearer tokens for two users, and Faker-backed factories for users and
tasks.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from faker import Faker

from tests.helpers import (
    DEFAULT_PASSWORD,
    TEST_PRIVATE_KEY,
    TEST_PUBLIC_KEY,
    auth_headers,
    create_test_token,
)

os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ["TEST_JWT_PUBLIC_KEY"] = TEST_PUBLIC_KEY

from taskboard import create_app, db
from taskboard.models import Task, TaskStatus, User

fake = Faker()



# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """Flask application built once with the ``testing`` profile."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """A fresh test client per test."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Clean database for each test.

    Tables are created before the test and dropped afterwards.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def single_user_mode(app):
    """Turn off mandatory authentication for the duration of a test."""
    app.config["AUTH_REQUIRED"] = False
    yield app
    app.config["AUTH_REQUIRED"] = True


# -----------------------------------------------------------------------------
# Credential Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def test_token() -> str:
    """Valid token for user_id=1."""
    return create_test_token(user_id=1, email="user_one@example.com")


@pytest.fixture
def second_user_token() -> str:
    """Valid token for user_id=2, used by tenant-isolation tests."""
    return create_test_token(user_id=2, email="user_two@example.com")


@pytest.fixture
def api_headers(test_token) -> dict[str, str]:
    return auth_headers(test_token)


@pytest.fixture
def second_user_headers(second_user_token) -> dict[str, str]:
    return auth_headers(second_user_token)


# -----------------------------------------------------------------------------
# Test Data Factories
# -----------------------------------------------------------------------------


@pytest.fixture
def user_factory(db_session) -> Callable[..., User]:
    """Create and persist users; the password defaults to ``DEFAULT_PASSWORD``."""

    def _create_user(
        *,
        name: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(name=name or fake.name(), email=(email or fake.unique.email()).lower())
        user.set_password(password)
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def task_factory(db_session) -> Callable[..., Task]:
    """
    Create and persist tasks.

    ``age_minutes`` backdates ``created_at`` so ordering tests do not depend
    on clock resolution.
    """

    def _create_task(
        *,
        user_id: int | None = 1,
        title: str | None = None,
        description: str | None = None,
        status: str = TaskStatus.PENDING.value,
        age_minutes: int = 0,
    ) -> Task:
        created_at = datetime.now(timezone.utc) - timedelta(minutes=age_minutes)
        task = Task(
            user_id=user_id,
            title=title or fake.sentence(nb_words=4),
            description=description if description is not None else fake.paragraph(),
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """A single pending task owned by user_id=1."""
    return task_factory(
        user_id=1,
        title="Sample Task",
        description="This is a sample task for testing",
        status=TaskStatus.PENDING.value,
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """Three tasks for user_id=1, created oldest to newest."""
    return [
        task_factory(user_id=1, title="Oldest Task", age_minutes=30),
        task_factory(user_id=1, title="Middle Task", status=TaskStatus.DONE.value, age_minutes=20),
        task_factory(user_id=1, title="Newest Task", age_minutes=10),
    ]


@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    return {"title": "Test Task", "description": "This is a test task description"}


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    return {"title": "Minimal Task"}
