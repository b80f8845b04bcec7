"""
Database models for Taskboard.

``Task`` is the single tracked resource; ``User`` backs registration,
login and task ownership.  Both serialise themselves with ``to_dict`` for
JSON responses, with datetimes normalised to UTC ISO-8601 strings.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from . import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


_creation_lock = threading.Lock()
_last_creation_time: datetime | None = None


def _creation_time() -> datetime:
    """
    Strictly increasing UTC timestamp for ``Task.created_at``.

    Back-to-back creates can read the same clock value; each call returns
    at least one microsecond more than the previous one so the listing
    order always matches creation order within a process.
    """
    global _last_creation_time
    with _creation_lock:
        now = _utcnow()
        if _last_creation_time is not None and now <= _last_creation_time:
            now = _last_creation_time + timedelta(microseconds=1)
        _last_creation_time = now
        return now


def _new_task_id() -> str:
    return uuid.uuid4().hex


def _to_utc_iso(value: datetime | None) -> str | None:
    """
    Convert a datetime to a UTC ISO-8601 string.

    SQLite hands back naive datetimes even for timezone-aware columns, so
    naive values are assumed to be UTC already.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


class TaskStatus(str, Enum):
    """
    Task lifecycle status.

    Inherits from ``str`` so members compare equal to the raw strings stored
    in the database and serialise directly to JSON.
    """

    PENDING = "Pending"
    DONE = "Done"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    def toggled(self) -> TaskStatus:
        """Return the opposite status."""
        return TaskStatus.PENDING if self is TaskStatus.DONE else TaskStatus.DONE


class User(db.Model):
    """
    Registered account.

    Only a Werkzeug password hash is persisted, and ``to_dict`` leaves it
    out so the result can be returned directly from the API.

    Attributes:
        id: Auto-incrementing primary key; the ``user_id`` claim of issued
            tokens.
        name: Display name (max 80 characters).
        email: Unique, lower-cased login identifier (max 120 characters).
        password_hash: Werkzeug-generated hash.
        created_at: Account creation time (UTC).
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(80), nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": _to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Task(db.Model):
    """
    A to-do item, optionally owned by a user.

    Attributes:
        id: Opaque hex identifier assigned at creation.
        user_id: Owning user's id, or ``None`` for anonymous tasks created
            while authentication is not enforced.  Indexed because every
            query is scoped by it.
        title: Non-empty summary (max 200 characters).
        description: Free text, empty by default.
        status: ``Pending`` or ``Done`` (see ``TaskStatus``).
        created_at: Creation time (UTC); the listing sort key.
        updated_at: Last modification time (UTC).
    """

    __tablename__ = "tasks"

    id: str = db.Column(db.String(32), primary_key=True, default=_new_task_id)
    user_id: int | None = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: str = db.Column(db.String(200), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    status: str = db.Column(db.String(20), nullable=False, default=TaskStatus.PENDING.value)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_creation_time, index=True
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "created_at": _to_utc_iso(self.created_at),
            "updated_at": _to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
