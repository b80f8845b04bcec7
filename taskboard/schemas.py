"""
Request input schemas.

Each endpoint that accepts a body has a small frozen dataclass describing
its input.  ``from_json`` validates the raw JSON value at the request
boundary and either returns a typed command or raises ``ValidationError``,
so service code never touches an unchecked dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ValidationError
from .models import TaskStatus

TITLE_MAX_LENGTH = 200
NAME_MAX_LENGTH = 80
EMAIL_MAX_LENGTH = 120


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _required_text(data: dict[str, Any], field: str, label: str | None = None) -> str:
    """Return the stripped value of *field*, rejecting missing, non-string or blank values."""
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label or field.capitalize()} is required")
    return value.strip()


@dataclass(frozen=True)
class CreateTaskCommand:
    title: str
    description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> CreateTaskCommand:
        data = _require_object(data)
        title = _required_text(data, "title")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be {TITLE_MAX_LENGTH} characters or less")

        description = data.get("description")
        if description is None:
            description = ""
        if not isinstance(description, str):
            raise ValidationError("Description must be a string")
        return cls(title=title, description=description.strip())


@dataclass(frozen=True)
class UpdateStatusCommand:
    """
    Status change for ``PATCH /api/tasks/<id>``.

    An absent body or an absent ``status`` means "mark as done".
    """

    status: TaskStatus = TaskStatus.DONE

    @classmethod
    def from_json(cls, data: Any) -> UpdateStatusCommand:
        if data is None:
            return cls()
        data = _require_object(data)
        if "status" not in data or data["status"] is None:
            return cls()

        value = data["status"]
        if value not in TaskStatus.values():
            raise ValidationError(f"Invalid status. Must be one of: {TaskStatus.values()}")
        return cls(status=TaskStatus(value))


@dataclass(frozen=True)
class RegisterCommand:
    name: str
    email: str
    password: str

    @classmethod
    def from_json(cls, data: Any) -> RegisterCommand:
        data = _require_object(data)
        name = _required_text(data, "name")
        email = _required_text(data, "email").lower()
        # Passwords are taken verbatim; only emptiness is checked.
        _required_text(data, "password")
        password = data["password"]

        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must be {NAME_MAX_LENGTH} characters or less")
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError(f"Email must be {EMAIL_MAX_LENGTH} characters or less")
        if "@" not in email:
            raise ValidationError("Email must be a valid email address")
        return cls(name=name, email=email, password=password)


@dataclass(frozen=True)
class LoginCommand:
    email: str
    password: str

    @classmethod
    def from_json(cls, data: Any) -> LoginCommand:
        data = _require_object(data)
        email = _required_text(data, "email").lower()
        _required_text(data, "password")
        return cls(email=email, password=data["password"])
