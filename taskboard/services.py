"""
Task and account persistence operations.

Every task operation takes the owning ``user_id`` (``None`` for anonymous
tasks) and scopes its query by it, so a task that exists but belongs to
someone else is indistinguishable from one that does not exist.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Select

from . import db
from .errors import ConflictError, NotFoundError
from .models import Task, TaskStatus, User
from .schemas import CreateTaskCommand, RegisterCommand, UpdateStatusCommand

logger = logging.getLogger(__name__)


def _owned_tasks(user_id: int | None) -> Select:
    """Base ``select`` restricted to the tasks of *user_id*."""
    if user_id is None:
        return select(Task).where(Task.user_id.is_(None))
    return select(Task).where(Task.user_id == user_id)


def list_tasks(user_id: int | None) -> list[Task]:
    """Return the owner's tasks, newest first; equal timestamps fall back to id order."""
    stmt = _owned_tasks(user_id).order_by(Task.created_at.desc(), Task.id.desc())
    return list(db.session.scalars(stmt).all())


def get_task(task_id: str, user_id: int | None) -> Task:
    """
    Fetch one of the owner's tasks.

    Raises:
        NotFoundError: If no task with *task_id* belongs to *user_id*.
    """
    task = db.session.scalar(_owned_tasks(user_id).where(Task.id == task_id))
    if task is None:
        raise NotFoundError("Task not found")
    return task


def create_task(command: CreateTaskCommand, user_id: int | None) -> Task:
    task = Task(
        user_id=user_id,
        title=command.title,
        description=command.description,
        status=TaskStatus.PENDING.value,
    )
    db.session.add(task)
    db.session.commit()
    logger.info("Created task %s for user_id=%s", task.id, user_id)
    return task


def update_task_status(task_id: str, command: UpdateStatusCommand, user_id: int | None) -> Task:
    task = get_task(task_id, user_id)
    task.status = command.status.value
    db.session.commit()
    logger.info("Set task %s status to %s", task_id, command.status.value)
    return task


def toggle_task(task_id: str, user_id: int | None) -> Task:
    """Flip the task between ``Pending`` and ``Done``."""
    task = get_task(task_id, user_id)
    task.status = TaskStatus(task.status).toggled().value
    db.session.commit()
    logger.info("Toggled task %s to %s", task_id, task.status)
    return task


def delete_task(task_id: str, user_id: int | None) -> None:
    task = get_task(task_id, user_id)
    db.session.delete(task)
    db.session.commit()
    logger.info("Deleted task %s", task_id)


def register_user(command: RegisterCommand) -> User:
    """
    Create a new account.

    Raises:
        ConflictError: If the email address is already registered.
    """
    existing = db.session.scalar(select(User).where(User.email == command.email))
    if existing is not None:
        raise ConflictError("User already exists")

    user = User(name=command.name, email=command.email)
    user.set_password(command.password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email.
        db.session.rollback()
        raise ConflictError("User already exists") from exc
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(email: str, password: str) -> User | None:
    """Return the user matching the credentials, or ``None``."""
    user = db.session.scalar(select(User).where(User.email == email))
    if user is None or not user.check_password(password):
        return None
    return user
