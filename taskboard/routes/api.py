"""
REST API endpoints for tasks.

Every task endpoint sits behind ``require_auth`` and is scoped to the
caller's ``g.user_id``.  Responses use the ``{"success": ..., ...}``
envelope; failures are raised as ``ApiError`` subclasses and rendered by
the application's error handlers.

Endpoints:
    GET    /api/health                 - Health check (public)
    GET    /api/tasks                  - List tasks, newest first
    GET    /api/tasks/<id>             - Retrieve a single task
    POST   /api/tasks                  - Create a task
    PATCH  /api/tasks/<id>             - Set the task status (default: Done)
    POST   /api/tasks/<id>/toggle      - Flip the task status
    DELETE /api/tasks/<id>             - Delete a task
"""

from __future__ import annotations

import logging
import os
from typing import Any

from flask import Blueprint, Response, g, jsonify, request

from .. import services
from ..auth import require_auth
from ..errors import ValidationError
from ..schemas import CreateTaskCommand, UpdateStatusCommand

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _json_body(*, optional: bool = False) -> Any:
    """
    Parse the request body as JSON.

    With *optional*, an empty body yields ``None`` instead of an error.
    """
    if optional and not request.get_data():
        return None
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be JSON")
    return data


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Liveness probe; no authentication required."""
    return jsonify(
        {
            "success": True,
            "status": "healthy",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200


@api_bp.route("/tasks", methods=["GET"])
@require_auth
def get_tasks() -> tuple[Response, int]:
    logger.info("GET /api/tasks - Fetching tasks for user_id=%s", g.user_id)
    tasks = services.list_tasks(g.user_id)
    return jsonify({"success": True, "tasks": [task.to_dict() for task in tasks]}), 200


@api_bp.route("/tasks/<string:task_id>", methods=["GET"])
@require_auth
def get_task(task_id: str) -> tuple[Response, int]:
    task = services.get_task(task_id, g.user_id)
    return jsonify({"success": True, "task": task.to_dict()}), 200


@api_bp.route("/tasks", methods=["POST"])
@require_auth
def create_task() -> tuple[Response, int]:
    """
    Create a task for the caller.

    Request Body (JSON):
        title: Task title (required, non-blank)
        description: Task description (optional)
    """
    command = CreateTaskCommand.from_json(_json_body())
    task = services.create_task(command, g.user_id)
    return jsonify({"success": True, "task": task.to_dict()}), 201


@api_bp.route("/tasks/<string:task_id>", methods=["PATCH"])
@require_auth
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Set a task's status.

    Request Body (JSON, optional):
        status: ``Pending`` or ``Done``; ``Done`` when omitted.
    """
    command = UpdateStatusCommand.from_json(_json_body(optional=True))
    task = services.update_task_status(task_id, command, g.user_id)
    return jsonify({"success": True, "task": task.to_dict()}), 200


@api_bp.route("/tasks/<string:task_id>/toggle", methods=["POST"])
@require_auth
def toggle_task(task_id: str) -> tuple[Response, int]:
    task = services.toggle_task(task_id, g.user_id)
    return jsonify({"success": True, "task": task.to_dict()}), 200


@api_bp.route("/tasks/<string:task_id>", methods=["DELETE"])
@require_auth
def delete_task(task_id: str) -> tuple[Response, int]:
    services.delete_task(task_id, g.user_id)
    return jsonify({"success": True, "message": "Task deleted"}), 200
