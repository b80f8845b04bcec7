"""
Account endpoints: registration and login.

Endpoints:
    POST /api/register  - Create a user account
    POST /api/login     - Exchange email/password for a bearer token
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from .. import services
from ..auth import create_token
from ..errors import AuthenticationError
from ..schemas import LoginCommand, RegisterCommand

logger = logging.getLogger(__name__)

accounts_bp = Blueprint("accounts", __name__)


@accounts_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user.

    Request Body (JSON):
        name, email, password: all required.

    Returns:
        201 with the created user; 400 on invalid input; 409 when the email
        is already registered.
    """
    command = RegisterCommand.from_json(request.get_json(silent=True))
    user = services.register_user(command)
    return jsonify(
        {"success": True, "message": "User registered successfully", "user": user.to_dict()}
    ), 201


@accounts_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate and issue a bearer token.

    The same message is used for an unknown email and a wrong password so
    the response does not reveal which accounts exist.
    """
    command = LoginCommand.from_json(request.get_json(silent=True))
    user = services.authenticate_user(command.email, command.password)
    if user is None:
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid email or password")

    token = create_token(
        user_id=user.id,
        email=user.email,
        private_key=current_app.config["JWT_PRIVATE_KEY"],
        expiry_hours=current_app.config["JWT_EXPIRY_HOURS"],
    )
    return jsonify({"success": True, "token": token, "user": user.to_dict()}), 200
