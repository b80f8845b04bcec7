"""
Bearer-token issue and verification, and the ``require_auth`` gate.

Tokens are RS256-signed JWTs carrying ``user_id``, ``email``, ``iat`` and
``exp``.  ``require_auth`` resolves the caller's identity into ``flask.g``
before a protected view runs; when the credential is missing or invalid
it raises ``AuthenticationError`` and the view never executes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any

import jwt
from flask import current_app, g, request

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ALGORITHMS = ["RS256"]
REQUIRED_TOKEN_CLAIMS = ["user_id", "email", "iat", "exp"]


def create_token(user_id: int, email: str, private_key: str, expiry_hours: int) -> str:
    """
    Create an RS256-signed JWT for the given identity.

    Args:
        user_id: Primary key of the authenticated user.  Must be positive.
        email: The user's email address.  Must be non-empty.
        private_key: RSA private key in PEM format.
        expiry_hours: Hours from now until the token expires.

    Returns:
        The compact token string used as ``Authorization: Bearer <token>``.

    Raises:
        ValueError: If *user_id* is not positive or *email* is blank.
    """
    if int(user_id) <= 0:
        raise ValueError("user_id must be a positive integer")
    if not isinstance(email, str) or not email.strip():
        raise ValueError("email must be a non-empty string")

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "user_id": int(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=int(expiry_hours))).timestamp()),
    }
    return jwt.encode(payload, private_key, algorithm="RS256")


def verify_token(
    token: str,
    public_key: str,
    algorithms: list[str] | None = None,
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT, returning its payload on success.

    Checks the signature, ``exp``/``iat`` (with the configured clock-skew
    leeway), presence of every required claim, and that ``user_id`` is a
    positive integer and ``email`` a non-empty string.

    Returns:
        The decoded payload, or ``None`` if the token fails any check.
    """
    try:
        decoded = jwt.decode(
            token,
            public_key,
            algorithms=algorithms or DEFAULT_ALLOWED_ALGORITHMS,
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 30)),
        )
    except jwt.InvalidTokenError:
        return None

    user_id = decoded.get("user_id")
    email = decoded.get("email")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
        return None
    if not isinstance(email, str) or not email.strip():
        return None
    return decoded


def _bearer_token() -> str | None:
    """
    Return the token from the ``Authorization`` header.

    ``None`` means no header at all; an empty string means a header that is
    present but not a usable ``Bearer`` credential.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header is None:
        return None
    if not auth_header.startswith("Bearer "):
        return ""
    return auth_header[7:].strip()


def require_auth(view_func: Callable[..., Any]):
    """
    Gate a view behind bearer-token authentication.

    On success ``g.user_id`` and ``g.email`` hold the caller's identity.
    When ``AUTH_REQUIRED`` is off, a request without any ``Authorization``
    header proceeds anonymously with ``g.user_id = None``; a credential that
    is presented must still be valid.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if token is None and not current_app.config.get("AUTH_REQUIRED", True):
            g.user_id = None
            g.email = None
            return view_func(*args, **kwargs)

        if not token:
            raise AuthenticationError("Missing or invalid Authorization header")

        payload = verify_token(
            token,
            current_app.config["JWT_PUBLIC_KEY"],
            algorithms=DEFAULT_ALLOWED_ALGORITHMS,
        )
        if payload is None:
            raise AuthenticationError("Invalid or expired token")

        g.user_id = payload["user_id"]
        g.email = payload["email"]
        return view_func(*args, **kwargs)

    return wrapper
