"""
Error taxonomy and request-boundary error handlers.

Route and service code raises the ``ApiError`` subclasses below; the
handlers registered by ``register_error_handlers`` turn every failure,
expected or not, into the uniform ``{"success": false, "message": ...}``
envelope with the matching HTTP status code.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from . import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Missing or invalid input."""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    """Missing, malformed, invalid or expired credential."""

    status_code = 401
    default_message = "Not authorized"


class NotFoundError(ApiError):
    """No matching record owned by the caller."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    """Unique constraint would be violated (duplicate registration)."""

    status_code = 409
    default_message = "Resource already exists"


class InternalError(ApiError):
    """Persistence or other unexpected failure."""


def error_response(message: str, status_code: int) -> tuple[Response, int]:
    """Build the failure envelope."""
    return jsonify({"success": False, "message": message}), status_code


def handle_api_error(error: ApiError) -> tuple[Response, int]:
    if error.status_code >= 500:
        logger.error("Request failed: %s", error.message)
    else:
        logger.warning("Request rejected (%s): %s", error.status_code, error.message)
    return error_response(error.message, error.status_code)


def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
    """
    Render Werkzeug's routing / method errors in the envelope format.

    Headers the exception carries, such as ``Allow`` on a 405, are kept;
    only its HTML content type is replaced.
    """
    response, status_code = error_response(error.description or error.name, error.code or 500)
    for name, value in error.get_headers():
        if name.lower() != "content-type":
            response.headers[name] = value
    return response, status_code


def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
    """Log the traceback, discard the failed transaction and return a 500."""
    logger.exception("Unhandled error: %s", error)
    db.session.rollback()
    return error_response(InternalError.default_message, 500)


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error handlers to *app*."""
    app.register_error_handler(ApiError, handle_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)
