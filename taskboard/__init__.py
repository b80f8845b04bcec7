"""
Taskboard Flask application factory.

``create_app`` assembles the application: configuration, JWT keys, the
SQLAlchemy extension, the JSON error handlers and the API blueprints.
The factory pattern lets tests build an
isolated instance with the ``testing`` profile.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from .config import default_keys_dir, get_config, load_jwt_keys

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Taskboard application.

    Args:
        config_name: ``"development"``, ``"testing"`` or ``"production"``.
            When ``None``, ``FLASK_ENV`` decides, defaulting to
            ``"development"``.

    Returns:
        A configured Flask application with its database tables created.

    Raises:
        RuntimeError: If no JWT key pair can be resolved.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    os.makedirs(app.instance_path, exist_ok=True)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = (
            f"sqlite:///{Path(app.instance_path) / 'taskboard.db'}"
        )
    _ensure_sqlite_db_parent_exists(app.config["SQLALCHEMY_DATABASE_URI"])

    configured_keys_dir = app.config.get("JWT_KEYS_DIR")
    keys_dir = Path(configured_keys_dir) if configured_keys_dir else default_keys_dir()
    private_key, public_key = load_jwt_keys(
        testing=bool(app.config.get("TESTING")), keys_dir=keys_dir
    )
    app.config["JWT_PRIVATE_KEY"] = private_key
    app.config["JWT_PUBLIC_KEY"] = public_key

    logger.info(
        "Creating taskboard app with config: %s (auth required: %s)",
        config_class.__name__,
        app.config["AUTH_REQUIRED"],
    )

    db.init_app(app)

    from .errors import register_error_handlers
    from .routes.accounts import accounts_bp
    from .routes.api import api_bp

    register_error_handlers(app)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(accounts_bp, url_prefix="/api")

    with app.app_context():
        db.create_all()
        logger.info("Database tables created")

    return app
