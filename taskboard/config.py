"""
Configuration classes for the Taskboard application.

A shared ``Config`` base holds development defaults and every environment
profile overrides only what differs.  All values can be supplied through
environment variables so the same code base serves any deployment.

JWT keys are resolved separately by ``load_jwt_keys`` because they are
PEM blobs that usually live in files or secret stores rather than plain
settings.
"""

from __future__ import annotations

import os
from pathlib import Path

from flask import Flask

PRIVATE_KEY_FILENAME = "jwt.private.pem"
PUBLIC_KEY_FILENAME = "jwt.public.pem"


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag such as ``AUTH_REQUIRED=false`` from the environment."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _load_key(raw_env_var: str, path_env_var: str, fallback_path: Path | None) -> str:
    """
    Load a PEM key from direct env content, a path env variable, or a fallback file.

    The raw PEM variable wins over the path variable so orchestrators can
    inject secrets without mounting files.
    """
    raw_key = os.environ.get(raw_env_var, "").strip()
    if raw_key:
        return raw_key

    key_path = os.environ.get(path_env_var, "").strip()
    if key_path:
        try:
            return Path(key_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise RuntimeError(
                f"Unable to read JWT key file at '{key_path}' from {path_env_var}."
            ) from exc

    if fallback_path is not None and fallback_path.is_file():
        return fallback_path.read_text(encoding="utf-8")

    raise RuntimeError(
        f"Missing JWT key configuration: set {raw_env_var} or {path_env_var}, "
        "or run 'flask generate-keys'."
    )


def default_keys_dir() -> Path:
    """
    Directory holding the key pair written by ``flask generate-keys``.

    ``$JWT_KEYS_DIR`` when set, otherwise ``keys/`` inside the application's
    instance folder, which for an installed package lives under
    ``<prefix>/var/taskboard-instance`` rather than the working directory.
    """
    configured = os.environ.get("JWT_KEYS_DIR", "").strip()
    if configured:
        return Path(configured)
    instance_path = Flask("taskboard", instance_relative_config=True).instance_path
    return Path(instance_path) / "keys"


def _has_key_source(raw_env_var: str, path_env_var: str) -> bool:
    """Return True when at least one key source variable is configured."""
    return bool(
        os.environ.get(raw_env_var, "").strip()
        or os.environ.get(path_env_var, "").strip()
    )


def load_jwt_keys(*, testing: bool, keys_dir: Path | None = None) -> tuple[str, str]:
    """
    Resolve the JWT private/public key pair for the selected environment.

    In testing mode the ``TEST_*`` variables take precedence when configured.
    Otherwise the ``JWT_*`` variables are used, falling back to the key files
    written by ``flask generate-keys`` into *keys_dir*.

    Returns:
        A ``(private_pem, public_pem)`` tuple.
    """
    if testing and (
        _has_key_source("TEST_JWT_PRIVATE_KEY", "TEST_JWT_PRIVATE_KEY_PATH")
        or _has_key_source("TEST_JWT_PUBLIC_KEY", "TEST_JWT_PUBLIC_KEY_PATH")
    ):
        return (
            _load_key("TEST_JWT_PRIVATE_KEY", "TEST_JWT_PRIVATE_KEY_PATH", None),
            _load_key("TEST_JWT_PUBLIC_KEY", "TEST_JWT_PUBLIC_KEY_PATH", None),
        )

    private_fallback = keys_dir / PRIVATE_KEY_FILENAME if keys_dir else None
    public_fallback = keys_dir / PUBLIC_KEY_FILENAME if keys_dir else None
    return (
        _load_key("JWT_PRIVATE_KEY", "JWT_PRIVATE_KEY_PATH", private_fallback),
        _load_key("JWT_PUBLIC_KEY", "JWT_PUBLIC_KEY_PATH", public_fallback),
    )


class Config:
    """
    Base configuration with development-safe defaults.

    Attributes:
        SECRET_KEY: Flask signing key.
        SQLALCHEMY_DATABASE_URI: Database URL.  ``None`` means a SQLite file
            inside the Flask instance folder, resolved by ``create_app``.
        AUTH_REQUIRED: When ``False`` the task API also serves anonymous
            callers (single-user mode).
        JWT_EXPIRY_HOURS: Lifetime of issued bearer tokens.
        JWT_CLOCK_SKEW_SECONDS: Leeway applied to ``exp`` / ``iat`` checks.
    """

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "taskboard-dev-secret-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str | None = os.environ.get("DATABASE_URL")

    AUTH_REQUIRED: bool = _env_flag("AUTH_REQUIRED", True)

    # Fallback location of the key pair written by ``flask generate-keys``;
    # ``None`` means ``default_keys_dir()``.
    JWT_KEYS_DIR: str | None = os.environ.get("JWT_KEYS_DIR")

    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "24"))
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "30"))


class DevelopmentConfig(Config):
    """Development profile: debug mode on."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing profile.

    Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set, so
    test runs never touch development data.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_DATABASE_URI: str = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    AUTH_REQUIRED: bool = True
    JWT_EXPIRY_HOURS: int = int(os.environ.get("TEST_JWT_EXPIRY_HOURS", "1"))


class ProductionConfig(Config):
    """
    Production profile.

    Secrets must come from the environment; the base defaults are
    deliberately unsuitable for production.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up the configuration class for the given environment.

    Args:
        env: ``"development"``, ``"testing"`` or ``"production"``.  When
            ``None``, the ``FLASK_ENV`` variable is consulted, defaulting
            to ``"development"``.

    Returns:
        The configuration class (not an instance).  Unknown names fall back
        to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
