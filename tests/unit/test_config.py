"""
Unit tests for configuration profiles and JWT key resolution.
"""

from __future__ import annotations

import pytest

from taskboard.config import (
    PRIVATE_KEY_FILENAME,
    PUBLIC_KEY_FILENAME,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    _env_flag,
    get_config,
    load_jwt_keys,
)

pytestmark = pytest.mark.unit

_KEY_VARS = [
    "TEST_JWT_PRIVATE_KEY",
    "TEST_JWT_PUBLIC_KEY",
    "TEST_JWT_PRIVATE_KEY_PATH",
    "TEST_JWT_PUBLIC_KEY_PATH",
    "JWT_PRIVATE_KEY",
    "JWT_PUBLIC_KEY",
    "JWT_PRIVATE_KEY_PATH",
    "JWT_PUBLIC_KEY_PATH",
]


@pytest.fixture
def clean_key_env(monkeypatch):
    for name in _KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestGetConfig:
    @pytest.mark.parametrize(
        "env,expected",
        [
            ("development", DevelopmentConfig),
            ("testing", TestingConfig),
            ("production", ProductionConfig),
            ("unknown", DevelopmentConfig),
        ],
    )
    def test_named_profiles(self, env, expected):
        assert get_config(env) is expected

    def test_reads_flask_env(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "production")

        assert get_config() is ProductionConfig

    def test_testing_profile_is_isolated(self):
        assert TestingConfig.TESTING is True
        assert TestingConfig.AUTH_REQUIRED is True
        assert ProductionConfig.DEBUG is False


@pytest.mark.parametrize(
    "raw,expected",
    [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False), ("", True)],
)
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("AUTH_REQUIRED", raw)

    assert _env_flag("AUTH_REQUIRED", True) is expected


class TestLoadJwtKeys:
    def test_testing_variables_take_precedence(self, clean_key_env):
        clean_key_env.setenv("TEST_JWT_PRIVATE_KEY", "test-private")
        clean_key_env.setenv("TEST_JWT_PUBLIC_KEY", "test-public")
        clean_key_env.setenv("JWT_PRIVATE_KEY", "prod-private")
        clean_key_env.setenv("JWT_PUBLIC_KEY", "prod-public")

        assert load_jwt_keys(testing=True) == ("test-private", "test-public")
        assert load_jwt_keys(testing=False) == ("prod-private", "prod-public")

    def test_path_variables_are_read(self, clean_key_env, tmp_path):
        (tmp_path / "priv.pem").write_text("file-private", encoding="utf-8")
        (tmp_path / "pub.pem").write_text("file-public", encoding="utf-8")
        clean_key_env.setenv("JWT_PRIVATE_KEY_PATH", str(tmp_path / "priv.pem"))
        clean_key_env.setenv("JWT_PUBLIC_KEY_PATH", str(tmp_path / "pub.pem"))

        assert load_jwt_keys(testing=False) == ("file-private", "file-public")

    def test_unreadable_path_raises(self, clean_key_env, tmp_path):
        clean_key_env.setenv("JWT_PRIVATE_KEY_PATH", str(tmp_path / "missing.pem"))

        with pytest.raises(RuntimeError, match="Unable to read"):
            load_jwt_keys(testing=False)

    def test_falls_back_to_keys_dir(self, clean_key_env, tmp_path):
        (tmp_path / PRIVATE_KEY_FILENAME).write_text("dir-private", encoding="utf-8")
        (tmp_path / PUBLIC_KEY_FILENAME).write_text("dir-public", encoding="utf-8")

        assert load_jwt_keys(testing=False, keys_dir=tmp_path) == ("dir-private", "dir-public")

    def test_missing_keys_raise(self, clean_key_env, tmp_path):
        with pytest.raises(RuntimeError, match="generate-keys"):
            load_jwt_keys(testing=False, keys_dir=tmp_path)
