"""Configuration loading and fail-fast behaviour."""

from __future__ import annotations

import pytest

from tradelog.config import AppSettings, load_settings
from tradelog.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ENV", "PORT", "DB_URL", "JWT_SECRET", "JWT_REFRESH_SECRET", "ADMIN_SECRET", "API_PREFIX"):
        monkeypatch.delenv(name, raising=False)


def test_missing_jwt_secrets_are_fatal():
    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(_env_file=None)
    assert "jwt_secret" in excinfo.value.message
    assert "jwt_refresh_secret" in excinfo.value.message


def test_blank_jwt_secret_is_fatal():
    with pytest.raises(ConfigurationError):
        load_settings(_env_file=None, jwt_secret="  ", jwt_refresh_secret="refresh")


def test_environment_values_and_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "access")
    monkeypatch.setenv("JWT_REFRESH_SECRET", "refresh")
    monkeypatch.setenv("ADMIN_SECRET", "admin")
    monkeypatch.setenv("DB_URL", "postgres://trader:pw@db:5432/tradelog")

    settings = load_settings(_env_file=None)

    assert isinstance(settings, AppSettings)
    assert settings.port == 8080
    assert settings.env == "development"
    assert settings.db_url == "postgresql+asyncpg://trader:pw@db:5432/tradelog"
    assert settings.access_token_ttl_minutes == 15
    assert settings.refresh_cookie_max_age == 7 * 24 * 60 * 60
    assert settings.serialize_trades is True


def test_env_file_is_read(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("JWT_SECRET=from-file\nJWT_REFRESH_SECRET=refresh-file\nPORT=9090\nUNRELATED=1\n")

    settings = load_settings(_env_file=env_file)

    assert settings.jwt_secret == "from-file"
    assert settings.port == 9090


def test_api_prefix_is_normalised():
    settings = load_settings(_env_file=None, jwt_secret="a", jwt_refresh_secret="b", api_prefix="api/v1/")
    assert settings.api_prefix == "/api/v1"


def test_secrets_are_masked_for_logging():
    settings = load_settings(_env_file=None, jwt_secret="a", jwt_refresh_secret="b", admin_secret="c")
    logged = settings.dict_for_logging()
    assert logged["jwt_secret"] == "***"
    assert logged["jwt_refresh_secret"] == "***"
    assert logged["admin_secret"] == "***"
    assert logged["port"] == 8080
