import pytest
from pydantic import ValidationError

from userapi.config.settings import DEFAULT_MIGRATIONS_PATH, Settings
from userapi.exceptions.base import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables from leaking into the settings under test."""
    for name in ("DB_URL", "POSTGRES_USERNAME", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_DB", "PORT"):
        monkeypatch.delenv(name, raising=False)


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults():
    settings = make_settings()

    assert settings.PORT == 1323
    assert settings.HOST == "0.0.0.0"
    assert settings.REQUEST_TIMEOUT_SECONDS > 0
    assert settings.MIGRATIONS_PATH == DEFAULT_MIGRATIONS_PATH
    assert (DEFAULT_MIGRATIONS_PATH / "env.py").exists()


def test_db_url_wins():
    settings = make_settings(DB_URL="sqlite+aiosqlite:///./x.db", POSTGRES_HOST="db")

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./x.db"


def test_database_url_from_postgres_parts():
    settings = make_settings(
        POSTGRES_USERNAME="app",
        POSTGRES_PASSWORD="p@ss",
        POSTGRES_HOST="db.internal",
        POSTGRES_DB="users",
    )

    url = settings.DATABASE_URL

    assert url.startswith("postgresql+psycopg://app:")
    assert "@db.internal:5432/users" in url
    assert "p%40ss" in url


def test_missing_database_config_raises():
    with pytest.raises(ConfigurationError):
        make_settings().DATABASE_URL


def test_log_settings_are_normalized():
    settings = make_settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT")

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")

    assert make_settings().PORT == 8080


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        make_settings(LOG_LEVEL="loud")
