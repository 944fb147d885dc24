import pytest
from sqlalchemy import create_engine, inspect

from userapi.config.settings import DEFAULT_MIGRATIONS_PATH
from userapi.database.migrations import make_alembic_config, run_migrations
from userapi.exceptions.base import ConfigurationError


def test_migrations_create_users_table(tmp_path):
    db_file = tmp_path / "migrated.db"

    run_migrations(f"sqlite+aiosqlite:///{db_file}", DEFAULT_MIGRATIONS_PATH)

    inspector = inspect(create_engine(f"sqlite:///{db_file}"))
    assert "users" in inspector.get_table_names()
    columns = {column["name"] for column in inspector.get_columns("users")}
    assert columns == {"id", "name", "email", "created_at"}
    unique = inspector.get_unique_constraints("users")
    assert any(constraint["column_names"] == ["email"] for constraint in unique)


def test_migrations_are_idempotent(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'twice.db'}"

    run_migrations(url, DEFAULT_MIGRATIONS_PATH)
    run_migrations(url, DEFAULT_MIGRATIONS_PATH)


@pytest.mark.parametrize("migrations_path", [None, ""])
def test_missing_migrations_path_raises(tmp_path, migrations_path):
    with pytest.raises(ConfigurationError):
        run_migrations(f"sqlite+aiosqlite:///{tmp_path / 'x.db'}", migrations_path)


def test_nonexistent_migrations_path_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        run_migrations(f"sqlite+aiosqlite:///{tmp_path / 'x.db'}", tmp_path / "nowhere")


def test_missing_database_url_raises():
    with pytest.raises(ConfigurationError):
        run_migrations(None, DEFAULT_MIGRATIONS_PATH)


def test_alembic_config_escapes_percent():
    config = make_alembic_config("postgresql+psycopg://app:p%40ss@db/users", DEFAULT_MIGRATIONS_PATH)

    assert config.get_main_option("sqlalchemy.url") == "postgresql+psycopg://app:p%40ss@db/users"
    assert config.get_main_option("script_location") == str(DEFAULT_MIGRATIONS_PATH)
