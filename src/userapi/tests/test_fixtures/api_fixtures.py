"""Fixtures for HTTP-level tests: a migrated SQLite store and a TestClient."""

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from userapi.config.settings import Settings
from userapi.database.migrations import run_migrations
from userapi.main import create_app


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        ENV="testing",
        DB_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        REQUEST_TIMEOUT_SECONDS=5.0,
        LOG_FORMAT="text",
        LOG_TO_STDOUT=True,
    )


@pytest.fixture
def app(app_settings: Settings) -> FastAPI:
    """
    The real application, with the schema created the same way run() creates it.
    Sync fixture: alembic's env.py drives its own event loop.
    """
    run_migrations(app_settings.DATABASE_URL, app_settings.MIGRATIONS_PATH)
    return create_app(app_settings)


@pytest.fixture
def client(app: FastAPI):
    # Entering the context runs the lifespan (engine + session factory on app.state).
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
