"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, services, API, ...).

Domain-specific fixtures are located in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py

Every test gets its own SQLite file under `tmp_path`, so tests are isolated
even though the repository commits each write.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time (before importing modules that
# might initialize them). Keep this block above the userapi imports.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "alembic",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from userapi.config.settings import Settings
from userapi.core.logging.builder import setup_logging
from userapi.database.base import Base
from userapi.database.session import create_session_factory
from userapi import models  # noqa: F401 - import to register models with Base.metadata

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging (text format, stderr only) for the whole session.

    dictConfig replaces the root handlers; pytest re-attaches its capture handler
    for every test phase, so `caplog` keeps working.
    """
    setup_logging(Settings(LOG_FORMAT="text", LOG_TO_STDOUT=True, LOG_LEVEL="INFO"))
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
def database_url(tmp_path) -> str:
    """Async SQLite URL pointing at a fresh file for this test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(database_url, echo=False)

    # create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """A session from the same factory the application uses."""
    session_factory = create_session_factory(async_engine)
    async with session_factory() as session:
        yield session


# Repository test fixtures
from userapi.tests.test_fixtures.repository_fixtures import (  # noqa: E402
    user_repository,
    user_service,
    deadline,
    expired_deadline,
    sample_user_data,
    created_user,
)

# API test fixtures
from userapi.tests.test_fixtures.api_fixtures import (  # noqa: E402
    app_settings,
    app,
    client,
)
