"""
Engine and session factory construction.

Nothing here is created at import time: main.create_app() builds the engine
from explicit settings inside the app lifespan and keeps it on `app.state`.
"""
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from userapi.config.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled AsyncEngine for the configured store."""
    url = settings.DATABASE_URL
    options: dict = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,  # Enables connection health checks
    }
    # SQLite (local/test runs) does not take queue-pool sizing options.
    if not make_url(url).get_backend_name() == "sqlite":
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned entities stay readable after the repository commits.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
