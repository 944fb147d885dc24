"""
Application factory and process entry point.

    create_app(settings) -> FastAPI     # used by tests and by run()
    run()                               # `userapi` console script

Startup order in run(): settings, logging, migrations, then the HTTP server.
A configuration or migration failure stops the process before it listens.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from userapi.api.v1.error_handlers import register_exception_handlers
from userapi.api.v1.users import router as users_router
from userapi.config.settings import Settings, get_settings
from userapi.core.logging import AccessLogMiddleware, RequestIDMiddleware, setup_logging
from userapi.database.migrations import run_migrations
from userapi.database.session import create_engine, create_session_factory
from userapi.utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the FastAPI app. The engine is created in the lifespan, not here."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("app.startup", extra={"env": settings.ENV})
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")

    app = FastAPI(
        title=get_project_name(default="userapi"),
        version=get_project_version(default="0.1.0"),
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added is outermost: request id is set before the access log runs.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(users_router)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings)

    run_migrations(settings.DATABASE_URL, settings.MIGRATIONS_PATH)

    logger.info("server.starting", extra={"host": settings.HOST, "port": settings.PORT})
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
