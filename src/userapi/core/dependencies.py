"""
FastAPI dependencies that build the per-request object graph:

    session (from app.state.session_factory) -> UserRepository -> UserService

plus the request Deadline from app.state.settings. Nothing is read from module
globals, so tests can build an app around any engine or settings object.
"""
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.config.settings import Settings
from userapi.core.deadline import Deadline
from userapi.repositories.user_repository import UserRepository
from userapi.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yields a session for the request and closes it afterwards."""
    async with request.app.state.session_factory() as session:
        yield session


def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


def get_deadline(settings: Settings = Depends(get_app_settings)) -> Deadline:
    return Deadline.after(settings.REQUEST_TIMEOUT_SECONDS)
