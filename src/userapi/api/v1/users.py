"""
/users routes. HTTP-shape translation only: decode, validate, call the
service, serialize. Errors are raised as AppError subclasses and turned into
responses by the handlers in error_handlers.py.

No PUT route: users are immutable once created.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from userapi.core.deadline import Deadline
from userapi.core.dependencies import get_deadline, get_user_service
from userapi.schemas.user import UserCreate, UserRead
from userapi.services.user_service import UserService
from userapi.validators.user_validators import validate_user_create

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: UUID,
    service: UserService = Depends(get_user_service),
    deadline: Deadline = Depends(get_deadline),
):
    return await service.get_user(user_id, deadline)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
    deadline: Deadline = Depends(get_deadline),
):
    validate_user_create(payload)
    return await service.create_user(payload.name, payload.email, deadline)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    service: UserService = Depends(get_user_service),
    deadline: Deadline = Depends(get_deadline),
) -> Response:
    await service.delete_user(user_id, deadline)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
