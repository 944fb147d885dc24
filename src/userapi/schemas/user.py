"""Request/response shapes for the /users resource."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """
    POST /users/ body. Only the JSON shape is checked here; content rules
    (non-empty name, email shape) belong to validate_user_create().
    """
    name: str
    email: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")
