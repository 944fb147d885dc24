from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from userapi.database.base import Base
import uuid

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255


class User(Base):
    """
    SQLAlchemy model for User.

    A row is either fully present or absent: there is no soft-delete flag and
    no update path. `id` and `created_at` are assigned by the persistence layer
    on insert and never change afterwards.
    """
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False
    )

    # Uniqueness is enforced by the store (uq_users_email), not pre-checked in code
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        unique=True,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r})>"
