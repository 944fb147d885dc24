"""
User repository: the persistence contract for the User entity.

    find_by_id(id)      -> User     | NotFoundError | StoreUnavailableError
    insert(name, email) -> User     | ConflictError | StoreUnavailableError
    delete(id)          -> None     | NotFoundError | StoreUnavailableError

Every operation takes the request Deadline explicitly and is a single
statement against the store.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from userapi.core.deadline import Deadline
from userapi.models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def find_by_id(self, user_id: UUID, deadline: Deadline) -> User:
        return await self.get_by_id_or_raise(user_id, deadline)

    async def insert(self, name: str, email: str, deadline: Deadline) -> User:
        """
        Create a new user.

        Values are stored exactly as given; a later find_by_id returns them unchanged.

        Raises:
            ConflictError: the email is already taken
            StoreUnavailableError: connectivity failure or deadline expiry
        """
        return await self.add(deadline, name=name, email=email)

    async def delete(self, user_id: UUID, deadline: Deadline) -> None:
        await self.delete_by_id_or_raise(user_id, deadline)
