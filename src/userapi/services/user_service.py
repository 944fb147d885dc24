"""
User service: the business seam between the controller and the repository.

There are no business rules beyond delegation. Error kinds raised by the
repository (NotFoundError, ConflictError, StoreUnavailableError) propagate
unchanged and nothing is retried here.
"""
import logging
from uuid import UUID

from userapi.core.deadline import Deadline
from userapi.models.user import User
from userapi.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def get_user(self, user_id: UUID, deadline: Deadline) -> User:
        return await self.repository.find_by_id(user_id, deadline)

    async def create_user(self, name: str, email: str, deadline: Deadline) -> User:
        """Assumes the payload was already validated structurally."""
        user = await self.repository.insert(name, email, deadline)
        logger.info("service.user_created", extra={"user_id": str(user.id)})
        return user

    async def delete_user(self, user_id: UUID, deadline: Deadline) -> None:
        await self.repository.delete(user_id, deadline)
        logger.info("service.user_deleted", extra={"user_id": str(user_id)})
