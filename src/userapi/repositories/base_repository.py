"""
Base repository class providing the shared single-statement operations.

Every store interaction runs inside `db_error_handler` (driver errors become
app-level errors) and inside the caller's `Deadline.scope()` (the statement is
aborted when the request budget runs out). The session is injected; the
repository never opens or closes connections itself.
"""
import logging
import time
from typing import Any, Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.deadline import Deadline
from userapi.database.base import Base
from userapi.exceptions.base import NotFoundError
from userapi.exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for models keyed by a UUID `id` column.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. User, not User())
            db: The async database session, injected per request
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def get_by_id_or_raise(self, entity_id: UUID, deadline: Deadline) -> ModelType:
        """
        Fetch one entity by primary key.

        Raises:
            NotFoundError: no row matches `entity_id`.
            StoreUnavailableError: connectivity failure or deadline expiry.
        """
        async with db_error_handler(self.db, self.model_name):
            async with deadline.scope():
                result = await self.db.execute(
                    select(self.model).where(self.model.id == entity_id)
                )
                entity = result.scalar_one_or_none()

        if entity is None:
            logger.info("repo.get.not_found", extra={"model": self.model_name, "id": str(entity_id)})
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")

        logger.debug("repo.get.success", extra={"model": self.model_name, "id": str(entity_id)})
        return entity

    async def add(self, deadline: Deadline, **values: Any) -> ModelType:
        """
        Insert one row and commit it.

        The entity is refreshed after the flush so that store-generated columns
        (`id`, `created_at`) are populated on the returned object. No uniqueness
        pre-check is done: the store's constraints decide and an IntegrityError is
        mapped to ConflictError.
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "provided_keys": sorted(values.keys())},
        )
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name):
            async with deadline.scope():
                entity = self.model(**values)
                self.db.add(entity)
                await self.db.flush()
                await self.db.refresh(entity)
                await self.db.commit()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "id": str(entity.id),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    async def delete_by_id_or_raise(self, entity_id: UUID, deadline: Deadline) -> None:
        """
        Hard-delete one row by primary key with a single DELETE statement.

        Raises:
            NotFoundError: no row matched, including a repeated delete of the same id.
        """
        async with db_error_handler(self.db, self.model_name):
            async with deadline.scope():
                result = await self.db.execute(
                    delete(self.model).where(self.model.id == entity_id)
                )
                deleted = result.rowcount
                if deleted:
                    await self.db.commit()

        if not deleted:
            logger.info("repo.delete.not_found", extra={"model": self.model_name, "id": str(entity_id)})
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")

        logger.info("repo.delete.success", extra={"model": self.model_name, "id": str(entity_id)})
