import logging
from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class CRUDBase(Generic[ModelType, CreateSchemaType]):
    def __init__(self, model: Type[ModelType], *, order_by: Sequence[Any] = ()):
        """
        CRUD object with default methods to Create, Read and Delete.
        **Parameters**
        * `model`: A SQLAlchemy model class
        * `order_by`: Columns used to sort `get_multi` results
        """
        self.model = model
        self.order_by = tuple(order_by)

    async def count(self, db: AsyncSession) -> int:
        """Count all objects."""
        stmt = select(func.count()).select_from(self.model)
        result = await db.execute(stmt)
        return result.scalar_one()

    async def get(self, db: AsyncSession, *, id: UUID) -> Optional[ModelType]:
        """Get a single object by ID."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_multi(self, db: AsyncSession) -> list[ModelType]:
        """Get all objects in the model's listing order."""
        stmt = select(self.model).order_by(*self.order_by)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_key(self, db: AsyncSession, *, key_field: str, key_value: Any) -> Optional[ModelType]:
        """Get by key field and value"""
        stmt = select(self.model).where(getattr(self.model, key_field) == key_value)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        """Create a new object.

        Raises:
            IntegrityError: unique or foreign-key violation, after rollback
        """
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(db_obj)
        logger.info(f"Created {self.model.__tablename__} row {db_obj.id}")
        return db_obj

    async def delete(self, db: AsyncSession, *, id: UUID) -> Optional[UUID]:
        """Delete by ID, returning the deleted ID or None when absent.

        Raises:
            IntegrityError: the row is still referenced, after rollback
        """
        stmt = delete(self.model).where(self.model.id == id).returning(self.model.id)
        try:
            result = await db.execute(stmt)
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        if deleted_id is not None:
            logger.info(f"Deleted {self.model.__tablename__} row {deleted_id}")
        return deleted_id
