"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, func, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    The primary key column is looked up from the mapper, so models keyed by
    a UUID and models keyed by a chunk id share the same operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model
        self.pk = inspect(model).primary_key[0]

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def create_many(self, session: AsyncSession, instances: Sequence[ModelT]) -> int:
        """
        Add prebuilt instances and flush once.

        Args:
            session: Async database session
            instances: Unsaved model instances

        Returns:
            int: Number of instances added
        """
        session.add_all(instances)
        await session.flush()
        return len(instances)

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: Primary key value

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.pk == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: Any,
        **kwargs,
    ) -> ModelT | None:
        """
        Update a record by primary key.

        Args:
            session: Async database session
            id: Primary key value
            **kwargs: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        stmt = (
            update(self.model)
            .where(self.pk == id)
            .values(**kwargs)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: Any) -> bool:
        """
        Delete a record by primary key.

        Args:
            session: Async database session
            id: Primary key value

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.pk == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        """
        Check if a record exists by primary key.

        Args:
            session: Async database session
            id: Primary key value

        Returns:
            True if record exists, False otherwise
        """
        stmt = select(self.pk).where(self.pk == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self, session: AsyncSession) -> int:
        """Count all rows of the model's table."""
        result = await session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
