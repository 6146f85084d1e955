"""
Repository Pattern Base Classes

Provides the database abstraction layer for the content store.

The Repository Pattern:
1. Decouples services from query construction
2. Makes testing easier (services can run against any AsyncSession)
3. Centralizes database queries and logic

Architecture:
- BaseRepository: Generic async CRUD operations for any model
- Specialized repositories: Domain-specific queries (TopicRepository, ArticleRepository, UserRepository)

Repositories only ``flush``; the request-scoped session (see
``app.database.session.get_db``) commits once per request.
"""

from abc import ABC
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models.model_base import SqlAlchemyModel

ModelType = TypeVar("ModelType", bound=SqlAlchemyModel)


class BaseRepository(Generic[ModelType], ABC):
    """
    Abstract base repository with common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class (Topic, Article, User)

    Example:
        class TopicRepository(BaseRepository[Topic]):
            def __init__(self, session: AsyncSession):
                super().__init__(session, Topic)
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
            model: The SQLAlchemy model class
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Column values for the new record

        Returns:
            Created model instance (flushed, primary key assigned)
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def update(self, instance: ModelType, **kwargs) -> ModelType:
        """
        Apply column values to an existing record.

        Args:
            instance: Loaded model instance
            **kwargs: Column values to update

        Returns:
            Updated model instance
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        return instance

    async def delete(self, instance: ModelType) -> None:
        """
        Delete a loaded record.

        Args:
            instance: Model instance to delete
        """
        await self.session.delete(instance)
        await self.session.flush()
