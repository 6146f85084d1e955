"""
Topic Repository

Provides database operations for the Topic model.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models.topic import Topic
from app.database.repositories.repository import BaseRepository


class TopicRepository(BaseRepository[Topic]):
    """
    Repository for Topic model.

    Provides:
    - CRUD operations (from BaseRepository)
    - Display ordering and slug lookups
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Topic)

    async def list_ordered(self) -> List[Topic]:
        """
        All topics in display order.

        Returns:
            Topics sorted by (order asc, created_at asc)
        """
        result = await self.session.execute(
            select(Topic).order_by(Topic.order.asc(), Topic.created_at.asc(), Topic.id.asc())
        )
        return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> Optional[Topic]:
        result = await self.session.execute(select(Topic).where(Topic.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(select(Topic.id).where(Topic.slug == slug))
        return result.first() is not None

    async def max_order(self) -> Optional[float]:
        """
        Highest order value in use.

        Returns:
            The maximum ``order``, or None when there are no topics
        """
        result = await self.session.execute(select(func.max(Topic.order)))
        return result.scalar_one_or_none()
