"""
Article Repository

Provides database operations for the Article model.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database.models.article import Article
from app.database.repositories.repository import BaseRepository
from app.utils.enums import ArticleStatus


class ArticleRepository(BaseRepository[Article]):
    """
    Repository for Article model.

    Provides:
    - CRUD operations (from BaseRepository)
    - Author, review and public listings
    - Topic cascade deletion
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Article)

    async def get_with_topic(self, article_id: int) -> Optional[Article]:
        """
        Get an article with its topic relationship loaded.

        Args:
            article_id: Article ID

        Returns:
            Article or None
        """
        result = await self.session.execute(
            select(Article)
            .options(selectinload(Article.topic))
            .where(Article.id == article_id)
        )
        return result.scalar_one_or_none()

    async def list_by_author(self, author_uid: str) -> List[Article]:
        """Articles owned by ``author_uid``, newest first."""
        result = await self.session.execute(
            select(Article)
            .options(selectinload(Article.topic))
            .where(Article.author_uid == author_uid)
            .order_by(Article.created_at.desc(), Article.id.desc())
        )
        return list(result.scalars().all())

    async def list_filtered(
        self,
        status: Optional[str] = None,
        topic_id: Optional[int] = None,
    ) -> List[Article]:
        """
        All articles for the review dashboard, newest first.

        Args:
            status: Only articles in this status
            topic_id: Only articles under this topic

        Returns:
            List of articles with topic loaded
        """
        q = select(Article).options(selectinload(Article.topic))
        if status:
            q = q.where(Article.status == status)
        if topic_id is not None:
            q = q.where(Article.topic_id == topic_id)
        q = q.order_by(Article.created_at.desc(), Article.id.desc())
        result = await self.session.execute(q)
        return list(result.scalars().all())

    async def list_published_for_topic(self, topic_id: int) -> List[Article]:
        """Published articles of a topic sorted by (order asc, published_at desc)."""
        result = await self.session.execute(
            select(Article)
            .where(
                Article.topic_id == topic_id,
                Article.status == ArticleStatus.PUBLISHED,
            )
            .order_by(Article.order.asc(), Article.published_at.desc(), Article.id.asc())
        )
        return list(result.scalars().all())

    async def get_published(self, topic_id: int, slug: str) -> Optional[Article]:
        """
        Published article by topic and slug.

        Unpublished and missing articles are indistinguishable here.
        """
        result = await self.session.execute(
            select(Article).where(
                Article.topic_id == topic_id,
                Article.slug == slug,
                Article.status == ArticleStatus.PUBLISHED,
            )
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(select(Article.id).where(Article.slug == slug))
        return result.first() is not None

    async def delete_by_topic(self, topic_id: int) -> int:
        """
        Delete every article under a topic.

        Args:
            topic_id: Topic ID

        Returns:
            Number of deleted articles
        """
        result = await self.session.execute(
            delete(Article)
            .where(Article.topic_id == topic_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
