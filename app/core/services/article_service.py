"""
Article Service - authoring, review and public reads.

Combines the article/topic repositories with the workflow rules in
``app.core.workflow``. Every mutation goes through a workflow guard first,
so a rejected request never touches the stored article.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.article import ArticleCreate, ArticleUpdate, OrderUpdate
from app.core import workflow
from app.core.auth import AuthContext
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.database.models.article import Article
from app.database.models.topic import Topic
from app.database.repositories.article_repository import ArticleRepository
from app.database.repositories.topic_repository import TopicRepository
from app.database.session import get_db
from app.utils.enums import ArticleStatus
from app.utils.ordering import shift_order
from app.utils.slug_utils import article_slug, now_millis

logger = logging.getLogger(__name__)


class ArticleService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ArticleRepository(session)
        self.topics = TopicRepository(session)

    @staticmethod
    def instance(session: AsyncSession = Depends(get_db)) -> "ArticleService":
        return ArticleService(session)

    # ── Lookups ──

    async def _get(self, article_id: int) -> Article:
        article = await self.repo.get_by_id(article_id)
        if article is None:
            raise NotFoundError("Article not found")
        return article

    async def _get_with_topic(self, article_id: int) -> Article:
        article = await self.repo.get_with_topic(article_id)
        if article is None:
            raise NotFoundError("Article not found")
        return article

    async def _require_topic(self, topic_id: int) -> Topic:
        topic = await self.topics.get_by_id(topic_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic

    async def _unique_slug(self, title: str) -> str:
        """
        ``<slug>-<epoch ms>``; bumps the millisecond suffix until unused so
        identical titles created in the same millisecond stay distinct.
        """
        millis = now_millis()
        slug = article_slug(title, millis)
        while await self.repo.slug_exists(slug):
            millis += 1
            slug = article_slug(title, millis)
        return slug

    # ── Author operations ──

    async def list_mine(self, ctx: AuthContext) -> List[Article]:
        return await self.repo.list_by_author(ctx.uid)

    async def create_article(self, ctx: AuthContext, data: ArticleCreate) -> Article:
        """Create a draft owned by the caller. Status is never client-settable."""
        title = (data.title or "").strip()
        content = data.content or ""
        if not title or data.topic_id is None or not content.strip():
            raise BadRequestError("title, topicId, and content are required")

        await self._require_topic(data.topic_id)

        author_name = ctx.user.display_name or ctx.identity.email or "Unknown Author"
        try:
            article = await self.repo.create(
                title=title,
                slug=await self._unique_slug(title),
                topic_id=data.topic_id,
                content=content,
                cover_image=data.cover_image,
                tags=list(data.tags or []),
                author_uid=ctx.uid,
                author_name=author_name,
                status=ArticleStatus.DRAFT,
            )
        except IntegrityError as e:
            raise ConflictError("Duplicate slug. Try a slightly different title.", error=str(e.orig))

        logger.info(f"Article created: {article.slug} by {ctx.uid}")
        return article

    async def get_for_editor(self, ctx: AuthContext, article_id: int) -> Article:
        article = await self._get_with_topic(article_id)
        workflow.ensure_can_view(article, ctx)
        return article

    async def update_article(self, ctx: AuthContext, article_id: int, data: ArticleUpdate) -> Article:
        article = await self._get(article_id)
        workflow.ensure_can_edit(article, ctx)

        changes = data.model_dump(exclude_unset=True)
        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise BadRequestError("Title cannot be empty")
            changes["title"] = title
        if "content" in changes and not (changes["content"] or "").strip():
            raise BadRequestError("Content cannot be empty")
        if "topic_id" in changes:
            if changes["topic_id"] is None:
                raise BadRequestError("topicId cannot be empty")
            await self._require_topic(changes["topic_id"])
        if "tags" in changes:
            changes["tags"] = list(changes["tags"] or [])

        if changes:
            await self.repo.update(article, **changes)
            logger.info(f"Article updated: {article.id} by {ctx.uid} ({', '.join(changes)})")
        return article

    async def delete_article(self, ctx: AuthContext, article_id: int) -> None:
        article = await self._get(article_id)
        workflow.ensure_can_delete(article, ctx)
        await self.repo.delete(article)
        logger.warning(f"Article deleted: {article_id} by {ctx.uid}")

    async def submit_article(self, ctx: AuthContext, article_id: int) -> Article:
        article = await self._get(article_id)
        workflow.submit(article, ctx)
        await self.session.flush()
        return article

    # ── Admin review ──

    async def list_for_review(
        self,
        status: Optional[str] = None,
        topic_id: Optional[int] = None,
    ) -> List[Article]:
        if status and status not in ArticleStatus.ALL:
            raise BadRequestError(
                f"Invalid status. Must be one of: {', '.join(ArticleStatus.ALL)}"
            )
        return await self.repo.list_filtered(status=status, topic_id=topic_id)

    async def set_status(
        self,
        article_id: int,
        status: str,
        rejection_reason: Optional[str] = None,
    ) -> Article:
        article = await self._get(article_id)
        workflow.review(article, status, rejection_reason=rejection_reason)
        await self.session.flush()
        return article

    async def set_order(self, article_id: int, data: OrderUpdate) -> Article:
        """Explicit ``order`` wins; otherwise shift by ``direction``."""
        article = await self._get(article_id)
        if data.order is not None:
            order = float(data.order)
        elif data.direction:
            order = shift_order(article.order, data.direction)
        else:
            raise BadRequestError("order must be a number")

        await self.repo.update(article, order=order)
        logger.info(f"Article {article.id} order set to {order}")
        return article

    # ── Public reads ──

    async def list_published(self, topic_slug: str) -> Tuple[Topic, List[Article]]:
        topic = await self.topics.get_by_slug(topic_slug)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic, await self.repo.list_published_for_topic(topic.id)

    async def get_published(self, topic_slug: str, article_slug: str) -> Tuple[Topic, Article]:
        """
        A published article by slugs.

        Drafts, pending and rejected articles answer exactly like missing
        ones so their existence does not leak.
        """
        topic = await self.topics.get_by_slug(topic_slug)
        if topic is None:
            raise NotFoundError("Topic not found")
        article = await self.repo.get_published(topic.id, article_slug)
        if article is None:
            raise NotFoundError("Article not found")
        return topic, article
