import logging
from typing import List, Tuple

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.topic import TopicCreate, TopicUpdate
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.database.models.topic import Topic
from app.database.repositories.article_repository import ArticleRepository
from app.database.repositories.topic_repository import TopicRepository
from app.database.session import get_db
from app.utils.ordering import shift_order
from app.utils.slug_utils import slugify

logger = logging.getLogger(__name__)


class TopicService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = TopicRepository(session)
        self.articles = ArticleRepository(session)

    @staticmethod
    def instance(session: AsyncSession = Depends(get_db)) -> "TopicService":
        return TopicService(session)

    async def list_topics(self) -> List[Topic]:
        return await self.repo.list_ordered()

    async def get_topic(self, topic_id: int) -> Topic:
        topic = await self.repo.get_by_id(topic_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic

    async def create_topic(self, data: TopicCreate, created_by: str) -> Topic:
        """
        Create a topic appended after the current last one.

        The slug is derived from the title unless given; a taken slug is a
        conflict, never silently renamed.
        """
        title = (data.title or "").strip()
        if not title:
            raise BadRequestError("Title is required")

        slug = slugify(data.slug) if data.slug else slugify(title)
        if not slug:
            raise BadRequestError("Could not derive a slug from the title")
        if await self.repo.slug_exists(slug):
            raise ConflictError("A topic with this slug already exists")

        last_order = await self.repo.max_order()
        order = 0 if last_order is None else last_order + 1

        description = data.description.strip() if data.description else None
        try:
            topic = await self.repo.create(
                title=title,
                slug=slug,
                description=description,
                order=order,
                created_by=created_by,
            )
        except IntegrityError as e:
            raise ConflictError("A topic with this slug already exists", error=str(e.orig))

        logger.info(f"Topic created: {topic.slug} (order={topic.order}) by {created_by}")
        return topic

    async def update_topic(self, topic_id: int, data: TopicUpdate) -> Topic:
        """Partial update of title / description / order (or a direction shift)."""
        topic = await self.get_topic(topic_id)
        changes = data.model_dump(exclude_unset=True)

        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise BadRequestError("Title cannot be empty")
            changes["title"] = title
        if changes.get("order") is None:
            changes.pop("order", None)

        direction = changes.pop("direction", None)
        if direction and "order" not in changes:
            changes["order"] = shift_order(topic.order, direction)

        if not changes:
            return topic

        await self.repo.update(topic, **changes)
        logger.info(f"Topic updated: {topic.id} ({', '.join(changes)})")
        return topic

    async def delete_topic(self, topic_id: int) -> Tuple[Topic, int]:
        """
        Delete a topic and every article under it.

        Both deletes share the request transaction, so either the topic and
        all its articles disappear or nothing does.

        Returns:
            The deleted topic and the number of articles removed with it
        """
        topic = await self.get_topic(topic_id)
        removed = await self.articles.delete_by_topic(topic.id)
        await self.repo.delete(topic)
        logger.warning(f"Topic deleted: {topic.slug} (cascaded {removed} article(s))")
        return topic, removed
