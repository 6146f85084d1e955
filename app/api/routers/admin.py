"""
Admin Router - user roles, topics, article review and ordering.

All endpoints require the ``admin`` role (enforced for the whole router in
``app.api.main``).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.api.schemas.article import (
    ArticleEnvelope,
    ArticleListEnvelope,
    ArticleResponse,
    ArticleWithTopicResponse,
    OrderUpdate,
    StatusUpdate,
)
from app.api.schemas.common import MessageResponse
from app.api.schemas.topic import (
    TopicCreate,
    TopicEnvelope,
    TopicListEnvelope,
    TopicResponse,
    TopicUpdate,
)
from app.api.schemas.user import (
    RoleUpdate,
    RoleUpdateResponse,
    UserListEnvelope,
    UserResponse,
)
from app.core.auth import AuthContext, require_admin
from app.core.services.article_service import ArticleService
from app.core.services.topic_service import TopicService
from app.core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Users ──

@router.get("/users", response_model=UserListEnvelope)
async def list_users(service: UserService = Depends(UserService.instance)):
    """List all users, newest first."""
    users = await service.list_users()
    return UserListEnvelope(users=[UserResponse.model_validate(u) for u in users])


@router.patch("/users/{uid}/role", response_model=RoleUpdateResponse)
async def update_user_role(
    data: RoleUpdate,
    uid: str = Path(...),
    service: UserService = Depends(UserService.instance),
):
    """Assign a role to a user."""
    user = await service.set_role(uid, data.role)
    return RoleUpdateResponse(message="Role updated", user=UserResponse.model_validate(user))


# ── Topics ──

@router.get("/topics", response_model=TopicListEnvelope)
async def list_topics(service: TopicService = Depends(TopicService.instance)):
    topics = await service.list_topics()
    return TopicListEnvelope(topics=[TopicResponse.model_validate(t) for t in topics])


@router.post("/topics", response_model=TopicEnvelope, status_code=201)
async def create_topic(
    data: TopicCreate,
    ctx: AuthContext = Depends(require_admin),
    service: TopicService = Depends(TopicService.instance),
):
    """Create a topic at the end of the display order."""
    topic = await service.create_topic(data, created_by=ctx.uid)
    return TopicEnvelope(topic=TopicResponse.model_validate(topic))


@router.patch("/topics/{topic_id}", response_model=TopicEnvelope)
async def update_topic(
    data: TopicUpdate,
    topic_id: int = Path(...),
    service: TopicService = Depends(TopicService.instance),
):
    """Update title / description / order, or move it with ``direction``."""
    topic = await service.update_topic(topic_id, data)
    return TopicEnvelope(topic=TopicResponse.model_validate(topic))


@router.delete("/topics/{topic_id}", response_model=MessageResponse)
async def delete_topic(
    topic_id: int = Path(...),
    service: TopicService = Depends(TopicService.instance),
):
    """Delete a topic and all of its articles."""
    _, removed = await service.delete_topic(topic_id)
    return MessageResponse(
        message="Topic and associated articles deleted",
        details={"deletedArticles": removed},
    )


# ── Article review & ordering ──

@router.get("/articles", response_model=ArticleListEnvelope)
async def list_articles(
    status: Optional[str] = Query(None, description="Filter by status"),
    topic_id: Optional[int] = Query(None, alias="topicId", description="Filter by topic"),
    service: ArticleService = Depends(ArticleService.instance),
):
    """List all articles, newest first."""
    articles = await service.list_for_review(status=status, topic_id=topic_id)
    return ArticleListEnvelope(
        articles=[ArticleWithTopicResponse.model_validate(a) for a in articles]
    )


@router.patch("/articles/{article_id}/status", response_model=ArticleEnvelope)
async def update_article_status(
    data: StatusUpdate,
    article_id: int = Path(...),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Approve, reject, publish, unpublish, or send back to pending."""
    article = await service.set_status(article_id, data.status, data.rejection_reason)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.patch("/articles/{article_id}/order", response_model=ArticleEnvelope)
async def update_article_order(
    data: OrderUpdate,
    article_id: int = Path(...),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Set the display order within the topic."""
    article = await service.set_order(article_id, data)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))
