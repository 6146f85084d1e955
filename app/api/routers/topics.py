"""
Topics Router - public read paths.

No authentication. Only published articles are ever visible here.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.schemas.article import (
    PublicArticleDetail,
    PublicArticleEnvelope,
    PublicArticleSummary,
    TopicArticlesEnvelope,
)
from app.api.schemas.topic import TopicListEnvelope, TopicResponse
from app.core.services.article_service import ArticleService
from app.core.services.topic_service import TopicService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=TopicListEnvelope)
async def list_topics(service: TopicService = Depends(TopicService.instance)):
    """List topics in display order."""
    topics = await service.list_topics()
    return TopicListEnvelope(topics=[TopicResponse.model_validate(t) for t in topics])


@router.get("/{slug}/articles", response_model=TopicArticlesEnvelope)
async def list_topic_articles(
    slug: str,
    service: ArticleService = Depends(ArticleService.instance),
):
    """List published articles under a topic."""
    topic, articles = await service.list_published(slug)
    return TopicArticlesEnvelope(
        topic=TopicResponse.model_validate(topic),
        articles=[PublicArticleSummary.model_validate(a) for a in articles],
    )


@router.get("/{topic_slug}/articles/{article_slug}", response_model=PublicArticleEnvelope)
async def get_topic_article(
    topic_slug: str,
    article_slug: str,
    service: ArticleService = Depends(ArticleService.instance),
):
    """Single published article."""
    topic, article = await service.get_published(topic_slug, article_slug)
    return PublicArticleEnvelope(
        topic=TopicResponse.model_validate(topic),
        article=PublicArticleDetail.model_validate(article),
    )
