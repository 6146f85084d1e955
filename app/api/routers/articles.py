"""
Articles Router - author workspace.

All endpoints require the ``author`` role (admins pass implicitly).
Ownership and state guards live in ``app.core.workflow``.
"""

import logging

from fastapi import APIRouter, Depends, Path

from app.api.schemas.article import (
    ArticleCreate,
    ArticleDetailEnvelope,
    ArticleEnvelope,
    ArticleListEnvelope,
    ArticleResponse,
    ArticleUpdate,
    ArticleWithTopicResponse,
)
from app.api.schemas.common import MessageResponse
from app.core.auth import AuthContext, require_author
from app.core.services.article_service import ArticleService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/my", response_model=ArticleListEnvelope)
async def list_my_articles(
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """List the caller's own articles, newest first."""
    articles = await service.list_mine(ctx)
    return ArticleListEnvelope(
        articles=[ArticleWithTopicResponse.model_validate(a) for a in articles]
    )


@router.post("", response_model=ArticleEnvelope, status_code=201)
async def create_article(
    data: ArticleCreate,
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Create a new article (always saved as draft)."""
    article = await service.create_article(ctx, data)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.get("/{article_id}", response_model=ArticleDetailEnvelope)
async def get_article(
    article_id: int = Path(...),
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Get a single article (owner or admin)."""
    article = await service.get_for_editor(ctx, article_id)
    return ArticleDetailEnvelope(article=ArticleWithTopicResponse.model_validate(article))


@router.patch("/{article_id}", response_model=ArticleEnvelope)
async def update_article(
    data: ArticleUpdate,
    article_id: int = Path(...),
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Update content (draft/rejected only, unless admin)."""
    article = await service.update_article(ctx, article_id, data)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.delete("/{article_id}", response_model=MessageResponse)
async def delete_article(
    article_id: int = Path(...),
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Delete a draft or rejected article (owner or admin)."""
    await service.delete_article(ctx, article_id)
    return MessageResponse(message="Article deleted")


@router.patch("/{article_id}/submit", response_model=ArticleEnvelope)
async def submit_article(
    article_id: int = Path(...),
    ctx: AuthContext = Depends(require_author),
    service: ArticleService = Depends(ArticleService.instance),
):
    """Submit for review (draft/rejected -> pending)."""
    article = await service.submit_article(ctx, article_id)
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))
