"""
Article review workflow.

    draft ──submit──▶ pending ──approve──▶ approved ──publish──▶ published
      ▲                 │  ▲                  │  ▲                  │
      │              reject │                 │  └────unpublish─────┘
      │                 ▼  │                  │
      └── (author) ── rejected ◀── (admin) ───┘ back to pending

Authors move their own draft/rejected articles to ``pending``. Admins move
articles onward from ``pending`` or back to ``pending``; they never act on
a ``draft``. Anything outside the tables below raises
``InvalidTransitionError`` and leaves the article untouched.
"""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from app.core.auth import AuthContext
from app.core.exceptions import (
    BadRequestError,
    InvalidTransitionError,
    PermissionDeniedError,
)
from app.database.models.article import Article
from app.database.models.model_base import utcnow
from app.utils.enums import ArticleStatus, UserRole

logger = logging.getLogger(__name__)

S = ArticleStatus

AUTHOR_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    S.DRAFT: frozenset({S.PENDING}),
    S.REJECTED: frozenset({S.PENDING}),
}

ADMIN_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    S.PENDING: frozenset({S.APPROVED, S.REJECTED}),
    S.APPROVED: frozenset({S.PUBLISHED, S.PENDING}),
    S.PUBLISHED: frozenset({S.APPROVED}),
    S.REJECTED: frozenset({S.PENDING}),
}

_TABLES = {
    UserRole.AUTHOR: AUTHOR_TRANSITIONS,
    UserRole.ADMIN: ADMIN_TRANSITIONS,
}


def can_transition(current: str, target: str, actor: str) -> bool:
    """Check whether ``actor`` (author or admin) may move current -> target."""
    table = _TABLES.get(actor, {})
    return target in table.get(current, frozenset())


def validate_transition(current: str, target: str, actor: str) -> None:
    """Raise InvalidTransitionError when the edge is not in the actor's table."""
    if target not in S.ALL:
        raise BadRequestError(f"Invalid status. Must be one of: {', '.join(S.ALL)}")
    if not can_transition(current, target, actor):
        raise InvalidTransitionError(current, target)


def _ensure_owner_or_admin(article: Article, ctx: AuthContext) -> None:
    if not ctx.is_admin and not ctx.owns(article):
        raise PermissionDeniedError("Not your article")


def ensure_can_view(article: Article, ctx: AuthContext) -> None:
    _ensure_owner_or_admin(article, ctx)


def ensure_can_edit(article: Article, ctx: AuthContext) -> None:
    """Owner or admin; non-admins only while the article is draft/rejected."""
    _ensure_owner_or_admin(article, ctx)
    if article.status not in S.EDITABLE and not ctx.is_admin:
        raise BadRequestError(f'Cannot edit an article in "{article.status}" state')


def ensure_can_delete(article: Article, ctx: AuthContext) -> None:
    """Owner or admin, and only while the article is draft/rejected."""
    _ensure_owner_or_admin(article, ctx)
    if article.status not in S.EDITABLE:
        raise BadRequestError("Can only delete draft or rejected articles")


def submit(article: Article, ctx: AuthContext) -> Article:
    """Author submission for review: draft/rejected -> pending."""
    if not ctx.owns(article):
        raise PermissionDeniedError("Not your article")
    if not can_transition(article.status, S.PENDING, UserRole.AUTHOR):
        raise InvalidTransitionError(
            article.status,
            S.PENDING,
            f'Cannot submit an article in "{article.status}" state',
        )

    previous = article.status
    article.status = S.PENDING
    article.rejection_reason = None
    logger.info(f"Article {article.id} submitted by {ctx.uid}: {previous} -> {S.PENDING}")
    return article


def review(
    article: Article,
    target: str,
    rejection_reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Article:
    """
    Admin status change (approve, reject, publish, unpublish, back to pending).

    Args:
        article: Article to move
        target: Requested status
        rejection_reason: Stored when rejecting, if supplied
        now: Timestamp for ``published_at`` (defaults to the current time)
    """
    validate_transition(article.status, target, UserRole.ADMIN)

    previous = article.status
    article.status = target
    if target == S.REJECTED and rejection_reason:
        article.rejection_reason = rejection_reason
    if target == S.PUBLISHED:
        article.published_at = now or utcnow()

    logger.info(f"Article {article.id} reviewed: {previous} -> {target}")
    return article
