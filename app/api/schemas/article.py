from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

from app.api.schemas.common import CamelModel
from app.api.schemas.topic import TopicResponse, TopicSummary


# ── Requests ──

class ArticleCreate(CamelModel):
    """New article payload. Any ``status`` sent by the client is ignored."""
    title: Optional[str] = Field(None, max_length=255)
    topic_id: Optional[int] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None


class ArticleUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    topic_id: Optional[int] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None


class StatusUpdate(CamelModel):
    status: str
    rejection_reason: Optional[str] = None


class OrderUpdate(CamelModel):
    order: Optional[Union[StrictInt, StrictFloat]] = None
    direction: Optional[Literal["up", "down"]] = None


# ── Responses ──

class ArticleResponse(CamelModel):
    id: int
    title: str
    slug: str
    topic_id: int
    content: str
    cover_image: Optional[str] = None
    author_uid: str
    author_name: str
    status: str
    rejection_reason: Optional[str] = None
    order: float
    tags: List[str] = []
    created_at: datetime
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


class ArticleWithTopicResponse(ArticleResponse):
    topic: Optional[TopicSummary] = None


class PublicArticleSummary(CamelModel):
    """Public-safe projection used in topic listings."""
    id: int
    title: str
    slug: str
    cover_image: Optional[str] = None
    author_name: str
    tags: List[str] = []
    published_at: Optional[datetime] = None
    order: float


class PublicArticleDetail(PublicArticleSummary):
    topic_id: int
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ArticleEnvelope(BaseModel):
    article: ArticleResponse


class ArticleDetailEnvelope(BaseModel):
    article: ArticleWithTopicResponse


class ArticleListEnvelope(BaseModel):
    articles: List[ArticleWithTopicResponse]


class TopicArticlesEnvelope(BaseModel):
    topic: TopicResponse
    articles: List[PublicArticleSummary]


class PublicArticleEnvelope(BaseModel):
    topic: TopicResponse
    article: PublicArticleDetail
