from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.api.schemas.common import CamelModel


class TopicCreate(CamelModel):
    # Presence checked by the service so the error reads "Title is required"
    title: Optional[str] = Field(None, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class TopicUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    order: Optional[float] = None
    direction: Optional[Literal["up", "down"]] = None


class TopicSummary(CamelModel):
    id: int
    title: str
    slug: str


class TopicResponse(TopicSummary):
    description: Optional[str] = None
    order: float
    created_by: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class TopicEnvelope(BaseModel):
    topic: TopicResponse


class TopicListEnvelope(BaseModel):
    topics: List[TopicResponse]
