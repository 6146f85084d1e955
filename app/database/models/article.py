from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    JSON,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import (
    Mapped,
    mapped_column,
    relationship,
)

from app.database.models.model_base import SqlAlchemyModel
from app.utils.enums import ArticleStatus

if TYPE_CHECKING:
    from app.database.models.topic import Topic


class Article(SqlAlchemyModel):
    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        index=True,
    )

    topic_id: Mapped[int] = mapped_column(
        ForeignKey("topics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Markdown
    content: Mapped[str] = mapped_column(Text, nullable=False)

    cover_image: Mapped[Optional[str]] = mapped_column(Text)

    author_uid: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
    )

    author_name: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ArticleStatus.DRAFT,
        index=True,
    )

    rejection_reason: Mapped[Optional[str]] = mapped_column(Text)

    order: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    tags: Mapped[List[str]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        default=list,
        nullable=False,
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Loaded explicitly (selectinload) where a topic summary is needed
    topic: Mapped["Topic"] = relationship(lazy="raise")

    def __repr__(self) -> str:
        return f"<Article id={self.id} slug={self.slug} status={self.status}>"
