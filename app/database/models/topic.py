from typing import Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database.models.model_base import SqlAlchemyModel


class Topic(SqlAlchemyModel):
    __tablename__ = "topics"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    description: Mapped[Optional[str]] = mapped_column(Text)

    # Only the relative order is meaningful (fractional reordering)
    order: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    created_by: Mapped[str] = mapped_column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<Topic id={self.id} slug={self.slug}>"
