"""User model - synced with Firebase Authentication."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database.models.model_base import SqlAlchemyModel, utcnow
from app.utils.enums import UserRole


class User(SqlAlchemyModel):
    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        nullable=False,
        index=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    display_name: Mapped[Optional[str]] = mapped_column(String(255))

    photo_url: Mapped[Optional[str]] = mapped_column(Text)

    provider: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="password",
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.STUDENT,
    )

    last_login_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User uid={self.uid} email={self.email} role={self.role}>"
