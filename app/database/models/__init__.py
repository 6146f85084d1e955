"""Database models package - import all models so Alembic can discover them."""

from app.database.models.model_base import SqlAlchemyModel
from app.database.models.user import User
from app.database.models.topic import Topic
from app.database.models.article import Article

__all__ = [
    "SqlAlchemyModel",
    "User",
    "Topic",
    "Article",
]
