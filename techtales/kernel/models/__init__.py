"""
Kernel Data Models

SQLAlchemy models for articles, comments and the local storage table.
"""

from techtales.kernel.models.base import Base, TimestampMixin, generate_id, utcnow
from techtales.kernel.models.article import ArticleRecord
from techtales.kernel.models.comment import CommentRecord
from techtales.kernel.models.local_storage import LocalStorageEntry

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_id",
    "utcnow",
    "ArticleRecord",
    "CommentRecord",
    "LocalStorageEntry",
]
