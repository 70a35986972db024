"""
Article model. The presentation core only reads these rows.
"""

from typing import List, Optional

from sqlalchemy import Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from techtales.kernel.models.base import Base, TimestampMixin, generate_id


class ArticleRecord(Base, TimestampMixin):
    """A published article."""
    
    __tablename__ = "articles"
    
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, default="", nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    cover_image: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_avatar: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    read_time: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    
    def __repr__(self) -> str:
        return f"<ArticleRecord {self.id} slug={self.slug}>"
