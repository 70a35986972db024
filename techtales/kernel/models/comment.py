"""
Comment model.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from techtales.kernel.models.base import Base, TimestampMixin, generate_id


class CommentRecord(Base, TimestampMixin):
    """A comment on one article, with author fields copied at post time."""
    
    __tablename__ = "comments"
    
    # Integer key gives the insertion order comments are listed in
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, default=generate_id)
    article_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_avatar: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Replies are stored but rendered as a flat list
    parent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    
    def __repr__(self) -> str:
        return f"<CommentRecord {self.id} article={self.article_id}>"
