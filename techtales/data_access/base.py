"""
Data access layer contract.

Every implementation reports failures as DataAccessFailure; callers do not
distinguish failure subtypes.
"""

from typing import List, Optional, Protocol

from techtales.schemas.article import Article, ArticleFilter
from techtales.schemas.comment import Comment, CommentCreate


class DataAccessLayer(Protocol):
    """Async CRUD boundary over articles and comments."""

    async def get_article_by_slug(self, slug: str) -> Optional[Article]:
        ...

    async def get_articles(self, filter: Optional[ArticleFilter] = None) -> List[Article]:
        ...

    async def get_comments_by_article_id(self, article_id: str) -> List[Comment]:
        ...

    async def create_comment(self, data: CommentCreate) -> Comment:
        ...

    async def delete_comment(self, comment_id: str) -> None:
        ...
