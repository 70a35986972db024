"""
SQLAlchemy-backed data access layer.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from pydantic import ValidationError
from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techtales.errors import DataAccessFailure
from techtales.kernel.models import ArticleRecord, CommentRecord
from techtales.logging_config import get_logger
from techtales.schemas.article import Article, ArticleFilter
from techtales.schemas.comment import Comment, CommentCreate

logger = get_logger(__name__)


class DatabaseDataAccess:
    """
    Articles and comments stored through SQLAlchemy.

    Rows are validated into the pydantic record shapes on the way out, and
    inputs are validated on the way in.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    yield session
        except (SQLAlchemyError, ValidationError) as exc:
            raise DataAccessFailure(operation, exc) from exc

    async def get_article_by_slug(self, slug: str) -> Optional[Article]:
        async with self._session("get_article_by_slug") as session:
            result = await session.execute(
                select(ArticleRecord).where(ArticleRecord.slug == slug)
            )
            record = result.scalar_one_or_none()
            return Article.model_validate(record) if record else None

    async def get_articles(self, filter: Optional[ArticleFilter] = None) -> List[Article]:
        filter = filter or ArticleFilter()
        query = select(ArticleRecord).order_by(
            ArticleRecord.created_at.desc(), ArticleRecord.id
        )
        if filter.category:
            query = query.where(func.lower(ArticleRecord.category) == filter.category.lower())
        if filter.search:
            pattern = f"%{filter.search.lower()}%"
            query = query.where(
                or_(
                    func.lower(ArticleRecord.title).like(pattern),
                    func.lower(ArticleRecord.excerpt).like(pattern),
                )
            )
        # Tags live in a JSON column; filter them after loading
        if not filter.tag:
            query = query.offset(filter.offset)
            if filter.limit:
                query = query.limit(filter.limit)

        async with self._session("get_articles") as session:
            result = await session.execute(query)
            articles = [Article.model_validate(r) for r in result.scalars().all()]

        if filter.tag:
            tag = filter.tag.lower()
            articles = [a for a in articles if tag in (t.lower() for t in a.tags)]
            end = filter.offset + filter.limit if filter.limit else None
            articles = articles[filter.offset:end]
        return articles

    async def get_comments_by_article_id(self, article_id: str) -> List[Comment]:
        async with self._session("get_comments_by_article_id") as session:
            result = await session.execute(
                select(CommentRecord)
                .where(CommentRecord.article_id == article_id)
                .order_by(CommentRecord.seq)
            )
            return [Comment.model_validate(r) for r in result.scalars().all()]

    async def create_comment(self, data: CommentCreate) -> Comment:
        async with self._session("create_comment") as session:
            record = CommentRecord(
                article_id=data.article_id,
                author_id=data.author_id,
                author_name=data.author_name,
                author_avatar=data.author_avatar,
                content=data.content,
                parent_id=data.parent_id,
            )
            session.add(record)
            await session.flush()
            comment = Comment.model_validate(record)
        logger.info(
            "Comment created",
            extra={"comment_id": comment.id, "article_id": comment.article_id},
        )
        return comment

    async def delete_comment(self, comment_id: str) -> None:
        async with self._session("delete_comment") as session:
            result = await session.execute(
                delete(CommentRecord).where(CommentRecord.id == comment_id)
            )
            deleted = result.rowcount
        if not deleted:
            raise DataAccessFailure("delete_comment", LookupError(f"Comment {comment_id} not found"))
        logger.info("Comment deleted", extra={"comment_id": comment_id})
