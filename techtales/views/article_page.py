"""
Article page: one article with its comments and related reading.
"""

from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel

from techtales.data_access.base import DataAccessLayer
from techtales.errors import DataAccessFailure
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger
from techtales.schemas.article import Article, ArticleFilter
from techtales.views.comment_form import CommentForm, CommentFormView
from techtales.views.comment_list import CommentList, CommentListView
from techtales.views.formatting import format_date
from techtales.views.markdown_render import render_markdown

logger = get_logger(__name__)

RELATED_LIMIT = 3

NativeShare = Callable[["SharePayload"], Awaitable[None]]


class SharePayload(BaseModel):
    """What gets shared: native share sheet or clipboard."""

    title: str
    text: str
    url: str
    copied_to_clipboard: bool = False


class ArticlePageView(BaseModel):
    """Everything the article page renders."""

    article: Article
    html: str
    published: str
    has_liked: bool
    is_bookmarked: bool
    comment_form: CommentFormView
    comments: CommentListView
    related: List[Article]


class ArticlePage:
    """
    Orchestrates loading and interaction for one article.

    Like and bookmark flags are local to this page instance and never persisted.
    """

    def __init__(
        self,
        session: SessionStore,
        data_access: DataAccessLayer,
        notifier: Notifier,
        slug: str,
    ):
        self.session = session
        self.data_access = data_access
        self.notifier = notifier
        self.slug = slug

        self.article: Optional[Article] = None
        self.related: List[Article] = []
        self.not_found = False
        self.has_liked = False
        self.is_bookmarked = False
        self.comment_form: Optional[CommentForm] = None
        self.comment_list: Optional[CommentList] = None

    async def load(self) -> Optional[Article]:
        """
        Fetch the article, related articles and comments.

        Sets not_found when the slug does not resolve; callers redirect.
        """
        try:
            self.article = await self.data_access.get_article_by_slug(self.slug)
        except DataAccessFailure:
            logger.exception("Error loading article", extra={"slug": self.slug})
            self.article = None
        if self.article is None:
            self.not_found = True
            return None

        self.comment_form = CommentForm(
            self.session,
            self.data_access,
            self.notifier,
            article_id=self.article.id,
            on_comment_added=self.handle_comment_added,
        )
        self.comment_list = CommentList(
            self.session,
            self.data_access,
            self.notifier,
            on_comment_deleted=self.refresh_comments,
        )

        try:
            candidates = await self.data_access.get_articles(ArticleFilter(limit=RELATED_LIMIT + 1))
            self.related = [a for a in candidates if a.id != self.article.id][:RELATED_LIMIT]
        except DataAccessFailure:
            logger.exception("Error loading related articles", extra={"slug": self.slug})
            self.related = []

        if not await self.refresh_comments():
            self.notifier.notify(NotificationKind.ERROR, "Failed to load comments")
        return self.article

    async def refresh_comments(self) -> bool:
        """Re-fetch comments. On failure the last good list is kept."""
        if self.article is None or self.comment_list is None:
            return False
        try:
            comments = await self.data_access.get_comments_by_article_id(self.article.id)
        except DataAccessFailure:
            logger.exception("Error loading comments", extra={"article_id": self.article.id})
            return False
        self.comment_list.set_comments(comments)
        return True

    async def handle_comment_added(self) -> None:
        if await self.refresh_comments():
            self.notifier.notify(NotificationKind.SUCCESS, "Comment posted")

    def toggle_like(self) -> bool:
        self.has_liked = not self.has_liked
        self.notifier.notify(
            NotificationKind.SUCCESS,
            "Thank you for liking this article!" if self.has_liked
            else "You have removed your like from this article",
        )
        return self.has_liked

    def toggle_bookmark(self) -> bool:
        self.is_bookmarked = not self.is_bookmarked
        self.notifier.notify(
            NotificationKind.SUCCESS,
            "This article has been added to your bookmarks" if self.is_bookmarked
            else "This article has been removed from your bookmarks",
        )
        return self.is_bookmarked

    async def share(self, url: str, native_share: Optional[NativeShare] = None) -> SharePayload:
        """Share through the native share sheet, falling back to the clipboard."""
        if self.article is None:
            raise LookupError(f"Article not loaded: {self.slug}")
        payload = SharePayload(title=self.article.title, text=self.article.excerpt, url=url)
        if native_share is not None:
            try:
                await native_share(payload)
                return payload
            except Exception:
                logger.info("Native share failed, copying link instead", exc_info=True)
        self.notifier.notify(NotificationKind.SUCCESS, "Link copied to clipboard")
        return payload.model_copy(update={"copied_to_clipboard": True})

    def render(self) -> ArticlePageView:
        if self.article is None or self.comment_form is None or self.comment_list is None:
            raise LookupError(f"Article not loaded: {self.slug}")
        return ArticlePageView(
            article=self.article,
            html=render_markdown(self.article.content),
            published=format_date(self.article.created_at),
            has_liked=self.has_liked,
            is_bookmarked=self.is_bookmarked,
            comment_form=self.comment_form.render(),
            comments=self.comment_list.render(),
            related=self.related,
        )
