"""
Comment form: collects a new comment for one article.
"""

from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, ValidationError

from techtales.data_access.base import DataAccessLayer
from techtales.errors import CommentValidationError, DataAccessFailure
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger
from techtales.schemas.comment import (
    COMMENT_MIN_LENGTH_MESSAGE,
    Comment,
    CommentCreate,
    CommentFormValues,
)

logger = get_logger(__name__)

RefreshCallback = Callable[[], Awaitable[None]]

LOGIN_PROMPT = "Please log in to join the conversation."


class CommentFormView(BaseModel):
    """What the form renders: a login prompt or the input form."""

    show_form: bool
    prompt: Optional[str] = None
    heading: str = "Leave a comment"
    placeholder: str = "Share your thoughts..."
    submit_label: str = "Post Comment"
    content: str = ""
    error: Optional[str] = None


class CommentForm:
    """
    Submits comments as the current session user.

    Author fields are always taken from the session store, never from input.
    """

    def __init__(
        self,
        session: SessionStore,
        data_access: DataAccessLayer,
        notifier: Notifier,
        article_id: str,
        parent_id: Optional[str] = None,
        on_comment_added: Optional[RefreshCallback] = None,
    ):
        self.session = session
        self.data_access = data_access
        self.notifier = notifier
        self.article_id = article_id
        self.parent_id = parent_id
        self.on_comment_added = on_comment_added
        self.content = ""
        self.error: Optional[str] = None

    def render(self) -> CommentFormView:
        if not self.session.is_authenticated:
            return CommentFormView(show_form=False, prompt=LOGIN_PROMPT)
        return CommentFormView(show_form=True, content=self.content, error=self.error)

    def reset(self) -> None:
        self.content = ""
        self.error = None

    def validate(self, content: str) -> CommentFormValues:
        """
        Raises:
            CommentValidationError: content too short or too long
        """
        try:
            return CommentFormValues(content=content)
        except ValidationError as exc:
            error = exc.errors()[0]
            message = (
                COMMENT_MIN_LENGTH_MESSAGE
                if error["type"] == "string_too_short"
                else error["msg"]
            )
            raise CommentValidationError(message, error_type=error["type"]) from exc

    async def submit(self, content: str) -> Optional[Comment]:
        """
        Post a comment.

        Returns the created comment, or None when nobody is logged in or the
        data access layer failed (both are notified).

        Raises:
            CommentValidationError: content failed validation; nothing is sent
        """
        self.content = content
        try:
            values = self.validate(content)
        except CommentValidationError as exc:
            self.error = str(exc)
            raise
        self.error = None

        user = self.session.user
        if user is None:
            self.notifier.notify(NotificationKind.ERROR, "You must be logged in to comment")
            return None

        try:
            comment = await self.data_access.create_comment(
                CommentCreate(
                    content=values.content,
                    article_id=self.article_id,
                    author_id=user.id,
                    author_name=user.name,
                    author_avatar=user.avatar,
                    parent_id=self.parent_id,
                )
            )
        except DataAccessFailure:
            logger.exception(
                "Error posting comment",
                extra={"article_id": self.article_id},
            )
            self.notifier.notify(NotificationKind.ERROR, "Failed to post comment")
            return None

        self.reset()
        if self.on_comment_added is not None:
            await self.on_comment_added()
        return comment
