"""
Comment list: renders the comments of one article and lets authors delete theirs.
"""

import inspect
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from pydantic import BaseModel

from techtales.data_access.base import DataAccessLayer
from techtales.errors import DataAccessFailure
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger
from techtales.schemas.comment import Comment
from techtales.views.formatting import format_date, initials

logger = get_logger(__name__)

RefreshCallback = Callable[[], Awaitable[None]]
ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]

EMPTY_MESSAGE = "No comments yet. Be the first to share your thoughts!"
DELETE_CONFIRMATION = "Are you sure you want to delete this comment?"


class CommentItemView(BaseModel):
    """One rendered comment card."""

    id: str
    author_name: str
    author_avatar: Optional[str] = None
    avatar_fallback: str
    content: str
    date: str
    can_delete: bool


class CommentListView(BaseModel):
    """Rendered list, or the empty-state message."""

    items: List[CommentItemView] = []
    empty_message: Optional[str] = None


class CommentList:
    """
    Renders comments in the order supplied.

    Deletion needs interactive confirmation and is only offered to the
    comment's author. The list is never changed optimistically; the parent
    refreshes it after a successful delete.
    """

    def __init__(
        self,
        session: SessionStore,
        data_access: DataAccessLayer,
        notifier: Notifier,
        comments: Sequence[Comment] = (),
        on_comment_deleted: Optional[RefreshCallback] = None,
    ):
        self.session = session
        self.data_access = data_access
        self.notifier = notifier
        self.comments: List[Comment] = list(comments)
        self.on_comment_deleted = on_comment_deleted

    def set_comments(self, comments: Sequence[Comment]) -> None:
        self.comments = list(comments)

    def can_delete(self, comment: Comment) -> bool:
        user = self.session.user
        return user is not None and user.id == comment.author_id

    def render(self) -> CommentListView:
        if not self.comments:
            return CommentListView(empty_message=EMPTY_MESSAGE)
        return CommentListView(
            items=[
                CommentItemView(
                    id=c.id,
                    author_name=c.author_name,
                    author_avatar=c.author_avatar,
                    avatar_fallback=initials(c.author_name),
                    content=c.content,
                    date=format_date(c.created_at),
                    can_delete=self.can_delete(c),
                )
                for c in self.comments
            ]
        )

    async def delete_comment(self, comment_id: str, confirm: ConfirmCallback) -> bool:
        """
        Delete one of the current user's comments.

        Returns True if the delete went through. Unknown or foreign comments and
        a declined confirmation return False without calling the data layer.
        """
        comment = next((c for c in self.comments if c.id == comment_id), None)
        if comment is None or not self.can_delete(comment):
            logger.warning("Delete not offered for comment", extra={"comment_id": comment_id})
            return False

        answer = confirm(DELETE_CONFIRMATION)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        try:
            await self.data_access.delete_comment(comment_id)
        except DataAccessFailure:
            logger.exception("Error deleting comment", extra={"comment_id": comment_id})
            self.notifier.notify(NotificationKind.ERROR, "Failed to delete comment")
            return False

        if self.on_comment_deleted is not None:
            await self.on_comment_deleted()
        return True
