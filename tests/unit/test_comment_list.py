"""Unit tests for the comment list."""

from unittest.mock import AsyncMock, Mock

import pytest

from techtales.views.comment_list import DELETE_CONFIRMATION, EMPTY_MESSAGE, CommentList


def make_list(session, data_access, notifier, comments, **kwargs):
    return CommentList(session, data_access, notifier, comments, **kwargs)


class TestRender:
    """Rendering in the order supplied."""

    @pytest.mark.asyncio
    async def test_empty_state(self, session_store, data_access, notifier):
        view = make_list(session_store, data_access, notifier, []).render()

        assert view.items == []
        assert view.empty_message == EMPTY_MESSAGE

    @pytest.mark.asyncio
    async def test_order_and_cards(self, session_store, data_access, notifier, three_comments):
        view = make_list(session_store, data_access, notifier, three_comments).render()

        assert [item.id for item in view.items] == ["1", "2", "3"]
        assert view.empty_message is None
        first = view.items[0]
        assert first.author_name == "Jane Smith"
        assert first.avatar_fallback == "Ja"
        assert first.date == "March 1, 2024"

    @pytest.mark.asyncio
    async def test_anonymous_cannot_delete_anything(
        self, session_store, data_access, notifier, three_comments
    ):
        view = make_list(session_store, data_access, notifier, three_comments).render()

        assert [item.can_delete for item in view.items] == [False, False, False]

    @pytest.mark.asyncio
    async def test_delete_offered_only_on_own_comments(
        self, jane_session, data_access, notifier, three_comments
    ):
        view = make_list(jane_session, data_access, notifier, three_comments).render()

        assert [item.can_delete for item in view.items] == [True, False, True]


class TestDelete:
    """Deleting one of the current user's comments."""

    @pytest.mark.asyncio
    async def test_declined_confirmation_sends_nothing(
        self, jane_session, data_access, notifier, three_comments
    ):
        confirm = Mock(return_value=False)
        refresh = AsyncMock()
        comment_list = make_list(
            jane_session, data_access, notifier, three_comments, on_comment_deleted=refresh
        )

        assert await comment_list.delete_comment("1", confirm) is False

        confirm.assert_called_once_with(DELETE_CONFIRMATION)
        assert data_access.calls_to("delete_comment") == []
        refresh.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirmed_delete_refreshes(
        self, jane_session, data_access, notifier, three_comments
    ):
        refresh = AsyncMock()
        comment_list = make_list(
            jane_session, data_access, notifier, three_comments, on_comment_deleted=refresh
        )

        assert await comment_list.delete_comment("3", AsyncMock(return_value=True)) is True

        assert data_access.calls_to("delete_comment") == ["3"]
        refresh.assert_awaited_once()
        # Not removed locally; the parent's refresh replaces the list
        assert [c.id for c in comment_list.comments] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_foreign_comment_is_never_confirmed(
        self, jane_session, data_access, notifier, three_comments
    ):
        confirm = Mock(return_value=True)
        comment_list = make_list(jane_session, data_access, notifier, three_comments)

        assert await comment_list.delete_comment("2", confirm) is False

        confirm.assert_not_called()
        assert data_access.calls_to("delete_comment") == []

    @pytest.mark.asyncio
    async def test_unknown_comment(self, jane_session, data_access, notifier, three_comments):
        comment_list = make_list(jane_session, data_access, notifier, three_comments)

        assert await comment_list.delete_comment("999", Mock(return_value=True)) is False

    @pytest.mark.asyncio
    async def test_backend_failure_notifies(
        self, jane_session, data_access, notifier, three_comments
    ):
        data_access.fail["delete_comment"] = True
        refresh = AsyncMock()
        comment_list = make_list(
            jane_session, data_access, notifier, three_comments, on_comment_deleted=refresh
        )

        assert await comment_list.delete_comment("1", Mock(return_value=True)) is False

        refresh.assert_not_awaited()
        assert [c.id for c in comment_list.comments] == ["1", "2", "3"]
        assert notifier.drain()[-1].message == "Failed to delete comment"
