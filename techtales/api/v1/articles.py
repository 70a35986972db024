"""
Article endpoints: listings, the article page and its comments.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from techtales.api.deps import CurrentUser, DataAccess, Notifications, OpenArticlePage
from techtales.schemas.article import Article, ArticleFilter, CategorySummary
from techtales.schemas.common import PaginatedResponse
from techtales.views.article_page import ArticlePage, ArticlePageView, SharePayload
from techtales.views.comment_list import CommentListView
from techtales.views.listing import ITEMS_PER_PAGE, NewsFeed, category_summaries

router = APIRouter()


class CommentSubmit(BaseModel):
    content: str
    parent_id: Optional[str] = None


class ShareRequest(BaseModel):
    url: str


class ToggleResponse(BaseModel):
    active: bool


class DeleteCommentResponse(BaseModel):
    deleted: bool
    comments: CommentListView


def _loaded(page: ArticlePage) -> ArticlePage:
    if page.not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return page


@router.get("/articles", response_model=List[Article])
async def list_articles(
    data_access: DataAccess,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """List articles, newest first."""
    return await data_access.get_articles(
        ArticleFilter(category=category, tag=tag, search=search, limit=limit, offset=offset)
    )


@router.get("/news", response_model=PaginatedResponse[Article])
async def news_feed(
    data_access: DataAccess,
    notifications: Notifications,
    search: str = "",
    page: int = Query(1, ge=1),
):
    """Searchable news feed, six articles per page."""
    feed = NewsFeed(data_access, notifications, items_per_page=ITEMS_PER_PAGE)
    await feed.load()
    feed.filter(search)
    return feed.page(page)


@router.get("/categories", response_model=List[CategorySummary])
async def categories(data_access: DataAccess, notifications: Notifications):
    """Categories with article counts."""
    feed = NewsFeed(data_access, notifications)
    return category_summaries(await feed.load())


@router.get("/articles/{slug}", response_model=ArticlePageView)
async def article_page(page: OpenArticlePage):
    """Article page: rendered content, comments and related articles."""
    return _loaded(page).render()


@router.post("/articles/{slug}/like", response_model=ToggleResponse)
async def toggle_like(page: OpenArticlePage):
    return ToggleResponse(active=_loaded(page).toggle_like())


@router.post("/articles/{slug}/bookmark", response_model=ToggleResponse)
async def toggle_bookmark(page: OpenArticlePage):
    return ToggleResponse(active=_loaded(page).toggle_bookmark())


@router.post("/articles/{slug}/share", response_model=SharePayload)
async def share_article(data: ShareRequest, page: OpenArticlePage):
    """No native share sheet on the server; the link is copied instead."""
    return await _loaded(page).share(data.url)


@router.get("/articles/{slug}/comments", response_model=CommentListView)
async def list_comments(page: OpenArticlePage):
    return _loaded(page).comment_list.render()


@router.post(
    "/articles/{slug}/comments",
    response_model=CommentListView,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(data: CommentSubmit, user: CurrentUser, page: OpenArticlePage):
    """Post a comment as the current user and return the refreshed list."""
    form = _loaded(page).comment_form
    form.parent_id = data.parent_id
    if await form.submit(data.content) is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to post comment",
        )
    return page.comment_list.render()


@router.delete("/articles/{slug}/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    user: CurrentUser,
    page: OpenArticlePage,
    confirm: bool = False,
):
    """
    Delete one of the current user's comments.

    ``confirm`` carries the answer to the confirmation prompt; without it
    nothing is deleted.
    """
    comment_list = _loaded(page).comment_list
    comment = next((c for c in comment_list.comments if c.id == comment_id), None)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if not comment_list.can_delete(comment):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author can delete this comment",
        )
    deleted = await comment_list.delete_comment(comment_id, lambda _message: confirm)
    return DeleteCommentResponse(deleted=deleted, comments=comment_list.render())
