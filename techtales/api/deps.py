"""
FastAPI dependencies: the session store, data access layer and view state
owned by the application.
"""

from typing import Annotated, Dict, Optional

from fastapi import Depends, FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techtales.data_access.base import DataAccessLayer
from techtales.data_access.database_access import DatabaseDataAccess
from techtales.errors import Unauthenticated
from techtales.kernel.identity.credentials import CredentialSet
from techtales.kernel.identity.oauth import WindowOpener
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.identity.storage import DatabaseSessionStorage
from techtales.kernel.notifications import NotificationCenter
from techtales.schemas.user import User
from techtales.views.article_page import ArticlePage
from techtales.views.navigation import NavigationMenu


async def install_services(
    app: FastAPI,
    session_maker: async_sessionmaker[AsyncSession],
    *,
    credentials: Optional[CredentialSet] = None,
    window_opener: Optional[WindowOpener] = None,
    latency: Optional[float] = None,
    oauth_timeout: Optional[float] = None,
) -> SessionStore:
    """
    Create the per-application services and restore the persisted session.

    Called from the lifespan handler; tests call it directly.
    """
    notifications = NotificationCenter()
    session_store = SessionStore(
        DatabaseSessionStorage(session_maker),
        notifications,
        credentials,
        window_opener,
        latency=latency,
        oauth_timeout=oauth_timeout,
    )
    await session_store.restore()

    app.state.notifications = notifications
    app.state.session_store = session_store
    app.state.data_access = DatabaseDataAccess(session_maker)
    app.state.navigation = NavigationMenu(session_store)
    app.state.article_pages = {}
    return session_store


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_data_access(request: Request) -> DataAccessLayer:
    return request.app.state.data_access


def get_notifications(request: Request) -> NotificationCenter:
    return request.app.state.notifications


def get_navigation(request: Request) -> NavigationMenu:
    return request.app.state.navigation


def get_article_pages(request: Request) -> Dict[str, ArticlePage]:
    return request.app.state.article_pages


Session = Annotated[SessionStore, Depends(get_session_store)]
DataAccess = Annotated[DataAccessLayer, Depends(get_data_access)]
Notifications = Annotated[NotificationCenter, Depends(get_notifications)]
Navigation = Annotated[NavigationMenu, Depends(get_navigation)]
ArticlePages = Annotated[Dict[str, ArticlePage], Depends(get_article_pages)]


async def get_current_user(session: Session) -> User:
    """Current session user or raise Unauthenticated (401)."""
    user = session.user
    if user is None:
        raise Unauthenticated("Not authenticated")
    return user


async def get_current_user_optional(session: Session) -> Optional[User]:
    return session.user


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_current_user_optional)]


async def get_article_page(
    slug: str,
    session: Session,
    data_access: DataAccess,
    notifications: Notifications,
    pages: ArticlePages,
) -> ArticlePage:
    """
    The open page for a slug, reloaded from the data layer.

    Pages stay open for the life of the app so like/bookmark state survives
    between requests.
    """
    page = pages.get(slug)
    if page is None:
        page = ArticlePage(session, data_access, notifications, slug)
    await page.load()
    if page.not_found:
        pages.pop(slug, None)
    else:
        pages[slug] = page
    return page


OpenArticlePage = Annotated[ArticlePage, Depends(get_article_page)]
