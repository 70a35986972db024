"""
Pytest fixtures for TechTales tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

from techtales.errors import DataAccessFailure
from techtales.kernel.identity.credentials import CredentialSet
from techtales.kernel.identity.oauth import ManagedAuthWindow, WindowFeatures
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.identity.storage import MemorySessionStorage
from techtales.kernel.notifications import NotificationCenter
from techtales.schemas.article import Article, ArticleFilter
from techtales.schemas.comment import Comment, CommentCreate

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_HASH_ROUNDS = 4

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeWindowOpener:
    """Records opened authorization windows; can simulate a popup blocker."""

    def __init__(self, blocked: bool = False):
        self.blocked = blocked
        self.opened: List[Tuple[ManagedAuthWindow, WindowFeatures]] = []

    def open(self, url: str, name: str, features: WindowFeatures) -> Optional[ManagedAuthWindow]:
        if self.blocked:
            return None
        window = ManagedAuthWindow(url, name)
        self.opened.append((window, features))
        return window


class FakeDataAccess:
    """In-memory data access layer that records every call."""

    def __init__(
        self,
        articles: Optional[List[Article]] = None,
        comments: Optional[List[Comment]] = None,
    ):
        self.articles: List[Article] = list(articles or [])
        self.comments: List[Comment] = list(comments or [])
        self.calls: List[Tuple[str, object]] = []
        self.fail: Dict[str, bool] = {}
        self._next_id = 100

    def _record(self, operation: str, arg: object) -> None:
        self.calls.append((operation, arg))
        if self.fail.get(operation):
            raise DataAccessFailure(operation, RuntimeError("backend unavailable"))

    def calls_to(self, operation: str) -> List[object]:
        return [arg for op, arg in self.calls if op == operation]

    async def get_article_by_slug(self, slug: str) -> Optional[Article]:
        self._record("get_article_by_slug", slug)
        return next((a for a in self.articles if a.slug == slug), None)

    async def get_articles(self, filter: Optional[ArticleFilter] = None) -> List[Article]:
        self._record("get_articles", filter)
        limit = filter.limit if filter and filter.limit else None
        return self.articles[:limit]

    async def get_comments_by_article_id(self, article_id: str) -> List[Comment]:
        self._record("get_comments_by_article_id", article_id)
        return [c for c in self.comments if c.article_id == article_id]

    async def create_comment(self, data: CommentCreate) -> Comment:
        self._record("create_comment", data)
        self._next_id += 1
        comment = Comment(
            id=str(self._next_id),
            created_at=BASE_TIME + timedelta(minutes=self._next_id),
            **data.model_dump(),
        )
        self.comments.append(comment)
        return comment

    async def delete_comment(self, comment_id: str) -> None:
        self._record("delete_comment", comment_id)
        self.comments = [c for c in self.comments if c.id != comment_id]


def make_article(article_id: str = "42", slug: str = "the-future-of-ai", **overrides) -> Article:
    data = dict(
        id=article_id,
        slug=slug,
        title=f"Article {article_id}",
        excerpt="An excerpt",
        content="## 1.1. Intro\nBody text",
        category="Artificial Intelligence",
        tags=["AI"],
        author_name="Jane Smith",
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
        read_time=5,
        views=10,
    )
    data.update(overrides)
    return Article(**data)


def make_comment(comment_id: str, author_id: str, author_name: str, article_id: str = "42", **overrides) -> Comment:
    data = dict(
        id=comment_id,
        article_id=article_id,
        author_id=author_id,
        author_name=author_name,
        author_avatar=None,
        content=f"Comment {comment_id}",
        created_at=BASE_TIME + timedelta(hours=int(comment_id)),
    )
    data.update(overrides)
    return Comment(**data)


@pytest.fixture
def notifier() -> NotificationCenter:
    return NotificationCenter(capacity=50)


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def credentials() -> CredentialSet:
    return CredentialSet(rounds=TEST_HASH_ROUNDS)


@pytest.fixture
def window_opener() -> FakeWindowOpener:
    return FakeWindowOpener()


@pytest_asyncio.fixture
async def session_store(storage, notifier, credentials, window_opener) -> SessionStore:
    """Anonymous session store with no simulated latency."""
    store = SessionStore(
        storage,
        notifier,
        credentials,
        window_opener,
        latency=0,
        oauth_timeout=0.05,
    )
    await store.restore()
    return store


@pytest_asyncio.fixture
async def jane_session(session_store: SessionStore, notifier: NotificationCenter) -> SessionStore:
    """Session store signed in as Jane Smith (id "2")."""
    await session_store.login("jane@example.com", "password")
    notifier.drain()
    return session_store


@pytest.fixture
def three_comments():
    """Fixed comment set: Jane, John, Jane on article 42."""
    return [
        make_comment("1", "2", "Jane Smith"),
        make_comment("2", "1", "John Doe"),
        make_comment("3", "2", "Jane Smith"),
    ]


@pytest.fixture
def data_access(three_comments) -> FakeDataAccess:
    return FakeDataAccess(
        articles=[
            make_article(),
            make_article("43", "web-apis", category="Web Development"),
            make_article("44", "zero-trust", category="Cybersecurity"),
        ],
        comments=three_comments,
    )
