"""
Demo articles and comments loaded into an empty database.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techtales.kernel.models import ArticleRecord, CommentRecord
from techtales.logging_config import get_logger

logger = get_logger(__name__)

_BASE_DATE = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

DEMO_ARTICLES = [
    {
        "id": "1",
        "slug": "the-future-of-ai-in-everyday-life",
        "title": "The Future of AI in Everyday Life",
        "excerpt": "How machine learning is quietly reshaping the tools we use every day.",
        "content": (
            "## 1.1. Where we are\n"
            "Assistants, recommendations and search already lean on learned models.\n\n"
            "### 1.2. What changes next\n"
            "Expect smaller models running on the devices in your pocket.\n\n"
            "1.3. Closing thoughts on privacy and trust."
        ),
        "category": "Artificial Intelligence",
        "tags": ["AI", "MachineLearning", "Future"],
        "cover_image": "https://images.unsplash.com/photo-1677442136019-21780ecad995",
        "author_name": "Jane Smith",
        "author_avatar": "https://i.pravatar.cc/150?u=jane",
        "read_time": 6,
        "views": 1240,
    },
    {
        "id": "2",
        "slug": "modern-web-development-with-typed-apis",
        "title": "Modern Web Development with Typed APIs",
        "excerpt": "Schemas at the boundary make front-end and back-end agree.",
        "content": "## Why types\nValidation at the edge catches mistakes early.\n\n```\nGET /api/v1/articles\n```",
        "category": "Web Development",
        "tags": ["Web", "APIs"],
        "cover_image": "https://images.unsplash.com/photo-1461749280684-dccba630e2f6",
        "author_name": "John Doe",
        "author_avatar": "https://i.pravatar.cc/150?u=john",
        "read_time": 8,
        "views": 860,
    },
    {
        "id": "3",
        "slug": "zero-trust-for-small-teams",
        "title": "Zero Trust for Small Teams",
        "excerpt": "Practical security without an enterprise budget.",
        "content": "## Start with identity\nEvery request proves who it is.",
        "category": "Cybersecurity",
        "tags": ["Security", "Identity"],
        "cover_image": "https://images.unsplash.com/photo-1550751827-4bd374c3f58b",
        "author_name": "Jane Smith",
        "author_avatar": "https://i.pravatar.cc/150?u=jane",
        "read_time": 5,
        "views": 430,
    },
    {
        "id": "4",
        "slug": "qubits-explained",
        "title": "Qubits Explained",
        "excerpt": "Superposition and entanglement without the equations.",
        "content": "## Bits and qubits\nA qubit holds a blend of 0 and 1 until measured.",
        "category": "Quantum Computing",
        "tags": ["Quantum", "Physics"],
        "cover_image": "https://images.unsplash.com/photo-1635070041078-e363dbe005cb",
        "author_name": "John Doe",
        "author_avatar": "https://i.pravatar.cc/150?u=john",
        "read_time": 7,
        "views": 310,
    },
]

DEMO_COMMENTS = [
    {
        "article_id": "1",
        "author_id": "1",
        "author_name": "John Doe",
        "author_avatar": "https://i.pravatar.cc/150?u=john",
        "content": "Really clear overview, thanks!",
    },
    {
        "article_id": "1",
        "author_id": "3",
        "author_name": "Admin User",
        "author_avatar": "https://i.pravatar.cc/150?u=admin",
        "content": "Pinned for the newsletter.",
    },
]


async def seed_demo_content(session_maker: async_sessionmaker[AsyncSession]) -> bool:
    """Insert demo rows when the articles table is empty. Returns True if seeded."""
    async with session_maker() as session:
        async with session.begin():
            count = await session.scalar(select(func.count()).select_from(ArticleRecord))
            if count:
                return False

            for offset, data in enumerate(DEMO_ARTICLES):
                published = _BASE_DATE + timedelta(days=offset)
                session.add(ArticleRecord(**data, created_at=published, updated_at=published))
            await session.flush()
            for data in DEMO_COMMENTS:
                session.add(CommentRecord(**data))

    logger.info(
        "Seeded demo content",
        extra={"articles": len(DEMO_ARTICLES), "comments": len(DEMO_COMMENTS)},
    )
    return True
