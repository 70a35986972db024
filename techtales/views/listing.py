"""
Article listings: the news feed and the categories page.
"""

from collections import Counter
from typing import Dict, Iterable, List

from techtales.data_access.base import DataAccessLayer
from techtales.errors import DataAccessFailure
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger
from techtales.schemas.article import Article, CategorySummary
from techtales.schemas.common import PaginatedResponse

logger = get_logger(__name__)

ITEMS_PER_PAGE = 6

CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "Artificial Intelligence": "Machine learning, neural networks and the systems built on them.",
    "Web Development": "Frameworks, APIs and the craft of building for the browser.",
    "Cybersecurity": "Threats, defences and keeping systems trustworthy.",
    "Quantum Computing": "Qubits, algorithms and the road to quantum advantage.",
}
DEFAULT_CATEGORY_DESCRIPTION = "Articles and insights from our writers."


def category_summaries(articles: Iterable[Article]) -> List[CategorySummary]:
    """Count articles per category, sorted by category name."""
    counts = Counter(a.category for a in articles)
    return [
        CategorySummary(
            name=name,
            count=count,
            description=CATEGORY_DESCRIPTIONS.get(name, DEFAULT_CATEGORY_DESCRIPTION),
        )
        for name, count in sorted(counts.items())
    ]


class NewsFeed:
    """Searchable, paginated list of all articles."""

    def __init__(
        self,
        data_access: DataAccessLayer,
        notifier: Notifier,
        items_per_page: int = ITEMS_PER_PAGE,
    ):
        self.data_access = data_access
        self.notifier = notifier
        self.items_per_page = items_per_page
        self.articles: List[Article] = []
        self.search_term = ""

    async def load(self) -> List[Article]:
        try:
            self.articles = await self.data_access.get_articles()
        except DataAccessFailure:
            logger.exception("Error loading articles")
            self.notifier.notify(NotificationKind.ERROR, "Failed to load articles")
        return self.articles

    def filter(self, term: str) -> List[Article]:
        """Case-insensitive match on title or excerpt. An empty term matches all."""
        self.search_term = term
        needle = term.lower()
        if not needle:
            return list(self.articles)
        return [
            a for a in self.articles
            if needle in a.title.lower() or needle in a.excerpt.lower()
        ]

    def page(self, number: int = 1) -> PaginatedResponse[Article]:
        filtered = self.filter(self.search_term)
        number = max(number, 1)
        start = (number - 1) * self.items_per_page
        return PaginatedResponse[Article].create(
            items=filtered[start:start + self.items_per_page],
            total=len(filtered),
            page=number,
            page_size=self.items_per_page,
        )
