"""
Article schemas. Articles are read-only from the presentation core.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Article(BaseModel):
    """A published article."""
    
    id: str
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""
    category: str
    tags: List[str] = []
    cover_image: Optional[str] = None
    author_name: str
    author_avatar: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    read_time: int = Field(1, ge=0)
    views: int = Field(0, ge=0)
    
    class Config:
        from_attributes = True


class ArticleFilter(BaseModel):
    """Filter accepted by get_articles."""
    
    category: Optional[str] = None
    tag: Optional[str] = None
    search: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1, le=100)
    offset: int = Field(0, ge=0)


class CategorySummary(BaseModel):
    """Category card shown on the categories page."""
    
    name: str
    count: int
    description: str
