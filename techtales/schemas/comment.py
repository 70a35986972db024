"""
Comment schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

COMMENT_MIN_LENGTH = 2
COMMENT_MIN_LENGTH_MESSAGE = "Comment must be at least 2 characters"


class CommentFormValues(BaseModel):
    """Values collected by the comment form."""
    
    content: str = Field(..., min_length=COMMENT_MIN_LENGTH, max_length=5000)


class CommentCreate(BaseModel):
    """Input for the data access layer. Author fields are copied from the session user."""
    
    content: str = Field(..., min_length=COMMENT_MIN_LENGTH, max_length=5000)
    article_id: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)
    author_name: str
    author_avatar: Optional[str] = None
    parent_id: Optional[str] = None


class Comment(BaseModel):
    """A stored comment on one article."""
    
    id: str
    article_id: str
    author_id: str
    author_name: str
    author_avatar: Optional[str] = None
    content: str = Field(..., min_length=COMMENT_MIN_LENGTH)
    parent_id: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True
