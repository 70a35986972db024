"""
Pydantic record shapes for users, comments, articles and forms.
"""

from techtales.schemas.user import User, UserLogin, UserRole, UserUpdate
from techtales.schemas.comment import (
    COMMENT_MIN_LENGTH,
    COMMENT_MIN_LENGTH_MESSAGE,
    Comment,
    CommentCreate,
    CommentFormValues,
)
from techtales.schemas.article import Article, ArticleFilter, CategorySummary
from techtales.schemas.forms import PasswordChange, ProfileUpdate, SignupForm
from techtales.schemas.common import (
    HealthResponse,
    PaginatedResponse,
    SuccessResponse,
)

__all__ = [
    # User
    "User",
    "UserLogin",
    "UserRole",
    "UserUpdate",
    # Comment
    "COMMENT_MIN_LENGTH",
    "COMMENT_MIN_LENGTH_MESSAGE",
    "Comment",
    "CommentCreate",
    "CommentFormValues",
    # Article
    "Article",
    "ArticleFilter",
    "CategorySummary",
    # Forms
    "PasswordChange",
    "ProfileUpdate",
    "SignupForm",
    # Common
    "HealthResponse",
    "PaginatedResponse",
    "SuccessResponse",
]
