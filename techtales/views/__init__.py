"""
Views: the comment subsystem, article page, listings, profile and navigation.

Each view holds its own UI state and renders to a pydantic view model.
"""

from techtales.views.comment_form import CommentForm, CommentFormView
from techtales.views.comment_list import CommentList, CommentListView
from techtales.views.article_page import ArticlePage, ArticlePageView, SharePayload
from techtales.views.listing import NewsFeed, category_summaries
from techtales.views.markdown_render import preprocess_heading_numbers, render_markdown
from techtales.views.navigation import NavigationMenu, NavigationView, is_active
from techtales.views.profile import ProfilePage

__all__ = [
    "CommentForm",
    "CommentFormView",
    "CommentList",
    "CommentListView",
    "ArticlePage",
    "ArticlePageView",
    "SharePayload",
    "NewsFeed",
    "category_summaries",
    "preprocess_heading_numbers",
    "render_markdown",
    "NavigationMenu",
    "NavigationView",
    "is_active",
    "ProfilePage",
]
