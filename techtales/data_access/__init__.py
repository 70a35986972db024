"""
Data access layer: the async boundary over articles and comments.
"""

from techtales.data_access.base import DataAccessLayer
from techtales.data_access.database_access import DatabaseDataAccess
from techtales.data_access.seed import seed_demo_content

__all__ = ["DataAccessLayer", "DatabaseDataAccess", "seed_demo_content"]
