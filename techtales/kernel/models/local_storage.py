"""
Key/value table standing in for browser local storage.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from techtales.kernel.models.base import Base, TimestampMixin


class LocalStorageEntry(Base, TimestampMixin):
    """One string value under a namespaced key."""
    
    __tablename__ = "local_storage"
    
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    
    def __repr__(self) -> str:
        return f"<LocalStorageEntry {self.key}>"
