"""
Durable key/value storage for the session record.

Mirrors the browser's localStorage: string values under string keys. The
session store keeps one JSON-serialized user under a fixed key.
"""

from typing import Dict, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techtales.kernel.models.local_storage import LocalStorageEntry


class SessionStorage(Protocol):
    """Async string key/value store."""

    async def get_item(self, key: str) -> Optional[str]:
        ...

    async def set_item(self, key: str, value: str) -> None:
        ...

    async def remove_item(self, key: str) -> None:
        ...


class MemorySessionStorage:
    """Process-local storage, used in tests and previews."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class DatabaseSessionStorage:
    """
    Storage backed by the ``local_storage`` table.

    Each call runs in its own short transaction.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def get_item(self, key: str) -> Optional[str]:
        async with self.session_maker() as session:
            result = await session.execute(
                select(LocalStorageEntry.value).where(LocalStorageEntry.key == key)
            )
            return result.scalar_one_or_none()

    async def set_item(self, key: str, value: str) -> None:
        async with self.session_maker() as session:
            async with session.begin():
                entry = await session.get(LocalStorageEntry, key)
                if entry is None:
                    session.add(LocalStorageEntry(key=key, value=value))
                else:
                    entry.value = value

    async def remove_item(self, key: str) -> None:
        async with self.session_maker() as session:
            async with session.begin():
                await session.execute(
                    delete(LocalStorageEntry).where(LocalStorageEntry.key == key)
                )
