from __future__ import annotations

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carbooking.db.models import KVEntry
from carbooking.storage.base import KeyValueStore


class SQLStore(KeyValueStore):
    """
    Key-value store on top of the ``kv_entries`` table.

    Every call runs in its own session and commits before returning.
    Writes are keyed upserts, so changing one key never rewrites another.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> Optional[str]:
        async with self._session_factory() as session:
            entry = await session.get(KVEntry, key)
            return entry.value if entry is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            try:
                entry = await session.get(KVEntry, key)
                if entry is None:
                    session.add(KVEntry(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def remove(self, key: str) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(KVEntry).where(KVEntry.key == key))
            await session.commit()

    async def clear(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(KVEntry))
            await session.commit()
