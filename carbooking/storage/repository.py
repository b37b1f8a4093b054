from __future__ import annotations

from typing import Callable, Generic, List, Type, TypeVar

from loguru import logger
from pydantic import BaseModel

from carbooking.storage.adapter import Storage

M = TypeVar("M", bound=BaseModel)


class CollectionRepository(Generic[M]):
    """
    Reads and writes one whole collection stored under a single key.

    When the key is absent the collection is initialized from ``seed``
    and written back before the first read returns.
    """

    model: Type[M]

    def __init__(self, storage: Storage, key: str, seed: Callable[[], List[M]]) -> None:
        self.storage = storage
        self.key = key
        self._seed = seed

    async def _load(self) -> List[M]:
        items = await self.storage.get(self.key, List[self.model])  # type: ignore[name-defined]
        if items is None:
            items = list(self._seed())
            logger.info("Seeding {} with {} records", self.key, len(items))
            await self._save(items)
        return items

    async def _save(self, items: List[M]) -> None:
        await self.storage.set(self.key, items, List[self.model])  # type: ignore[name-defined]
