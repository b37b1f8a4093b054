from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from carbooking.storage.base import KeyValueStore, StorageKeys
from carbooking.utils import StorageError

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


class Storage:
    """
    Typed access to a :class:`KeyValueStore`.

    Values are serialized to JSON text with pydantic. A value that cannot be
    decoded is logged and reported as absent.
    """

    def __init__(self, store: KeyValueStore, keys: Optional[StorageKeys] = None) -> None:
        self.store = store
        self.keys = keys or StorageKeys()

    async def get(self, key: str, type_: Type[T]) -> Optional[T]:
        raw = await self.store.get(key)
        if raw is None:
            return None
        try:
            return _adapter(type_).validate_json(raw)
        except ValidationError as exc:
            logger.error("Error getting item {!r} from storage: {}", key, exc)
            return None

    async def set(self, key: str, value: Any, type_: Any = None) -> None:
        adapter = _adapter(type_ if type_ is not None else type(value))
        try:
            payload = adapter.dump_json(value).decode()
            await self.store.set(key, payload)
        except Exception as exc:
            logger.error("Error setting item {!r} in storage: {}", key, exc)
            raise StorageError(f"Could not save {key}") from exc

    async def remove(self, key: str) -> None:
        await self.store.remove(key)

    async def clear(self) -> None:
        await self.store.clear()
