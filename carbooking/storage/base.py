from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional


class KeyValueStore(abc.ABC):
    """A string-keyed store holding text values."""

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abc.abstractmethod
    async def remove(self, key: str) -> None:
        """Drop the key. Removing an absent key is not an error."""

    @abc.abstractmethod
    async def clear(self) -> None:
        ...


@dataclass(frozen=True)
class StorageKeys:
    """The fixed keys the application reads and writes."""

    prefix: str = "carbooking_"

    @property
    def users(self) -> str:
        return f"{self.prefix}users"

    @property
    def cars(self) -> str:
        return f"{self.prefix}cars"

    @property
    def bookings(self) -> str:
        return f"{self.prefix}bookings"

    @property
    def auth_user(self) -> str:
        return f"{self.prefix}auth_user"

    @property
    def auth_token(self) -> str:
        return f"{self.prefix}auth_token"
