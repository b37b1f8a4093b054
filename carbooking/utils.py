from __future__ import annotations

import secrets
import string
import time
from datetime import date, datetime, time as dt_time, timezone
from typing import Any, Callable, Iterable, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


# ---- Custom exceptions ----
class ServiceError(Exception):
    """Base class for service errors."""


class NotFound(ServiceError):
    pass


class CarNotFound(NotFound):
    pass


class Conflict(ServiceError):
    pass


class DuplicateEmail(Conflict):
    pass


class CarUnavailable(Conflict):
    pass


class Unauthorized(ServiceError):
    """The actor may not touch this record."""


class InvalidState(ServiceError):
    """The booking's current status does not allow the transition."""


class InvalidDateRange(ServiceError):
    pass


class InvalidCarData(ServiceError):
    """A car update would leave the record invalid."""


class AuthenticationError(ServiceError):
    """Base class for login failures."""


class InvalidCredentials(AuthenticationError):
    pass


class AccountDeactivated(AuthenticationError):
    pass


class StorageError(ServiceError):
    """The key-value store could not persist a value."""


# ---- Utilities ----
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str) -> str:
    """Build a record id like ``car-1718000000000-k3j9x0a2b``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def start_of_day(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    return datetime.combine(value, dt_time.min, tzinfo=timezone.utc)


def end_of_day(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    return datetime.combine(value, dt_time.max, tzinfo=timezone.utc)


def calculate_days(start: datetime, end: datetime) -> int:
    """Whole days between two instants, never negative."""
    if (start.tzinfo is None) != (end.tzinfo is None):
        start, end = as_utc(start), as_utc(end)
    days = (end - start).days
    return days if days > 0 else 0


def _find_or_404(items: Iterable[T], item_id: str, message: str) -> T:
    for item in items:
        if getattr(item, "id") == item_id:
            return item
    raise NotFound(message)


def _index_of(items: list[Any], item_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None
