from __future__ import annotations

from functools import wraps
from typing import Any, Optional, cast

from loguru import logger

from carbooking.utils import F, ServiceError


class ViewModel:
    """Holds the loading flag and the last user-visible error."""

    def __init__(self) -> None:
        self.loading: bool = False
        self.error: Optional[str] = None


def tracks_state(fallback_message: str):
    """
    Decorator for async view-model operations.

    Sets ``loading`` and clears ``error`` before the call. On failure the
    message is stored on the view-model and the exception is re-raised.
    Errors that are not ServiceErrors are logged and shown as
    ``fallback_message``.
    """

    def decorator(fn: F) -> F:
        @wraps(fn)
        async def wrapper(self: ViewModel, *args: Any, **kwargs: Any) -> Any:
            self.loading = True
            self.error = None
            try:
                return await fn(self, *args, **kwargs)
            except ServiceError as e:
                self.error = str(e)
                raise
            except Exception:
                logger.exception("{} failed", fn.__qualname__)
                self.error = fallback_message
                raise
            finally:
                self.loading = False

        return cast(F, wrapper)

    return decorator
