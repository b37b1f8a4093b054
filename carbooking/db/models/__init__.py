"""carbooking models."""

from carbooking.db.models.kv_entry import KVEntry

__all__ = ["KVEntry"]
