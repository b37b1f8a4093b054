from carbooking.storage.adapter import Storage
from carbooking.storage.base import KeyValueStore, StorageKeys
from carbooking.storage.memory import InMemoryStore
from carbooking.storage.sql import SQLStore

__all__ = ["InMemoryStore", "KeyValueStore", "SQLStore", "Storage", "StorageKeys"]
