"""Key-value store backends."""

from signalnoise.infrastructure.storage.base import InMemoryKeyValueStore, KeyValueStore
from signalnoise.infrastructure.storage.factory import build_store
from signalnoise.infrastructure.storage.json_file_store import JsonFileStore
from signalnoise.infrastructure.storage.sqlite_store import SqliteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileStore",
    "KeyValueStore",
    "SqliteKeyValueStore",
    "build_store",
]
