from __future__ import annotations

from signalnoise.config import AppConfig
from signalnoise.infrastructure.storage.base import InMemoryKeyValueStore, KeyValueStore
from signalnoise.infrastructure.storage.json_file_store import JsonFileStore
from signalnoise.infrastructure.storage.sqlite_store import SqliteKeyValueStore


def build_store(config: AppConfig) -> KeyValueStore:
    if config.store_backend == "json":
        return JsonFileStore(config.json_store_dir)
    if config.store_backend == "memory":
        return InMemoryKeyValueStore()
    return SqliteKeyValueStore(config.db_path)
