from __future__ import annotations

import json
import os
from datetime import datetime, timezone

from signalnoise.domain.store_errors import StoreError


class JsonFileStore:
    """One JSON file per key, wrapped with the time it was written."""

    def __init__(self, store_dir: str):
        self.store_dir = store_dir
        try:
            os.makedirs(self.store_dir, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot create {self.store_dir}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        wrapper = {
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "payload": value,
        }
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as file:
                json.dump(wrapper, file, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StoreError(f"Failed to write {key!r}: {exc}") from exc

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as file:
                wrapper = json.load(file)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Failed to read {key!r}: {exc}") from exc
        if not isinstance(wrapper, dict):
            return None
        payload = wrapper.get("payload")
        return payload if isinstance(payload, str) else None

    def _path(self, key: str) -> str:
        safe_name = key.replace("/", "_")
        return os.path.join(self.store_dir, f"{safe_name}.json")
