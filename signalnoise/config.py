"""
Runtime configuration for SignalNoise.

All values default from environment variables:

- SIGNALNOISE_DATA_DIR               data directory (default <base>/data)
- SIGNALNOISE_STORE                  sqlite | json | memory (default sqlite)
- SIGNALNOISE_DAY_CHECK_INTERVAL_MS  periodic day-change check (default 30 min)
- SIGNALNOISE_LOG_LEVEL              logging level name (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from signalnoise.utils import get_base_path

STORE_BACKENDS = ("sqlite", "json", "memory")
DEFAULT_STORE_BACKEND = "sqlite"
DAY_CHECK_INTERVAL_MS = 1_800_000
DEFAULT_LOG_LEVEL = "INFO"


def _default_data_dir() -> str:
    return os.path.join(get_base_path(), "data")


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _get_env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    value = (os.getenv(name) or "").strip().lower()
    return value if value in choices else default


def _get_env_log_level(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip().upper()
    return value if isinstance(logging.getLevelName(value), int) else default


@dataclass
class AppConfig:
    data_dir: str = field(default_factory=_default_data_dir)
    store_backend: str = DEFAULT_STORE_BACKEND
    day_check_interval_ms: int = DAY_CHECK_INTERVAL_MS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, "signalnoise.db")

    @property
    def json_store_dir(self) -> str:
        return os.path.join(self.data_dir, "store")

    @property
    def log_file(self) -> str:
        return os.path.join(self.data_dir, "app.log")

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            data_dir=os.getenv("SIGNALNOISE_DATA_DIR") or _default_data_dir(),
            store_backend=_get_env_choice("SIGNALNOISE_STORE", STORE_BACKENDS, DEFAULT_STORE_BACKEND),
            day_check_interval_ms=_get_env_int("SIGNALNOISE_DAY_CHECK_INTERVAL_MS", DAY_CHECK_INTERVAL_MS),
            log_level=_get_env_log_level("SIGNALNOISE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )


_DEFAULT_CONFIG: AppConfig | None = None


def get_config(force_reload: bool = False) -> AppConfig:
    """Process-wide config; pass force_reload=True after changing the environment."""
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None or force_reload:
        _DEFAULT_CONFIG = AppConfig.from_env()
    return _DEFAULT_CONFIG
