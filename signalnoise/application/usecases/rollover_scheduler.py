from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from signalnoise.config import DAY_CHECK_INTERVAL_MS, AppConfig
from signalnoise.daily_reset import RolloverResult


class RolloverScheduler(QObject):
    """Runs day-change checks on a timer and on demand (resume, user activity)."""

    day_changed = pyqtSignal(str, str)  # previous_date, today

    def __init__(self, check_fn: Callable[[], RolloverResult], interval_ms: int = DAY_CHECK_INTERVAL_MS):
        super().__init__()
        self.check_fn = check_fn
        self.interval_ms = interval_ms
        self._timer = QTimer(self)
        self._timer.timeout.connect(self.check_now)

    @classmethod
    def from_config(cls, config: AppConfig, check_fn: Callable[[], RolloverResult]) -> "RolloverScheduler":
        return cls(check_fn, interval_ms=config.day_check_interval_ms)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self.check_now()
        self._timer.start(self.interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def check_now(self) -> bool:
        result = self.check_fn()
        if result.day_changed and result.previous_date is not None:
            self.day_changed.emit(result.previous_date, result.last_date)
            return True
        return False
