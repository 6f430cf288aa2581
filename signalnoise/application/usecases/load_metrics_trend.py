from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from signalnoise.application.task_service import TaskService
from signalnoise.domain.models import RatioMetrics
from signalnoise.domain.ratio_metrics import compute_ratio_metrics


class TrendPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def days(self) -> int:
        return {"daily": 7, "weekly": 28, "monthly": 90}[self.value]


@dataclass(slots=True)
class MetricsTrendEntry:
    date: str
    metrics: RatioMetrics


@dataclass(frozen=True, slots=True)
class TrendSummary:
    avg_planned_signal_percent: float = 0.0
    avg_completion_signal_percent: float = 0.0
    avg_effective_signal_percent: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0


def summarize(entries: Sequence[MetricsTrendEntry]) -> TrendSummary:
    """Average the signal percentages and total the task counts; all zeros for no entries."""
    if not entries:
        return TrendSummary()
    count = len(entries)
    return TrendSummary(
        avg_planned_signal_percent=sum(e.metrics.planned_signal_percent for e in entries) / count,
        avg_completion_signal_percent=sum(e.metrics.completion_signal_percent for e in entries) / count,
        avg_effective_signal_percent=sum(e.metrics.effective_signal_percent for e in entries) / count,
        total_tasks=sum(e.metrics.total for e in entries),
        completed_tasks=sum(e.metrics.total_done for e in entries),
    )


class LoadMetricsTrendUseCase:
    def __init__(self, service: TaskService):
        self.service = service

    def execute(self, period: TrendPeriod | str = TrendPeriod.DAILY) -> list[MetricsTrendEntry]:
        """Metrics for each recorded day in the window ending today, oldest first."""
        window = TrendPeriod(period).days
        state = self.service.check_for_new_day()
        today = date.fromisoformat(state.last_date)

        entries: list[MetricsTrendEntry] = []
        for offset in range(window - 1, -1, -1):
            day = (today - timedelta(days=offset)).isoformat()
            if day == state.last_date:
                tasks = state.working_set
            elif day in state.history:
                tasks = state.history[day]
            else:
                continue
            entries.append(MetricsTrendEntry(date=day, metrics=compute_ratio_metrics(tasks)))
        return entries
