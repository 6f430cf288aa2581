from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskType(str, Enum):
    SIGNAL = "signal"
    NOISE = "noise"


@dataclass(slots=True)
class Task:
    id: str
    title: str
    type: TaskType
    date: str
    done: bool = False

    @property
    def is_signal(self) -> bool:
        return self.type == TaskType.SIGNAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "type": self.type.value,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Task":
        """Build a Task from its stored JSON form. Raises ValueError on bad entries."""
        if not isinstance(raw, dict):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")
        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task entry has no id")
        title = raw.get("title", "")
        if not isinstance(title, str):
            raise ValueError(f"task {task_id} has a non-string title")
        done = raw.get("done", False)
        if not isinstance(done, bool):
            raise ValueError(f"task {task_id} has a non-boolean done flag: {done!r}")
        return cls(
            id=task_id,
            title=title,
            type=TaskType(raw.get("type")),
            date=str(raw.get("date", "")),
            done=done,
        )


@dataclass(frozen=True, slots=True)
class RatioMetrics:
    signal_total: int = 0
    noise_total: int = 0
    total: int = 0
    signal_done: int = 0
    noise_done: int = 0

    planned_signal_percent: float = 0.0
    planned_noise_percent: float = 0.0

    completion_signal_percent: float = 0.0
    completion_noise_percent: float = 0.0

    effective_signal_percent: float = 0.0
    effective_noise_percent: float = 0.0

    planned_ratio_warning: str = ""
    completion_warning: str = ""
    effective_ratio_warning: str = ""
    summary_message: str = ""

    @property
    def total_done(self) -> int:
        return self.signal_done + self.noise_done
