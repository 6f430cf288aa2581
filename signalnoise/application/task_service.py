"""Task storage and metrics facade used by the host application.

Every public operation first reconciles the stored state with today's date,
so a day boundary crossed while the host was idle is detected on the next call.
Storage failures and malformed stored JSON are logged and treated as empty state.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Iterable

from signalnoise.daily_reset import RolloverResult, reconcile
from signalnoise.domain.models import RatioMetrics, Task, TaskType
from signalnoise.domain.ratio_metrics import compute_ratio_metrics
from signalnoise.domain.store_errors import StoreError
from signalnoise.infrastructure.storage.base import KeyValueStore
from signalnoise.utils import is_iso_date, today_iso

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
HISTORY_KEY = "history"
LAST_DATE_KEY = "last_date"


def _new_task_id() -> str:
    return uuid.uuid4().hex


class TaskService:
    def __init__(
        self,
        store: KeyValueStore,
        today_fn: Callable[[], str] = today_iso,
        id_factory: Callable[[], str] = _new_task_id,
    ):
        self.store = store
        self._today_fn = today_fn
        self._id_factory = id_factory

    def today(self) -> str:
        return self._today_fn()

    # ---- rollover ----

    def check_for_new_day(self) -> RolloverResult:
        """Archive the working set if the day changed since the last check."""
        today = self.today()
        last_date = self._read(LAST_DATE_KEY)
        result = reconcile(self._load_tasks(), self._load_history(), last_date, today)

        if result.archived:
            self._save_history(result.history)
        if result.day_changed:
            self._save_tasks(result.working_set)
        if last_date != result.last_date:
            self._write(LAST_DATE_KEY, result.last_date)
        return result

    # ---- queries ----

    def get_tasks(self) -> list[Task]:
        return self.check_for_new_day().working_set

    def get_tasks_by_type(self, task_type: TaskType | str) -> list[Task]:
        wanted = TaskType(task_type)
        return [task for task in self.get_tasks() if task.type == wanted]

    def get_tasks_for_date(self, day: str) -> list[Task]:
        state = self.check_for_new_day()
        return self._day_tasks(state, day)

    def get_metrics_for_date(self, day: str) -> RatioMetrics:
        return compute_ratio_metrics(self.get_tasks_for_date(day))

    def get_current_day_metrics(self) -> RatioMetrics:
        return compute_ratio_metrics(self.get_tasks())

    def get_history(self) -> dict[str, list[Task]]:
        return self.check_for_new_day().history

    def get_all_dates(self) -> list[str]:
        """Dates with tasks, newest first; today is included only when it has tasks."""
        state = self.check_for_new_day()
        dates = set(state.history)
        if state.working_set:
            dates.add(state.last_date)
        return sorted(dates, reverse=True)

    # ---- mutations ----

    def add_task(self, title: str, task_type: TaskType | str, day: str | None = None) -> Task:
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValueError("Task title must not be empty")
        kind = TaskType(task_type)

        state = self.check_for_new_day()
        target = day or state.last_date
        if not is_iso_date(target):
            raise ValueError(f"Invalid date {target!r}; expected YYYY-MM-DD")

        task = Task(id=self._id_factory(), title=clean_title, type=kind, date=target)
        tasks = self._day_tasks(state, target)
        tasks.append(task)
        self._store_day(state, target, tasks)
        return task

    def update_task(
        self,
        task_id: str,
        day: str | None = None,
        *,
        title: str | None = None,
        task_type: TaskType | str | None = None,
        done: bool | None = None,
    ) -> Task | None:
        new_title = None
        if title is not None:
            new_title = title.strip()
            if not new_title:
                raise ValueError("Task title must not be empty")
        new_type = TaskType(task_type) if task_type is not None else None

        state = self.check_for_new_day()
        target = day or state.last_date
        tasks = self._day_tasks(state, target)
        task = _find(tasks, task_id)
        if task is None:
            return None

        if new_title is not None:
            task.title = new_title
        if new_type is not None:
            task.type = new_type
        if done is not None:
            task.done = bool(done)
        self._store_day(state, target, tasks)
        return task

    def toggle_task(self, task_id: str, day: str | None = None) -> Task | None:
        state = self.check_for_new_day()
        target = day or state.last_date
        tasks = self._day_tasks(state, target)
        task = _find(tasks, task_id)
        if task is None:
            return None
        task.done = not task.done
        self._store_day(state, target, tasks)
        return task

    def delete_task(self, task_id: str, day: str | None = None) -> bool:
        state = self.check_for_new_day()
        target = day or state.last_date
        tasks = self._day_tasks(state, target)
        remaining = [task for task in tasks if task.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self._store_day(state, target, remaining)
        return True

    def clear_tasks_by_type(self, task_type: TaskType | str) -> int:
        kind = TaskType(task_type)
        tasks = self.get_tasks()
        remaining = [task for task in tasks if task.type != kind]
        self._save_tasks(remaining)
        return len(tasks) - len(remaining)

    def clear_all_tasks(self) -> None:
        self.check_for_new_day()
        self._save_tasks([])

    def save_tasks_for_date(self, day: str, tasks: Iterable[Task]) -> None:
        state = self.check_for_new_day()
        self._store_day(state, day, list(tasks))

    def clear_history_for_date(self, day: str) -> bool:
        history = self.check_for_new_day().history
        if day not in history:
            return False
        del history[day]
        self._save_history(history)
        return True

    # ---- state helpers ----

    def _day_tasks(self, state: RolloverResult, day: str) -> list[Task]:
        if day == state.last_date:
            return list(state.working_set)
        return list(state.history.get(day, []))

    def _store_day(self, state: RolloverResult, day: str, tasks: list[Task]) -> None:
        if day == state.last_date:
            self._save_tasks(tasks)
            return
        history = dict(state.history)
        history[day] = tasks
        self._save_history(history)

    # ---- persistence ----

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except StoreError:
            logger.exception("Failed to read %r from the store; using the default.", key)
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except StoreError:
            logger.exception("Failed to write %r to the store.", key)

    def _read_json(self, key: str):
        raw = self._read(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored %r is not valid JSON; treating it as empty.", key)
            return None

    def _load_tasks(self) -> list[Task]:
        data = self._read_json(TASKS_KEY)
        if not isinstance(data, list):
            return []
        return _parse_tasks(data, TASKS_KEY)

    def _load_history(self) -> dict[str, list[Task]]:
        data = self._read_json(HISTORY_KEY)
        if not isinstance(data, dict):
            return {}
        history: dict[str, list[Task]] = {}
        for day, items in data.items():
            if not isinstance(items, list):
                logger.warning("History entry %r is not a list; skipping it.", day)
                continue
            history[day] = _parse_tasks(items, f"{HISTORY_KEY}[{day}]")
        return history

    def _save_tasks(self, tasks: list[Task]) -> None:
        self._write(TASKS_KEY, json.dumps([task.to_dict() for task in tasks], ensure_ascii=False))

    def _save_history(self, history: dict[str, list[Task]]) -> None:
        payload = {day: [task.to_dict() for task in tasks] for day, tasks in history.items()}
        self._write(HISTORY_KEY, json.dumps(payload, ensure_ascii=False))


def _find(tasks: list[Task], task_id: str) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def _parse_tasks(items: list, source: str) -> list[Task]:
    tasks: list[Task] = []
    for raw in items:
        try:
            tasks.append(Task.from_dict(raw))
        except ValueError as exc:
            logger.warning("Skipping malformed task in %s: %s", source, exc)
    return tasks
