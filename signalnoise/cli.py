"""
Command-line host for SignalNoise.

Usage examples:

    signalnoise add "Write design doc" --type signal
    signalnoise list
    signalnoise toggle <task-id>
    signalnoise metrics --date 2025-01-01
    signalnoise trend --period weekly

Each command goes through TaskService, which checks for a new day first.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from signalnoise.application.task_service import TaskService
from signalnoise.application.usecases.load_metrics_trend import LoadMetricsTrendUseCase, TrendPeriod, summarize
from signalnoise.config import AppConfig, get_config
from signalnoise.domain.models import RatioMetrics, Task, TaskType
from signalnoise.domain.ratio_metrics import format_tenths
from signalnoise.domain.store_errors import StoreError
from signalnoise.infrastructure.storage import InMemoryKeyValueStore, build_store

logger = logging.getLogger(__name__)

TYPE_CHOICES = [t.value for t in TaskType]


def _format_task(task: Task) -> str:
    box = "x" if task.done else " "
    return f"[{box}] {task.id}  {task.type.value:<6}  {task.title}"


def _print_metrics(day: str, metrics: RatioMetrics) -> None:
    print(f"{day}: {metrics.total} task(s), {metrics.signal_done + metrics.noise_done} done")
    print(f"  planned     {metrics.planned_signal_percent:6.2f}% signal / {metrics.planned_noise_percent:6.2f}% noise")
    print(f"  completion  {metrics.completion_signal_percent:6.2f}% signal / {metrics.completion_noise_percent:6.2f}% noise")
    print(f"  effective   {metrics.effective_signal_percent:6.2f}% signal / {metrics.effective_noise_percent:6.2f}% noise")
    for warning in (metrics.planned_ratio_warning, metrics.completion_warning, metrics.effective_ratio_warning):
        if warning:
            print(f"  {warning}")
    print(f"  {metrics.summary_message}")


# --- Commands ----------------------------------------------------------------


def cmd_add(service: TaskService, args: argparse.Namespace) -> int:
    try:
        task = service.add_task(args.title, args.type, args.date)
    except ValueError as exc:
        print(f"[add] {exc}")
        return 2
    print(f"[add] {task.date} {_format_task(task)}")
    return 0


def cmd_list(service: TaskService, args: argparse.Namespace) -> int:
    day = args.date or service.today()
    tasks = service.get_tasks_for_date(day)
    if not tasks:
        print(f"[list] No tasks for {day}.")
        return 0
    for kind in TaskType:
        group = [task for task in tasks if task.type == kind]
        if group:
            print(f"{kind.value.upper()} ({len(group)})")
            for task in group:
                print("  " + _format_task(task))
    return 0


def cmd_toggle(service: TaskService, args: argparse.Namespace) -> int:
    task = service.toggle_task(args.task_id, args.date)
    if task is None:
        print(f"[toggle] Task {args.task_id} not found.")
        return 1
    print(f"[toggle] {_format_task(task)}")
    return 0


def cmd_edit(service: TaskService, args: argparse.Namespace) -> int:
    try:
        task = service.update_task(args.task_id, args.date, title=args.title, task_type=args.type)
    except ValueError as exc:
        print(f"[edit] {exc}")
        return 2
    if task is None:
        print(f"[edit] Task {args.task_id} not found.")
        return 1
    print(f"[edit] {_format_task(task)}")
    return 0


def cmd_delete(service: TaskService, args: argparse.Namespace) -> int:
    if not service.delete_task(args.task_id, args.date):
        print(f"[delete] Task {args.task_id} not found.")
        return 1
    print(f"[delete] Removed {args.task_id}.")
    return 0


def cmd_clear(service: TaskService, args: argparse.Namespace) -> int:
    if args.type:
        removed = service.clear_tasks_by_type(args.type)
        print(f"[clear] Removed {removed} {args.type} task(s) from today.")
    else:
        service.clear_all_tasks()
        print("[clear] Removed all of today's tasks.")
    return 0


def cmd_metrics(service: TaskService, args: argparse.Namespace) -> int:
    day = args.date or service.today()
    _print_metrics(day, service.get_metrics_for_date(day))
    return 0


def cmd_history(service: TaskService, args: argparse.Namespace) -> int:
    dates = service.get_all_dates()
    if not dates:
        print("[history] No recorded days yet.")
        return 0
    for day in dates:
        metrics = service.get_metrics_for_date(day)
        print(f"{day}  {metrics.total:3d} task(s)  {metrics.summary_message}")
    return 0


def cmd_forget(service: TaskService, args: argparse.Namespace) -> int:
    if not service.clear_history_for_date(args.date):
        print(f"[forget] No history for {args.date}.")
        return 1
    print(f"[forget] Deleted history for {args.date}.")
    return 0


def cmd_trend(service: TaskService, args: argparse.Namespace) -> int:
    entries = LoadMetricsTrendUseCase(service).execute(args.period)
    if not entries:
        print("[trend] No data in this period.")
    for entry in entries:
        m = entry.metrics
        print(
            f"{entry.date}  planned {m.planned_signal_percent:5.1f}%  "
            f"completion {m.completion_signal_percent:5.1f}%/{m.completion_noise_percent:5.1f}%  "
            f"effective {m.effective_signal_percent:5.1f}%/{m.effective_noise_percent:5.1f}%"
        )
    summary = summarize(entries)
    print(
        f"Average signal: planned {format_tenths(summary.avg_planned_signal_percent)}%  "
        f"completion {format_tenths(summary.avg_completion_signal_percent)}%  "
        f"effective {format_tenths(summary.avg_effective_signal_percent)}%"
    )
    print(f"Tasks: {summary.completed_tasks}/{summary.total_tasks} completed")
    return 0


# --- Parser ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signalnoise",
        description="Daily signal/noise task tracker.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_p = subparsers.add_parser("add", help="Add a task (today unless --date is given).")
    add_p.add_argument("title")
    add_p.add_argument("--type", choices=TYPE_CHOICES, default=TaskType.SIGNAL.value)
    add_p.add_argument("--date", help="Target day, YYYY-MM-DD.")
    add_p.set_defaults(func=cmd_add)

    list_p = subparsers.add_parser("list", help="List tasks for a day.")
    list_p.add_argument("--date")
    list_p.set_defaults(func=cmd_list)

    toggle_p = subparsers.add_parser("toggle", help="Toggle a task's done state.")
    toggle_p.add_argument("task_id")
    toggle_p.add_argument("--date")
    toggle_p.set_defaults(func=cmd_toggle)

    edit_p = subparsers.add_parser("edit", help="Change a task's title or type.")
    edit_p.add_argument("task_id")
    edit_p.add_argument("--title")
    edit_p.add_argument("--type", choices=TYPE_CHOICES)
    edit_p.add_argument("--date")
    edit_p.set_defaults(func=cmd_edit)

    delete_p = subparsers.add_parser("delete", help="Delete a task.")
    delete_p.add_argument("task_id")
    delete_p.add_argument("--date")
    delete_p.set_defaults(func=cmd_delete)

    clear_p = subparsers.add_parser("clear", help="Clear today's tasks (optionally one type).")
    clear_p.add_argument("--type", choices=TYPE_CHOICES)
    clear_p.set_defaults(func=cmd_clear)

    metrics_p = subparsers.add_parser("metrics", help="Show ratio metrics for a day.")
    metrics_p.add_argument("--date")
    metrics_p.set_defaults(func=cmd_metrics)

    history_p = subparsers.add_parser("history", help="List recorded days, newest first.")
    history_p.set_defaults(func=cmd_history)

    forget_p = subparsers.add_parser("forget", help="Delete a whole day from history.")
    forget_p.add_argument("date")
    forget_p.set_defaults(func=cmd_forget)

    trend_p = subparsers.add_parser("trend", help="Metrics for recent days.")
    trend_p.add_argument("--period", choices=[p.value for p in TrendPeriod], default=TrendPeriod.DAILY.value)
    trend_p.set_defaults(func=cmd_trend)

    return parser


def run(argv: list[str] | None, service: TaskService) -> int:
    args = build_parser().parse_args(argv)
    logger.debug("Running command %s", args.command)
    return args.func(service, args)


def setup_logging(config: AppConfig) -> bool:
    """Log to <data_dir>/app.log and stdout; stdout only when the file can't be opened."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    file_error: OSError | None = None
    try:
        os.makedirs(config.data_dir, exist_ok=True)
        handlers.insert(0, logging.FileHandler(config.log_file, encoding="utf-8"))
    except OSError as exc:
        file_error = exc

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("Cannot write %s (%s); logging to stdout only.", config.log_file, file_error)
        return False
    return True


def main(argv: list[str] | None = None) -> None:
    config = get_config()
    setup_logging(config)
    try:
        store = build_store(config)
    except StoreError:
        logger.exception("Store backend %r is unavailable; falling back to memory.", config.store_backend)
        store = InMemoryKeyValueStore()
    service = TaskService(store)
    sys.exit(run(argv, service))
