"""Signal-to-noise ratio metrics for a day's task list.

Three ratios are derived from the same counts:

- planned:    share of signal/noise among all tasks of the day
- completion: share of each type's tasks that are done
- effective:  done tasks of each type against all tasks of the day

Stored percentages keep full float precision; only the text fields round.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from signalnoise.domain.models import RatioMetrics, Task, TaskType

NO_TASKS_MESSAGE = "No tasks yet. Start adding tasks to track your productivity!"

PLANNED_NOISE_ALERT_BELOW = 70
PLANNED_SIGNAL_INFO_ABOVE = 90
COMPLETION_NOISE_MARGIN = 15
EFFECTIVE_GOOD_FROM = 70
EFFECTIVE_EXCELLENT_FROM = 85
SUMMARY_EXCELLENT_FROM = 75
SUMMARY_GOOD_FROM = 60


def format_percent(value: float) -> str:
    """Round half-up to an integer string (62.5 -> "63")."""
    return str(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_tenths(value: float) -> str:
    """Round half-up to one decimal place (66.65 -> "66.7")."""
    return str(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def ratio_string(signal_percent: float, noise_percent: float) -> str:
    return f"{format_percent(signal_percent)}:{format_percent(noise_percent)}"


def compute_ratio_metrics(tasks: Sequence[Task]) -> RatioMetrics:
    signal_tasks = [t for t in tasks if t.type == TaskType.SIGNAL]
    noise_tasks = [t for t in tasks if t.type == TaskType.NOISE]

    signal_total = len(signal_tasks)
    noise_total = len(noise_tasks)
    total = signal_total + noise_total
    signal_done = sum(1 for t in signal_tasks if t.done)
    noise_done = sum(1 for t in noise_tasks if t.done)

    metrics = RatioMetrics(
        signal_total=signal_total,
        noise_total=noise_total,
        total=total,
        signal_done=signal_done,
        noise_done=noise_done,
    )
    if total == 0:
        return replace(metrics, summary_message=NO_TASKS_MESSAGE)

    planned_signal = signal_total / total * 100
    planned_noise = noise_total / total * 100

    completion_signal = signal_done / signal_total * 100 if signal_total > 0 else 0.0
    completion_noise = noise_done / noise_total * 100 if noise_total > 0 else 0.0

    metrics = replace(
        metrics,
        planned_signal_percent=planned_signal,
        planned_noise_percent=planned_noise,
        planned_ratio_warning=_planned_warning(planned_signal, planned_noise),
        completion_signal_percent=completion_signal,
        completion_noise_percent=completion_noise,
        completion_warning=_completion_warning(metrics, completion_signal, completion_noise),
        effective_signal_percent=signal_done / total * 100,
        effective_noise_percent=noise_done / total * 100,
        effective_ratio_warning=_effective_warning(signal_done, noise_done),
    )
    return replace(metrics, summary_message=_summary_message(metrics))


def _planned_warning(signal_percent: float, noise_percent: float) -> str:
    ratio = ratio_string(signal_percent, noise_percent)
    if signal_percent < PLANNED_NOISE_ALERT_BELOW:
        return f"⚠️ Planned too much noise ({ratio}). Goal is 80:20."
    if signal_percent > PLANNED_SIGNAL_INFO_ABOVE:
        return f"ℹ️ Very signal-focused ({ratio}). Some noise tasks are normal."
    return f"✅ Good balance ({ratio}). Close to 80:20 goal."


def _completion_warning(counts: RatioMetrics, signal_percent: float, noise_percent: float) -> str:
    # Needs both types to compare; noise between signal and signal+15 gets no message.
    if counts.signal_total == 0 or counts.noise_total == 0:
        return ""
    if noise_percent > signal_percent + COMPLETION_NOISE_MARGIN:
        return (
            f"⚠️ Completing more noise ({format_percent(noise_percent)}%) "
            f"than signal ({format_percent(signal_percent)}%)."
        )
    if signal_percent > noise_percent:
        return (
            f"✅ Good focus! Signal completion ({format_percent(signal_percent)}%) "
            f"ahead of noise ({format_percent(noise_percent)}%)."
        )
    return ""


def _actual_split(signal_done: int, noise_done: int) -> tuple[float, float]:
    total_done = signal_done + noise_done
    return signal_done / total_done * 100, noise_done / total_done * 100


def _effective_warning(signal_done: int, noise_done: int) -> str:
    if signal_done + noise_done == 0:
        return ""
    actual_signal, actual_noise = _actual_split(signal_done, noise_done)
    ratio = ratio_string(actual_signal, actual_noise)
    if actual_signal < EFFECTIVE_GOOD_FROM:
        return f"⚠️ Actual work split was {ratio}, not 80:20."
    if actual_signal < EFFECTIVE_EXCELLENT_FROM:
        return f"✅ Good effective ratio ({ratio}). Close to 80:20 goal!"
    return f"✅ Excellent! Effective ratio is {ratio}."


def _summary_message(metrics: RatioMetrics) -> str:
    if metrics.total_done == 0:
        return (
            f"You have {metrics.total} tasks planned "
            f"({format_percent(metrics.planned_signal_percent)}% Signal, "
            f"{format_percent(metrics.planned_noise_percent)}% Noise). Start checking them off!"
        )

    actual_signal, actual_noise = _actual_split(metrics.signal_done, metrics.noise_done)
    planned = ratio_string(metrics.planned_signal_percent, metrics.planned_noise_percent)
    executed = ratio_string(actual_signal, actual_noise)

    if actual_signal >= SUMMARY_EXCELLENT_FROM:
        return f"🎉 Excellent work! You planned {planned} and executed {executed}. Keep it up!"
    if actual_signal >= SUMMARY_GOOD_FROM:
        return (
            f"👍 Good progress! You planned {planned} and executed {executed}. "
            "Try to focus more on Signal tasks."
        )
    return f"💡 You planned {planned}, but executed {executed}. Try shifting focus to Signal tasks tomorrow."
