"""
SignalNoise - daily rollover
When the date changes, the previous day's working set is archived into history
and the working set is cleared.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from signalnoise.domain.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RolloverResult:
    working_set: list[Task]
    history: dict[str, list[Task]]
    last_date: str
    previous_date: str | None = None
    archived: bool = False

    @property
    def day_changed(self) -> bool:
        return self.previous_date is not None and self.previous_date != self.last_date


def reconcile(
    working_set: Sequence[Task],
    history: Mapping[str, Sequence[Task]],
    last_date: str | None,
    today: str,
) -> RolloverResult:
    """
    Compare the last recorded date with today and archive when they differ.

    An existing history entry for the archived date is overwritten, not merged.
    Inputs are never mutated; the returned containers are fresh copies.
    """
    new_history = {day: list(tasks) for day, tasks in history.items()}

    if not last_date or last_date == today:
        return RolloverResult(
            working_set=list(working_set),
            history=new_history,
            last_date=today,
            previous_date=last_date or None,
        )

    archived = False
    if working_set:
        new_history[last_date] = list(working_set)
        archived = True

    logger.info(
        "Day changed %s -> %s; archived %d task(s)", last_date, today, len(working_set) if archived else 0
    )
    return RolloverResult(
        working_set=[],
        history=new_history,
        last_date=today,
        previous_date=last_date,
        archived=archived,
    )
