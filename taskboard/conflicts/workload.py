"""Per-day effort aggregation for overload detection.

Each task with both dates and a positive estimate spreads its hours evenly
over its inclusive date range. For every day of the candidate's range the
accumulator sums the candidate's share with the share of every comparison
task active on that day, and reports the days whose total exceeds the daily
limit together with the comparison tasks contributing to them.
"""

from collections.abc import Iterator, Sequence
from datetime import date, timedelta
from typing import NamedTuple

from ..schemas.unified_models import TaskSnapshot
from .overlap import contains_day, inclusive_days
from .rules import DEFAULT_DAILY_HOURS_LIMIT


class WorkloadShare(NamedTuple):
    """A task's even daily share of its estimate."""

    task: TaskSnapshot
    start: date
    end: date
    hours_per_day: float


class OverloadedDay(NamedTuple):
    """A day whose summed workload exceeds the limit."""

    day: date
    total_hours: float
    contributors: list[TaskSnapshot]


def workload_share(task: TaskSnapshot) -> WorkloadShare | None:
    """Daily share of ``task``, or None when it cannot carry workload.

    Tasks missing either date or a positive estimate, and tasks whose range
    is inverted, contribute nothing.
    """
    if not task.has_workload:
        return None
    days = inclusive_days(task.start_date, task.due_date)
    if days <= 0:
        return None
    return WorkloadShare(task, task.start_date, task.due_date, task.estimated_hours / days)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    for offset in range(inclusive_days(start, end)):
        yield start + timedelta(days=offset)


def daily_totals(
    candidate: TaskSnapshot, comparison_set: Sequence[TaskSnapshot]
) -> Iterator[tuple[date, float, list[TaskSnapshot]]]:
    """Yield ``(day, total_hours, contributors)`` for each day of the candidate."""
    own = workload_share(candidate)
    if own is None:
        return

    # Shares are computed once; the per-day scan only filters by range.
    shares = [
        share
        for share in (workload_share(task) for task in comparison_set)
        if share is not None and share.end >= own.start and share.start <= own.end
    ]

    for day in iter_days(own.start, own.end):
        total = own.hours_per_day
        contributors: list[TaskSnapshot] = []
        for share in shares:
            if contains_day(share.start, share.end, day):
                total += share.hours_per_day
                contributors.append(share.task)
        yield day, total, contributors


def find_overloaded_days(
    candidate: TaskSnapshot,
    comparison_set: Sequence[TaskSnapshot],
    daily_limit: float = DEFAULT_DAILY_HOURS_LIMIT,
) -> list[OverloadedDay]:
    """Days of the candidate's range where the summed workload exceeds ``daily_limit``.

    Days without any contributing comparison task are omitted: an overload
    caused by the candidate alone has no partner to report against.
    """
    return [
        OverloadedDay(day, total, contributors)
        for day, total, contributors in daily_totals(candidate, comparison_set)
        if total > daily_limit and contributors
    ]
