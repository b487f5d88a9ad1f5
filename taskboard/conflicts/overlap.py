"""Inclusive calendar-date interval math."""

from datetime import date
from typing import NamedTuple

from ..schemas.unified_models import TaskSnapshot


class OverlapResult(NamedTuple):
    """Outcome of comparing two date ranges."""

    overlaps: bool
    overlap_days: int


NO_OVERLAP = OverlapResult(False, 0)


def effective_interval(
    start_date: date | None, due_date: date | None
) -> tuple[date, date] | None:
    """Return the ``(start, end)`` range a task occupies.

    A task with a single date occupies that one day. A task with no dates
    occupies nothing and yields None.
    """
    if start_date is None and due_date is None:
        return None
    start = start_date if start_date is not None else due_date
    end = due_date if due_date is not None else start_date
    return start, end


def task_interval(task: TaskSnapshot) -> tuple[date, date] | None:
    """Effective interval of a snapshot."""
    return effective_interval(task.start_date, task.due_date)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days from ``start`` to ``end``, both included."""
    return (end - start).days + 1


def overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> OverlapResult:
    """Compare two inclusive ranges.

    Ranges touching on a single day overlap by one day. An inverted range
    (end before start) never overlaps anything.
    """
    if end_a < start_a or end_b < start_b:
        return NO_OVERLAP

    latest_start = max(start_a, start_b)
    earliest_end = min(end_a, end_b)
    if latest_start > earliest_end:
        return NO_OVERLAP
    return OverlapResult(True, inclusive_days(latest_start, earliest_end))


def overlap_tasks(task_a: TaskSnapshot, task_b: TaskSnapshot) -> OverlapResult:
    """Compare the effective intervals of two snapshots."""
    interval_a = task_interval(task_a)
    interval_b = task_interval(task_b)
    if interval_a is None or interval_b is None:
        return NO_OVERLAP
    return overlap(*interval_a, *interval_b)


def contains_day(start: date, end: date, day: date) -> bool:
    """Whether ``day`` falls inside the inclusive range."""
    return start <= day <= end
