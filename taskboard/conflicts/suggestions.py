"""Remediation suggestions attached to detected conflicts.

Suggestions are appended in a fixed order so that identical conflicts always
produce identical lists.
"""

from ..schemas.unified_models import TaskPriority, normalize_priority
from .rules import DEFAULT_RULES, ConflictRules


DEFER_CANDIDATE = "Consider postponing this task until the conflicting task is finished"
RESCHEDULE_CONFLICTING = "Consider rescheduling the conflicting task"
SHIFT_DATES = "Adjust the dates so the overlap falls on non-working days"
SPLIT_SUBTASKS = "Split one of the tasks into smaller subtasks"
REASSIGN = "Assign the task to another team member if possible"

EXTEND_DEADLINE = "Extend the deadline of one of the tasks to spread the workload"
REDUCE_SCOPE = "Reduce the scope or split the tasks into smaller parts"
ADD_RESOURCES = "Consider adding resources or delegating part of the work"
RESCHEDULE_QUIETER = "Reschedule one of the tasks to a less busy period"
AUTOMATE = "Review whether any task can be automated or simplified"

LOW_IMPORTANCE = frozenset({TaskPriority.LOW, TaskPriority.MEDIUM})


def overlap_suggestions(
    candidate_priority: TaskPriority | str | None,
    conflicting_priority: TaskPriority | str | None,
    overlap_days: int,
    rules: ConflictRules = DEFAULT_RULES,
) -> list[str]:
    """Suggestions for a date overlap."""
    suggestions: list[str] = []

    if normalize_priority(candidate_priority) in LOW_IMPORTANCE:
        suggestions.append(DEFER_CANDIDATE)

    if normalize_priority(conflicting_priority) in LOW_IMPORTANCE:
        suggestions.append(RESCHEDULE_CONFLICTING)

    if overlap_days <= rules.short_overlap_days:
        suggestions.append(SHIFT_DATES)

    suggestions.append(SPLIT_SUBTASKS)
    suggestions.append(REASSIGN)
    return suggestions


def overload_suggestions(
    total_hours_per_day: float, rules: ConflictRules = DEFAULT_RULES
) -> list[str]:
    """Suggestions for a workload overload."""
    suggestions = [EXTEND_DEADLINE, REDUCE_SCOPE]

    if total_hours_per_day > rules.overload_high_hours:
        suggestions.append(ADD_RESOURCES)

    suggestions.append(RESCHEDULE_QUIETER)
    suggestions.append(AUTOMATE)
    return suggestions
