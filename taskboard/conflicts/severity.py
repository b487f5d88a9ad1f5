"""Severity classification for overlap and overload conflicts.

The two conflict types are classified by independent rules.
"""

from ..schemas.unified_models import (
    ConflictSeverity,
    TaskPriority,
    get_priority_weight,
    normalize_priority,
)
from .rules import DEFAULT_RULES, ConflictRules


URGENT_WEIGHT = get_priority_weight(TaskPriority.URGENT)
HIGH_WEIGHT = get_priority_weight(TaskPriority.HIGH)

ESCALATING_PRIORITIES = frozenset({TaskPriority.HIGH, TaskPriority.URGENT})

_ESCALATION = {
    ConflictSeverity.LOW: ConflictSeverity.MEDIUM,
    ConflictSeverity.MEDIUM: ConflictSeverity.HIGH,
    ConflictSeverity.HIGH: ConflictSeverity.HIGH,
}


def escalate(severity: ConflictSeverity) -> ConflictSeverity:
    """Raise a severity by one level, saturating at HIGH."""
    return _ESCALATION[severity]


def classify_overlap(
    overlap_days: int,
    candidate_priority: TaskPriority | str | None,
    conflicting_priority: TaskPriority | str | None,
    rules: ConflictRules = DEFAULT_RULES,
) -> ConflictSeverity:
    """Severity of a date overlap from its length and the higher priority."""
    max_weight = max(
        get_priority_weight(candidate_priority),
        get_priority_weight(conflicting_priority),
    )

    if overlap_days >= rules.overlap_high_days or max_weight >= URGENT_WEIGHT:
        return ConflictSeverity.HIGH
    if overlap_days >= rules.overlap_medium_days or max_weight >= HIGH_WEIGHT:
        return ConflictSeverity.MEDIUM
    return ConflictSeverity.LOW


def classify_overload(
    total_hours_per_day: float,
    candidate_priority: TaskPriority | str | None,
    rules: ConflictRules = DEFAULT_RULES,
) -> ConflictSeverity:
    """Severity of a workload overload, escalated for important candidates."""
    if total_hours_per_day > rules.overload_high_hours:
        severity = ConflictSeverity.HIGH
    elif total_hours_per_day > rules.overload_medium_hours:
        severity = ConflictSeverity.MEDIUM
    else:
        severity = ConflictSeverity.LOW

    if normalize_priority(candidate_priority) in ESCALATING_PRIORITIES:
        severity = escalate(severity)
    return severity
