"""Conflict Detector.

Checks a candidate task's schedule against the other active tasks and reports
date-overlap and workload-overload conflicts.

Conflict Types:
- Overlap (inclusive date ranges intersect)
- Overload (summed hours per day exceed the daily limit)

Usage:
    detector = ConflictDetector()
    conflicts = detector.detect(candidate, comparison_set)

The detector performs no I/O and keeps no state between calls. Callers are
expected to pass a comparison set already restricted to active tasks and to
persist the returned conflicts themselves.
"""

import logging
from collections.abc import Iterable, Sequence

from ..schemas.unified_models import (
    CandidateTask,
    Conflict,
    ConflictType,
    TaskSnapshot,
)
from .overlap import overlap_tasks
from .rules import DEFAULT_RULES, ConflictRules
from .severity import classify_overlap, classify_overload
from .suggestions import overlap_suggestions, overload_suggestions
from .workload import find_overloaded_days

logger = logging.getLogger(__name__)


class ConflictDetector:
    """Stateless overlap and overload detector."""

    def __init__(self, rules: ConflictRules | None = None):
        self.rules = rules or DEFAULT_RULES

    def detect(
        self, candidate: CandidateTask, comparison_set: Iterable[TaskSnapshot]
    ) -> list[Conflict]:
        """Detect every conflict between ``candidate`` and ``comparison_set``.

        Overlap conflicts come first in comparison-set order, followed by
        overload conflicts in the order their first overloaded day is reached.
        A single call never yields two conflicts of the same type for the same
        conflicting task.
        """
        others = self._comparable(candidate, comparison_set)
        if not others or not candidate.has_schedule:
            return []

        conflicts = self.detect_overlaps(candidate, others)
        conflicts.extend(self.detect_overloads(candidate, others))

        logger.debug(
            f"Detected {len(conflicts)} conflict(s) for candidate "
            f"{candidate.id or candidate.title!r} against {len(others)} task(s)"
        )
        return conflicts

    def detect_overlaps(
        self, candidate: CandidateTask, others: Sequence[TaskSnapshot]
    ) -> list[Conflict]:
        """One OVERLAP conflict per comparison task sharing a day with the candidate."""
        conflicts = []
        for other in others:
            result = overlap_tasks(candidate, other)
            if not result.overlaps:
                continue

            conflicts.append(
                Conflict(
                    type=ConflictType.OVERLAP,
                    severity=classify_overlap(
                        result.overlap_days,
                        candidate.priority,
                        other.priority,
                        self.rules,
                    ),
                    conflicting_task_id=other.id,
                    conflicting_task_title=other.title,
                    message=(
                        f'Date conflict with "{other.title}". '
                        f"Overlap of {result.overlap_days} day(s)."
                    ),
                    suggestions=overlap_suggestions(
                        candidate.priority,
                        other.priority,
                        result.overlap_days,
                        self.rules,
                    ),
                    overlap_days=result.overlap_days,
                )
            )
        return conflicts

    def detect_overloads(
        self, candidate: CandidateTask, others: Sequence[TaskSnapshot]
    ) -> list[Conflict]:
        """Deduplicated OVERLOAD conflicts across the candidate's date range."""
        if not candidate.has_workload:
            return []

        conflicts = []
        reported: set[int] = set()
        overloaded_days = find_overloaded_days(
            candidate, others, self.rules.daily_hours_limit
        )
        for overloaded in overloaded_days:
            for other in overloaded.contributors:
                if other.id in reported:
                    continue
                reported.add(other.id)

                total = overloaded.total_hours
                conflicts.append(
                    Conflict(
                        type=ConflictType.OVERLOAD,
                        severity=classify_overload(
                            total, candidate.priority, self.rules
                        ),
                        conflicting_task_id=other.id,
                        conflicting_task_title=other.title,
                        message=(
                            f"Workload overload detected. Estimated total: "
                            f'{total:.1f} hours/day with "{other.title}".'
                        ),
                        suggestions=overload_suggestions(total, self.rules),
                        hours_per_day=total,
                    )
                )
        return conflicts

    @staticmethod
    def _comparable(
        candidate: CandidateTask, comparison_set: Iterable[TaskSnapshot]
    ) -> list[TaskSnapshot]:
        """Drop entries that cannot be reported against.

        Entries without an id, entries carrying the candidate's own id and
        repeated ids are skipped; first occurrence wins.
        """
        seen: set[int] = set()
        others = []
        for task in comparison_set:
            if task.id is None or task.id == candidate.id or task.id in seen:
                continue
            seen.add(task.id)
            others.append(task)
        return others


def detect_conflicts(
    candidate: CandidateTask,
    comparison_set: Iterable[TaskSnapshot],
    rules: ConflictRules | None = None,
) -> list[Conflict]:
    """Module-level shortcut for ``ConflictDetector(rules).detect(...)``."""
    return ConflictDetector(rules).detect(candidate, comparison_set)
