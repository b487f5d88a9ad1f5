"""Scheduling conflict engine.

Pure functions and a stateless detector; nothing in this package touches the
database.
"""

from .detector import ConflictDetector, detect_conflicts
from .overlap import OverlapResult, effective_interval, overlap, overlap_tasks
from .rules import DEFAULT_RULES, ConflictRules
from .severity import classify_overlap, classify_overload, escalate
from .suggestions import overlap_suggestions, overload_suggestions
from .workload import OverloadedDay, find_overloaded_days, workload_share

__all__ = [
    "DEFAULT_RULES",
    "ConflictDetector",
    "ConflictRules",
    "OverlapResult",
    "OverloadedDay",
    "classify_overlap",
    "classify_overload",
    "detect_conflicts",
    "effective_interval",
    "escalate",
    "find_overloaded_days",
    "overlap",
    "overlap_suggestions",
    "overlap_tasks",
    "overload_suggestions",
    "workload_share",
]
