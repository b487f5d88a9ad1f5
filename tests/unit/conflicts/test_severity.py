"""Tests for conflict severity classification."""

import pytest

from taskboard.conflicts.rules import ConflictRules
from taskboard.conflicts.severity import classify_overlap, classify_overload, escalate
from taskboard.schemas.unified_models import ConflictSeverity, TaskPriority

LOW = ConflictSeverity.LOW
MEDIUM = ConflictSeverity.MEDIUM
HIGH = ConflictSeverity.HIGH


class TestEscalate:
    """Test one-level severity escalation."""

    @pytest.mark.parametrize(
        "severity,expected", [(LOW, MEDIUM), (MEDIUM, HIGH), (HIGH, HIGH)]
    )
    def test_escalation(self, severity, expected):
        assert escalate(severity) == expected


class TestClassifyOverlap:
    """Test overlap severity from length and priorities."""

    @pytest.mark.parametrize(
        "days,expected",
        [(1, LOW), (2, LOW), (3, MEDIUM), (6, MEDIUM), (7, HIGH), (30, HIGH)],
    )
    def test_length_thresholds_with_low_priorities(self, days, expected):
        assert classify_overlap(days, TaskPriority.LOW, TaskPriority.LOW) == expected

    def test_urgent_on_either_side_is_high(self):
        assert classify_overlap(1, TaskPriority.URGENT, TaskPriority.LOW) == HIGH
        assert classify_overlap(1, TaskPriority.LOW, TaskPriority.URGENT) == HIGH

    def test_high_priority_is_at_least_medium(self):
        assert classify_overlap(1, TaskPriority.HIGH, TaskPriority.LOW) == MEDIUM
        assert classify_overlap(8, TaskPriority.HIGH, TaskPriority.LOW) == HIGH

    def test_missing_and_unknown_priorities_weigh_as_medium(self):
        assert classify_overlap(1, None, "critical") == LOW

    def test_raw_strings_are_accepted(self):
        assert classify_overlap(1, "URGENT", None) == HIGH

    def test_custom_thresholds(self):
        rules = ConflictRules(overlap_medium_days=2, overlap_high_days=4)

        assert classify_overlap(2, TaskPriority.LOW, TaskPriority.LOW, rules) == MEDIUM
        assert classify_overlap(4, TaskPriority.LOW, TaskPriority.LOW, rules) == HIGH


class TestClassifyOverload:
    """Test overload severity from the daily total."""

    @pytest.mark.parametrize(
        "total,expected",
        [(8.5, LOW), (10.0, LOW), (10.5, MEDIUM), (12.0, MEDIUM), (12.1, HIGH)],
    )
    def test_hour_thresholds_for_medium_candidate(self, total, expected):
        assert classify_overload(total, TaskPriority.MEDIUM) == expected

    @pytest.mark.parametrize("priority", [TaskPriority.HIGH, TaskPriority.URGENT])
    def test_important_candidate_escalates(self, priority):
        assert classify_overload(9.0, priority) == MEDIUM
        assert classify_overload(11.0, priority) == HIGH
        assert classify_overload(15.0, priority) == HIGH

    def test_low_candidate_does_not_escalate(self):
        assert classify_overload(9.0, TaskPriority.LOW) == LOW

    def test_missing_priority_does_not_escalate(self):
        assert classify_overload(9.0, None) == LOW
