"""
Progress Aggregator.

Read-side summaries over a learner's test history:
- Per-subject accuracy, weakest subject first
- Chronological performance series for charting
- Recent tests and the combined progress report
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from examprep.core.models import (
    LearnerProgress,
    SeriesPoint,
    SubjectAccuracy,
    TestRecord,
    WeakArea,
)


@dataclass
class ProgressSummary:
    """Everything a progress screen needs, minus rendering."""

    xp: int
    level: int
    streak: int
    weak_areas: list[WeakArea] = field(default_factory=list)
    recent_tests: list[TestRecord] = field(default_factory=list)
    subject_accuracy: list[SubjectAccuracy] = field(default_factory=list)


class ProgressAggregator:
    """Pure functions of the supplied record list; nothing is cached."""

    def __init__(self, recent_limit: int = 10):
        self.recent_limit = recent_limit

    def accuracy_by_subject(self, records: Iterable[TestRecord]) -> list[SubjectAccuracy]:
        """
        Group records by subject and compute correct / total questions.

        A subject with zero questions has accuracy 0.0.

        Returns:
            SubjectAccuracy list ordered by accuracy ascending
        """
        totals: dict[str, list[int]] = {}
        for record in records:
            bucket = totals.setdefault(record.subject, [0, 0])
            bucket[0] += record.questions_count
            bucket[1] += record.graded_correct

        results = [
            SubjectAccuracy(
                subject=subject,
                accuracy=correct / questions if questions else 0.0,
                total_questions=questions,
                correct_answers=correct,
            )
            for subject, (questions, correct) in totals.items()
        ]
        results.sort(key=lambda r: r.accuracy)
        return results

    def performance_series(self, records: Sequence[TestRecord]) -> Iterator[SeriesPoint]:
        """
        Yield one percentage point per test in creation order.

        records must be re-iterable (a list or tuple, not a generator). Each
        call re-sorts them, so the series can be restarted by calling again.
        """
        ordered = sorted(records, key=lambda r: r.created_at)
        for index, record in enumerate(ordered, start=1):
            if record.questions_count:
                value = record.graded_correct / record.questions_count * 100
            else:
                value = 0.0
            yield SeriesPoint(index=index, value=value, label=record.topic)

    def recent_tests(
        self, records: Iterable[TestRecord], limit: int | None = None
    ) -> list[TestRecord]:
        """Most recent tests first."""
        limit = self.recent_limit if limit is None else limit
        return sorted(records, key=lambda r: r.created_at, reverse=True)[:limit]

    def summary(
        self,
        progress: LearnerProgress,
        weak_areas: list[WeakArea],
        records: list[TestRecord],
    ) -> ProgressSummary:
        """Build the combined progress report."""
        return ProgressSummary(
            xp=progress.xp,
            level=progress.level,
            streak=progress.streak,
            weak_areas=list(weak_areas),
            recent_tests=self.recent_tests(records),
            subject_accuracy=self.accuracy_by_subject(records),
        )
