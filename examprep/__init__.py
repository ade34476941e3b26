"""
examprep: spaced-repetition scheduling and progress tracking.

The plain functions below use default-configured components, for hosts
that don't need custom thresholds:

    from examprep import schedule, add_xp
    schedule(item, 4)
    add_xp(progress, 10)
"""

from examprep.core.errors import ExamPrepError, NotFoundError, ValidationError
from examprep.core.models import (
    LearnerProgress,
    MemorizedItem,
    SeriesPoint,
    SubjectAccuracy,
    TestRecord,
    WeakArea,
)
from examprep.progress.aggregator import ProgressAggregator
from examprep.progress.gamification import ActivityKind, GamificationLedger
from examprep.study.review_scheduler import ReviewScheduler
from examprep.study.weak_area_tracker import WeakAreaTracker

__version__ = "1.0.0"

_scheduler = ReviewScheduler()
_tracker = WeakAreaTracker()
_aggregator = ProgressAggregator()
_ledger = GamificationLedger()

schedule = _scheduler.schedule
record_outcome = _tracker.record_outcome
accuracy_by_subject = _aggregator.accuracy_by_subject
performance_series = _aggregator.performance_series
record_streak = _ledger.record_streak
add_xp = _ledger.add_xp

__all__ = [
    # Errors
    "ExamPrepError",
    "NotFoundError",
    "ValidationError",
    # Entities
    "LearnerProgress",
    "MemorizedItem",
    "SeriesPoint",
    "SubjectAccuracy",
    "TestRecord",
    "WeakArea",
    # Components
    "ActivityKind",
    "GamificationLedger",
    "ProgressAggregator",
    "ReviewScheduler",
    "WeakAreaTracker",
    # Functions
    "schedule",
    "record_outcome",
    "accuracy_by_subject",
    "performance_series",
    "record_streak",
    "add_xp",
]
