"""
Study: review timing and failure tracking.

- ReviewScheduler: graduated spaced-repetition intervals
- WeakAreaTracker: running accuracy per (subject, topic)
- ReviewService: event flows combining the above with gamification
"""

from examprep.study.review_scheduler import ReviewScheduler, SchedulerConfig
from examprep.study.review_service import ReviewOutcome, ReviewService
from examprep.study.weak_area_tracker import WeakAreaTracker

__all__ = [
    "ReviewScheduler",
    "SchedulerConfig",
    "WeakAreaTracker",
    "ReviewService",
    "ReviewOutcome",
]
