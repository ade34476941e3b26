"""
Review Service.

Host-side event flows that wire the pure components together:
- A completed review: reschedule, track weak areas on failure, award XP
- A completed test: streak + XP
- A login check-in: streak
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from examprep.config import Settings
from examprep.core.errors import ValidationError
from examprep.core.models import (
    LearnerProgress,
    MemorizedItem,
    TestRecord,
    WeakArea,
    as_utc,
    utcnow,
)
from examprep.progress.gamification import ActivityKind, GamificationLedger
from examprep.study.review_scheduler import ReviewScheduler, SchedulerConfig
from examprep.study.weak_area_tracker import WeakAreaTracker


@dataclass
class ReviewOutcome:
    """State after a review event."""

    item: MemorizedItem
    progress: LearnerProgress
    weak_areas: list[WeakArea]
    weak_area: WeakArea | None = None  # Set when the review was a failure


class ReviewService:
    """Applies learner events to entity state. Persistence stays with the caller."""

    def __init__(
        self,
        scheduler: ReviewScheduler | None = None,
        tracker: WeakAreaTracker | None = None,
        ledger: GamificationLedger | None = None,
    ):
        self.scheduler = scheduler or ReviewScheduler()
        self.tracker = tracker or WeakAreaTracker(self.scheduler.config.passing_score)
        self.ledger = ledger or GamificationLedger()

        if self.tracker.passing_score != self.scheduler.config.passing_score:
            raise ValidationError(
                f"Tracker passing score {self.tracker.passing_score} does not match "
                f"scheduler passing score {self.scheduler.config.passing_score}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> ReviewService:
        scheduler = ReviewScheduler(SchedulerConfig(passing_score=settings.passing_score))
        return cls(
            scheduler=scheduler,
            tracker=WeakAreaTracker(settings.passing_score),
            ledger=GamificationLedger.from_settings(settings),
        )

    def review(
        self,
        item: MemorizedItem,
        score: int,
        progress: LearnerProgress,
        weak_areas: list[WeakArea],
        now: datetime | None = None,
    ) -> ReviewOutcome:
        """
        Process one completed review.

        The score is validated by the scheduler before anything changes.
        """
        now = as_utc(now or utcnow())
        self.scheduler.schedule(item, score, now)

        weak_area = None
        if score < self.scheduler.config.passing_score:
            self.tracker.record_outcome(weak_areas, item.subject, item.topic, score)
            weak_area = self.tracker.find(weak_areas, item.subject, item.topic)

        self.ledger.record_activity(progress, ActivityKind.REVIEW, now)

        logger.info(
            f"Review recorded for item {item.id}: score={score}, "
            f"next in {item.interval_days}d, level={progress.level} xp={progress.xp}"
        )
        return ReviewOutcome(
            item=item, progress=progress, weak_areas=weak_areas, weak_area=weak_area
        )

    def complete_test(
        self,
        progress: LearnerProgress,
        record: TestRecord,
        now: datetime | None = None,
    ) -> LearnerProgress:
        """Credit a completed test to the learner."""
        logger.info(
            f"Test completed: {record.subject}/{record.topic} "
            f"{record.graded_correct}/{record.questions_count}"
        )
        return self.ledger.record_activity(progress, ActivityKind.TEST_GENERATED, now)

    def check_in(self, progress: LearnerProgress, now: datetime | None = None) -> LearnerProgress:
        """Login activity: keeps the streak alive."""
        return self.ledger.record_activity(progress, ActivityKind.LOGIN, now)
