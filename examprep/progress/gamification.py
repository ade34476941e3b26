"""
Gamification Ledger.

Converts learner activity into experience points, levels and a daily
streak. Streak days are whole 24-hour periods since the last activity
(floor division of the elapsed time), not calendar-date differences.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from examprep.core.errors import ValidationError
from examprep.core.models import LearnerProgress, as_utc, utcnow

ONE_DAY = timedelta(days=1)


class ActivityKind(str, Enum):
    """Activities that earn XP."""

    LOGIN = "login"
    CHAT = "chat"
    TEST_GENERATED = "test_generated"
    FLASHCARDS_CREATED = "flashcards_created"
    REVIEW = "review"
    CHALLENGE_COMPLETED = "challenge_completed"


DEFAULT_AWARDS: dict[ActivityKind, int] = {
    ActivityKind.LOGIN: 0,
    ActivityKind.CHAT: 5,
    ActivityKind.TEST_GENERATED: 10,
    ActivityKind.FLASHCARDS_CREATED: 5,
    ActivityKind.REVIEW: 2,
    ActivityKind.CHALLENGE_COMPLETED: 15,
}

# Reviews and challenge results award XP without touching the streak
STREAK_ACTIVITIES = frozenset(
    {
        ActivityKind.LOGIN,
        ActivityKind.CHAT,
        ActivityKind.TEST_GENERATED,
        ActivityKind.FLASHCARDS_CREATED,
    }
)


class GamificationLedger:
    """XP, level and streak bookkeeping for a LearnerProgress record."""

    def __init__(
        self,
        xp_per_level: int = 100,
        awards: dict[ActivityKind, int] | None = None,
    ):
        """
        Initialize the ledger.

        Args:
            xp_per_level: XP consumed by each level-up
            awards: XP per activity (defaults to DEFAULT_AWARDS)
        """
        self.xp_per_level = xp_per_level
        self.awards = {**DEFAULT_AWARDS, **(awards or {})}

    @classmethod
    def from_settings(cls, settings) -> GamificationLedger:
        """Build a ledger from application Settings."""
        awards = {ActivityKind(name): xp for name, xp in settings.get_xp_awards().items()}
        return cls(xp_per_level=settings.xp_per_level, awards=awards)

    def record_streak(
        self, progress: LearnerProgress, now: datetime | None = None
    ) -> LearnerProgress:
        """
        Update the daily streak for activity at `now`.

        - Same day (0): unchanged, last_active_at kept
        - Next day (1): streak + 1
        - Gap of 2+ days, or a clock running backwards: streak restarts at 1
        """
        now = as_utc(now or utcnow())
        progress.last_active_at = as_utc(progress.last_active_at)
        days = (now - progress.last_active_at) // ONE_DAY

        if days == 0:
            return progress

        if days == 1:
            progress.streak += 1
        else:
            if days < 0:
                logger.warning(
                    f"Activity at {now.isoformat()} precedes last activity "
                    f"{progress.last_active_at.isoformat()}; resetting streak"
                )
            progress.streak = 1

        progress.last_active_at = now
        logger.debug(f"Streak for {progress.learner_id}: {progress.streak} (gap={days}d)")
        return progress

    def add_xp(self, progress: LearnerProgress, points: int) -> LearnerProgress:
        """
        Award XP, rolling over as many levels as the total covers.

        Raises:
            ValidationError: if points is negative or not an integer
        """
        if isinstance(points, bool) or not isinstance(points, int):
            raise ValidationError(f"points must be an integer, got {points!r}")
        if points < 0:
            raise ValidationError(f"points must be >= 0, got {points}")

        progress.xp += points
        while progress.xp >= self.xp_per_level:
            progress.level += 1
            progress.xp -= self.xp_per_level
            logger.info(f"Learner {progress.learner_id} reached level {progress.level}")

        return progress

    def record_activity(
        self,
        progress: LearnerProgress,
        activity: ActivityKind,
        now: datetime | None = None,
    ) -> LearnerProgress:
        """Apply the streak update (where applicable) and XP award for an activity."""
        activity = ActivityKind(activity)
        if activity in STREAK_ACTIVITIES:
            self.record_streak(progress, now)
        return self.add_xp(progress, self.awards[activity])
