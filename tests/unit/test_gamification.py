"""
Unit tests for GamificationLedger.

Tests:
- Streak continuation, same-day no-op and reset on gaps
- Multi-level XP rollover
- Activity awards
"""

from datetime import timedelta

import pytest

from examprep.config import Settings
from examprep.core.errors import ValidationError
from examprep.core.models import LearnerProgress
from examprep.progress.gamification import ActivityKind, GamificationLedger


@pytest.fixture
def ledger():
    return GamificationLedger()


class TestRecordStreak:

    def test_next_day_increments(self, ledger, sample_progress, now):
        ledger.record_streak(sample_progress, now)

        assert sample_progress.streak == 4
        assert sample_progress.last_active_at == now

    def test_same_day_unchanged(self, ledger, now):
        earlier = now - timedelta(hours=5)
        progress = LearnerProgress(streak=2, last_active_at=earlier)

        ledger.record_streak(progress, now)

        assert progress.streak == 2
        assert progress.last_active_at == earlier

    def test_gap_resets_to_one(self, ledger, now):
        progress = LearnerProgress(streak=9, last_active_at=now - timedelta(days=3))

        ledger.record_streak(progress, now)

        assert progress.streak == 1
        assert progress.last_active_at == now

    def test_just_under_two_days_still_continues(self, ledger, now):
        """Whole elapsed days, floored: 47 hours is one day."""
        progress = LearnerProgress(streak=1, last_active_at=now - timedelta(hours=47))
        ledger.record_streak(progress, now)
        assert progress.streak == 2

    def test_exactly_two_days_resets(self, ledger, now):
        progress = LearnerProgress(streak=5, last_active_at=now - timedelta(days=2))
        ledger.record_streak(progress, now)
        assert progress.streak == 1

    def test_clock_going_backwards_resets(self, ledger, now):
        progress = LearnerProgress(streak=5, last_active_at=now + timedelta(hours=1))

        ledger.record_streak(progress, now)

        assert progress.streak == 1
        assert progress.last_active_at == now

    def test_fresh_learner_starts_at_one(self, ledger, now):
        progress = LearnerProgress(streak=0, last_active_at=now - timedelta(days=1))
        ledger.record_streak(progress, now)
        assert progress.streak == 1

    def test_naive_now_is_treated_as_utc(self, ledger, sample_progress, now):
        naive_now = now.replace(tzinfo=None)

        ledger.record_streak(sample_progress, naive_now)

        assert sample_progress.streak == 4
        assert sample_progress.last_active_at == now
        assert sample_progress.last_active_at.tzinfo is not None

    def test_naive_last_active_at_is_treated_as_utc(self, ledger, now):
        yesterday = (now - timedelta(days=1)).replace(tzinfo=None)
        progress = LearnerProgress(streak=2, last_active_at=yesterday)

        ledger.record_streak(progress, now)

        assert progress.streak == 3


class TestAddXP:

    def test_simple_add(self, ledger):
        progress = ledger.add_xp(LearnerProgress(xp=10, level=1), 25)
        assert (progress.xp, progress.level) == (35, 1)

    def test_single_rollover_at_exactly_100(self, ledger):
        progress = ledger.add_xp(LearnerProgress(xp=90, level=1), 10)
        assert (progress.xp, progress.level) == (0, 2)

    def test_multi_level_jump(self, ledger):
        """95 + 250 = 345 rolls over three times in one call, leaving 45."""
        progress = ledger.add_xp(LearnerProgress(xp=95, level=2), 250)
        assert progress.xp == 45
        assert progress.level == 5

    def test_zero_points(self, ledger):
        progress = ledger.add_xp(LearnerProgress(xp=99, level=1), 0)
        assert (progress.xp, progress.level) == (99, 1)

    @pytest.mark.parametrize("points", [-5, 2.5, "10", None])
    def test_invalid_points(self, ledger, points):
        with pytest.raises(ValidationError):
            ledger.add_xp(LearnerProgress(), points)

    def test_custom_level_size(self):
        ledger = GamificationLedger(xp_per_level=50)
        progress = ledger.add_xp(LearnerProgress(xp=0, level=1), 120)
        assert (progress.xp, progress.level) == (20, 3)


class TestRecordActivity:

    def test_review_awards_xp_without_streak(self, ledger, sample_progress, now):
        before = sample_progress.last_active_at

        ledger.record_activity(sample_progress, ActivityKind.REVIEW, now)

        assert sample_progress.xp == 2
        assert sample_progress.streak == 3
        assert sample_progress.last_active_at == before

    def test_test_generated_updates_streak_and_xp(self, ledger, sample_progress, now):
        ledger.record_activity(sample_progress, ActivityKind.TEST_GENERATED, now)

        assert sample_progress.xp == 10
        assert sample_progress.streak == 4

    def test_login_only_touches_streak(self, ledger, sample_progress, now):
        ledger.record_activity(sample_progress, ActivityKind.LOGIN, now)

        assert sample_progress.xp == 0
        assert sample_progress.streak == 4

    def test_accepts_activity_name(self, ledger, now):
        progress = LearnerProgress(last_active_at=now)
        ledger.record_activity(progress, "challenge_completed", now)
        assert progress.xp == 15

    def test_awards_from_settings(self, now):
        settings = Settings(xp_review=50, xp_per_level=60)
        ledger = GamificationLedger.from_settings(settings)
        progress = LearnerProgress(last_active_at=now)

        ledger.record_activity(progress, ActivityKind.REVIEW, now)
        ledger.record_activity(progress, ActivityKind.REVIEW, now)

        assert (progress.xp, progress.level) == (40, 2)
