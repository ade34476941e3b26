"""
Domain entities for the learning-progress tracker.

Every entity is owned by a single learner. Components mutate these records
in place and hand them back; loading and storing them is the host's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .errors import ValidationError


def utcnow() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC; convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# =============================================================================
# Review State
# =============================================================================


@dataclass
class MemorizedItem:
    """A flashcard-style item under spaced-repetition review."""

    question: str
    answer: str
    subject: str
    topic: str
    next_review_at: datetime = field(default_factory=utcnow)
    interval_days: int = 1  # Always >= 1
    ease_factor: float = 2.5  # Read-only in this version
    times_reviewed: int = 0
    last_score: int = 0  # 0-5 recall quality
    id: int | None = None

    def __post_init__(self) -> None:
        self.next_review_at = as_utc(self.next_review_at)

    def is_due(self, now: datetime | None = None) -> bool:
        """Check if this item is due for review."""
        return as_utc(self.next_review_at) <= as_utc(now or utcnow())

    def days_overdue(self, now: datetime | None = None) -> int:
        """Whole days past the scheduled review time."""
        delta = as_utc(now or utcnow()) - as_utc(self.next_review_at)
        return max(0, delta.days)


@dataclass
class WeakArea:
    """Running accuracy estimate for a (subject, topic) pair."""

    subject: str
    topic: str
    accuracy: float = 0.0  # 0.0 - 1.0
    attempts: int = 1

    @property
    def key(self) -> tuple[str, str]:
        return (self.subject, self.topic)


# =============================================================================
# Test History
# =============================================================================


@dataclass(frozen=True)
class TestRecord:
    """
    A completed test. Immutable once created.

    correct_answers is None for a test that was generated but never graded;
    aggregation counts it as zero correct.
    """

    __test__ = False  # not a pytest class

    subject: str
    topic: str
    questions_count: int
    correct_answers: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.subject or not self.subject.strip():
            raise ValidationError("TestRecord.subject must not be blank")
        if not self.topic or not self.topic.strip():
            raise ValidationError("TestRecord.topic must not be blank")
        if isinstance(self.questions_count, bool) or not isinstance(self.questions_count, int):
            raise ValidationError(f"questions_count must be an int, got {self.questions_count!r}")
        if self.questions_count < 0:
            raise ValidationError(f"questions_count must be >= 0, got {self.questions_count}")
        if self.correct_answers is not None:
            if isinstance(self.correct_answers, bool) or not isinstance(self.correct_answers, int):
                raise ValidationError(
                    f"correct_answers must be an int or None, got {self.correct_answers!r}"
                )
            if not 0 <= self.correct_answers <= self.questions_count:
                raise ValidationError(
                    f"correct_answers must be within 0..{self.questions_count}, "
                    f"got {self.correct_answers}"
                )
        object.__setattr__(self, "created_at", as_utc(self.created_at))

    @property
    def graded_correct(self) -> int:
        """Correct answers, treating an ungraded test as zero."""
        return self.correct_answers or 0


# =============================================================================
# Gamification
# =============================================================================


@dataclass
class LearnerProgress:
    """Experience, level and daily streak for one learner."""

    xp: int = 0  # 0-99 between awards
    level: int = 1
    streak: int = 0
    last_active_at: datetime = field(default_factory=utcnow)
    learner_id: str | None = None

    def __post_init__(self) -> None:
        self.last_active_at = as_utc(self.last_active_at)


# =============================================================================
# Read-side Results
# =============================================================================


@dataclass(frozen=True)
class SubjectAccuracy:
    """Aggregated accuracy for one subject."""

    subject: str
    accuracy: float
    total_questions: int
    correct_answers: int


@dataclass(frozen=True)
class SeriesPoint:
    """One point of a chronological performance series."""

    index: int  # 1-based
    value: float  # percentage 0-100
    label: str  # test topic
