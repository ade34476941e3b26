"""
Spaced Repetition Review Scheduler.

Computes the next interval and due date for a memorized item from a
recall-quality score.

Score Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall

Unlike classic SM-2 the ease factor is never adjusted by outcome, and the
graduated first steps key off the total review count.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from loguru import logger

from examprep.core.errors import ValidationError
from examprep.core.models import MemorizedItem, as_utc, utcnow


@dataclass
class SchedulerConfig:
    """Configuration for the review scheduler."""

    passing_score: int = 3
    first_interval: int = 1  # Days after the first successful review
    second_interval: int = 3  # Days after the second
    max_score: int = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (7.5 -> 8)."""
    return math.floor(value + 0.5)


def validate_score(score: object, max_score: int = 5) -> int:
    """
    Check a recall score is an integer within 0..max_score.

    Raises:
        ValidationError: for non-integers (bools included) and out-of-range values
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(f"score must be an integer 0-{max_score}, got {score!r}")
    if not 0 <= score <= max_score:
        raise ValidationError(f"score must be within 0-{max_score}, got {score}")
    return score


class ReviewScheduler:
    """
    Graduated interval scheduler.

    - Failure (score < 3) restarts the cycle at 1 day
    - 1st review -> 1 day, 2nd review -> 3 days
    - Afterwards interval = round(interval * ease_factor)
    """

    def __init__(self, config: SchedulerConfig | None = None):
        """
        Initialize the scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SchedulerConfig()

    def schedule(
        self,
        item: MemorizedItem,
        score: int,
        now: datetime | None = None,
    ) -> MemorizedItem:
        """
        Apply a review to an item and compute its next due date.

        Args:
            item: The reviewed item (mutated in place)
            score: Recall quality 0-5
            now: Review time (defaults to current UTC time)

        Returns:
            The same item, updated

        Raises:
            ValidationError: if score is not an integer in 0-5
        """
        validate_score(score, self.config.max_score)
        now = as_utc(now or utcnow())
        previous_interval = item.interval_days

        item.times_reviewed += 1
        item.last_score = score

        if score < self.config.passing_score:
            # Failed - restart the repetition cycle
            item.interval_days = self.config.first_interval
        elif item.times_reviewed == 1:
            item.interval_days = self.config.first_interval
        elif item.times_reviewed == 2:
            item.interval_days = self.config.second_interval
        else:
            item.interval_days = max(1, round_half_up(item.interval_days * item.ease_factor))

        item.next_review_at = now + timedelta(days=item.interval_days)

        logger.debug(
            f"Scheduled item {item.id}: score={score}, reviews={item.times_reviewed}, "
            f"interval {previous_interval}d -> {item.interval_days}d, "
            f"next_review={item.next_review_at.isoformat()}"
        )

        return item

    def due_items(
        self,
        items: Iterable[MemorizedItem],
        now: datetime | None = None,
        limit: int = 20,
    ) -> list[MemorizedItem]:
        """
        Get items due for review, most overdue first.

        Args:
            items: Candidate items
            now: Reference time (defaults to current UTC time)
            limit: Maximum items to return

        Returns:
            Due items ordered by next_review_at ascending
        """
        now = as_utc(now or utcnow())
        due = [item for item in items if item.is_due(now)]
        due.sort(key=lambda i: i.next_review_at)
        return due[:limit]

    def upcoming(self, items: Iterable[MemorizedItem], limit: int = 20) -> list[MemorizedItem]:
        """All items ordered by next review time, soonest first."""
        return sorted(items, key=lambda i: i.next_review_at)[:limit]
