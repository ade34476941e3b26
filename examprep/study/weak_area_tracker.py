"""
Weak Area Tracker.

Keeps one running accuracy estimate per (subject, topic) pair, fed by
failed reviews. The update only ever sees failures, so accuracy decays
toward zero and never rises:

    accuracy' = accuracy * (attempts - 1) / attempts

No raw history is kept; the new mean comes from the old mean and count.
"""

from __future__ import annotations

from loguru import logger

from examprep.core.errors import ValidationError
from examprep.core.models import WeakArea
from examprep.study.review_scheduler import validate_score


class WeakAreaTracker:
    """Maintains a learner's weak-area list from low-quality review outcomes."""

    def __init__(self, passing_score: int = 3):
        self.passing_score = passing_score

    def find(self, weak_areas: list[WeakArea], subject: str, topic: str) -> WeakArea | None:
        """Exact (subject, topic) lookup."""
        for area in weak_areas:
            if area.subject == subject and area.topic == topic:
                return area
        return None

    def record_outcome(
        self,
        weak_areas: list[WeakArea],
        subject: str,
        topic: str,
        score: int,
    ) -> list[WeakArea]:
        """
        Record a failed review against the matching weak area.

        Args:
            weak_areas: The learner's weak areas (mutated in place)
            subject: Subject of the reviewed item
            topic: Topic of the reviewed item
            score: Recall score; must be below the passing score

        Returns:
            The same list, updated

        Raises:
            ValidationError: if score is out of range or not a failure
        """
        validate_score(score)
        if score >= self.passing_score:
            raise ValidationError(
                f"weak areas only record failed reviews (score < {self.passing_score}), "
                f"got {score}"
            )

        area = self.find(weak_areas, subject, topic)

        if area is not None:
            old_accuracy = area.accuracy
            area.attempts += 1
            area.accuracy = (area.accuracy * (area.attempts - 1)) / area.attempts
            logger.debug(
                f"Weak area {subject}/{topic}: attempts={area.attempts}, "
                f"accuracy {old_accuracy:.3f} -> {area.accuracy:.3f}"
            )
        else:
            weak_areas.append(WeakArea(subject=subject, topic=topic, accuracy=0.0, attempts=1))
            logger.debug(f"New weak area {subject}/{topic}")

        return weak_areas

    def weakest(self, weak_areas: list[WeakArea], limit: int = 5) -> list[WeakArea]:
        """
        Weak areas most in need of remedial content.

        Lowest accuracy first, more attempts breaking ties.
        """
        return sorted(weak_areas, key=lambda a: (a.accuracy, -a.attempts))[:limit]
