"""
Core: entities and errors shared by every component.
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

__all__ = [
    "ExamPrepError",
    "NotFoundError",
    "ValidationError",
    "LearnerProgress",
    "MemorizedItem",
    "SeriesPoint",
    "SubjectAccuracy",
    "TestRecord",
    "WeakArea",
]
