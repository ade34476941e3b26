"""
Error types raised by the examprep core.

All errors are raised synchronously to the caller. Nothing here is retried:
the components are pure computations with no transient failure mode.
"""

from __future__ import annotations


class ExamPrepError(Exception):
    """Base class for all examprep errors."""

    pass


class ValidationError(ExamPrepError, ValueError):
    """Raised for out-of-range scores and malformed records."""

    pass


class NotFoundError(ExamPrepError, LookupError):
    """Raised by storage adapters when an entity id does not exist."""

    pass
