"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from examprep.core.models import LearnerProgress, MemorizedItem, TestRecord  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture
def now():
    """A fixed reference time."""
    return datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_item(now):
    """A never-reviewed item due now."""
    return MemorizedItem(
        id=1,
        question="What is the derivative of x^2?",
        answer="2x",
        subject="Math",
        topic="Calculus",
        next_review_at=now,
    )


@pytest.fixture
def sample_progress(now):
    """A learner last active exactly one day before `now`."""
    return LearnerProgress(xp=0, level=1, streak=3, last_active_at=now - timedelta(days=1))


@pytest.fixture
def sample_records(now):
    """Test history across two subjects, deliberately out of order."""
    return [
        TestRecord("Physics", "Kinematics", 10, 4, now - timedelta(days=1)),
        TestRecord("Math", "Algebra", 10, 7, now - timedelta(days=5)),
        TestRecord("Math", "Calculus", 5, 5, now - timedelta(days=3)),
    ]
