"""
Progress: read-side aggregation and gamification.
"""

from examprep.progress.aggregator import ProgressAggregator, ProgressSummary
from examprep.progress.gamification import ActivityKind, GamificationLedger

__all__ = [
    "ProgressAggregator",
    "ProgressSummary",
    "ActivityKind",
    "GamificationLedger",
]
