"""
app/schemas package marker.
"""

from app.schemas.metrics import (
    DailyTrend,
    KeyMetrics,
    MetricsBundle,
    ScoreBreakdown,
    ScoreExplanation,
    ScoreResult,
    WasteSummary,
)

__all__ = [
    "DailyTrend",
    "KeyMetrics",
    "MetricsBundle",
    "ScoreBreakdown",
    "ScoreExplanation",
    "ScoreResult",
    "WasteSummary",
]
