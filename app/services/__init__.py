"""
app/services package marker.
"""

from app.services.metrics_service import (
    MetricsService,
    calculate_aggregated_metrics,
    get_metrics_service,
)
from app.services.row_aggregator import AggregationResult, RowAggregator

__all__ = [
    "AggregationResult",
    "MetricsService",
    "RowAggregator",
    "calculate_aggregated_metrics",
    "get_metrics_service",
]
