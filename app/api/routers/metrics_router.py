"""
app/api/routers/metrics_router.py

Metrics aggregation endpoints.

The ingestion layer posts already-cleaned export rows (summary/total rows
removed); the response is the deterministic metrics bundle used as ground
truth by narrative generation and dashboards.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.metrics import MetricsBundle, ScoreExplanation
from app.services.metrics_service import MetricsService, get_metrics_service

router = APIRouter(prefix="/metrics", tags=["metrics"])


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AggregateMetricsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rows: list[dict[str, Union[str, int, float, bool, None]]] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/aggregate",
    response_model=MetricsBundle,
    status_code=status.HTTP_200_OK,
)
def aggregate_metrics(
    body: AggregateMetricsRequest,
    service: MetricsService = Depends(get_metrics_service),
) -> MetricsBundle:
    """
    Aggregate rows into totals, daily trends, wasted spend and score.

    Malformed cell values never fail the request; they count as zero.
    An empty ``rows`` list returns the all-zero bundle.
    """
    return service.calculate(body.rows)


@router.get(
    "/scoring-model",
    response_model=ScoreExplanation,
    status_code=status.HTTP_200_OK,
)
def scoring_model(
    service: MetricsService = Depends(get_metrics_service),
) -> ScoreExplanation:
    """
    Describe the weighting model behind every score.
    """
    return service.explanation
