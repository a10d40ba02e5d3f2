"""
app/schemas/metrics.py

Output contract of the metrics pipeline.

The bundle is injected into narrative prompts as ground-truth figures and
returned as-is by the HTTP layer, so every model is frozen and rejects
unknown fields. All numeric fields are finite.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Rating = Literal["Excellent", "Good", "Average", "Critical"]
Confidence = Literal["High", "Medium", "Low"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class KeyMetrics(_FrozenModel):
    """Dataset totals and derived ratios."""

    spend: float = 0.0
    revenue: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    cpa: float = 0.0
    roas: float = 0.0
    cpm: float = 0.0
    purchases: float = 0.0
    cost_per_purchase: float = 0.0
    leads: float = 0.0
    cost_per_lead: float = 0.0
    frequency: float = 0.0
    link_clicks: float = 0.0
    landing_page_views: float = 0.0


class DailyTrend(_FrozenModel):
    """One ISO calendar day of summed delivery with its ratios."""

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0
    roas: float = 0.0
    cpa: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    cpm: float = 0.0


class WasteSummary(_FrozenModel):
    """Spend on entities that produced no conversions."""

    amount: float = 0.0
    count: int = 0
    percentage: float = 0.0
    entity: str = "entities"


class ScoreBreakdown(_FrozenModel):
    """Unrounded pillar sub-scores."""

    performance: float = Field(default=0.0, ge=0.0, le=100.0)
    delivery: float = Field(default=0.0, ge=0.0, le=100.0)
    creative: float = Field(default=0.0, ge=0.0, le=100.0)
    structure: float = Field(default=0.0, ge=0.0, le=100.0)


class ScoreExplanation(_FrozenModel):
    """Static description of the scoring model."""

    version: str
    steps: list[str]
    weights: dict[str, str]
    benchmarks: dict[str, float]
    normalization: str
    penalties: list[str]
    data_rules: list[str]
    confidence_rule: str


class ScoreResult(_FrozenModel):
    """Composite performance score."""

    value: int = Field(ge=0, le=100)
    rating: Rating
    confidence: Confidence
    drivers: list[str] = Field(default_factory=list)
    version: str
    explanation: ScoreExplanation
    breakdown: ScoreBreakdown


class MetricsBundle(_FrozenModel):
    """Totals, ascending daily trends, wasted spend and score for one dataset."""

    totals: KeyMetrics
    trends: list[DailyTrend] = Field(default_factory=list)
    waste: WasteSummary = Field(default_factory=WasteSummary)
    score: ScoreResult

    def prompt_context(self) -> dict[str, Any]:
        """
        Compact ground-truth payload for narrative generation prompts.
        """

        return {
            "key_metrics": self.totals.model_dump(),
            "score": {
                "value": self.score.value,
                "rating": self.score.rating,
                "confidence": self.score.confidence,
                "drivers": list(self.score.drivers),
            },
            "wasted_spend": self.waste.model_dump(),
            "days_with_data": len(self.trends),
        }
