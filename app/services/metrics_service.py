"""
app/services/metrics_service.py

Single entry point of the metrics pipeline.

Orchestrates:
    RowAggregator → AdvertisingKPIFormula → PerformanceScoreModel

and returns the combined totals / trends / waste / score bundle that the
narrative-generation and presentation layers consume. Contains no
aggregation, ratio or scoring math of its own.

Calling :meth:`MetricsService.calculate` twice on the same rows returns
identical bundles; nothing is retained between calls.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

from app.config import get_scoring_config
from app.domain.ad_rows import Row
from app.logging_utils import log_event
from app.mappers.column_resolver import ColumnResolver
from app.schemas.metrics import (
    DailyTrend,
    KeyMetrics,
    MetricsBundle,
    ScoreBreakdown,
    ScoreExplanation,
    ScoreResult,
    WasteSummary,
)
from app.services.row_aggregator import AggregationResult, RowAggregator
from kpi.advertising import AdvertisingKPIFormula, DailyTrendKPIFormula
from scoring.classification import classify_confidence, classify_rating
from scoring.config import ScoringModelConfig
from scoring.model import PerformanceScoreModel

logger = logging.getLogger(__name__)

_NO_DATA_DRIVER = "No data available"


class MetricsService:
    """
    Stateless façade turning export rows into a :class:`MetricsBundle`.

    Usage::

        service = MetricsService()
        bundle = service.calculate([{"Amount spent (EUR)": "1.234,56", "Results": 3}])
        print(bundle.totals.spend)  # 1234.56
    """

    def __init__(
        self,
        *,
        resolver: ColumnResolver | None = None,
        scoring_config: ScoringModelConfig | None = None,
    ) -> None:
        self._aggregator = RowAggregator(resolver or ColumnResolver())
        self._totals_formula = AdvertisingKPIFormula()
        self._daily_formula = DailyTrendKPIFormula()
        self._model = PerformanceScoreModel(scoring_config)
        self._explanation = ScoreExplanation(**self._model.config.explanation())

    @property
    def explanation(self) -> ScoreExplanation:
        """Static scoring model description shared by every result."""
        return self._explanation

    def calculate(self, rows: Sequence[Row]) -> MetricsBundle:
        """
        Aggregate *rows* and score the result.

        An empty sequence short-circuits to an all-zero bundle with a
        Critical / Low score without running any formula.
        """

        if not rows:
            log_event(logger, logging.INFO, "metrics_aggregated", rows=0, score=0)
            return self._empty_bundle()

        aggregation = self._aggregator.aggregate(rows)
        totals = self._build_totals(aggregation)
        trends = self._build_trends(aggregation)
        waste = self._build_waste(aggregation, totals.spend)
        score = self._build_score(totals)

        resolution = aggregation.resolution
        log_event(
            logger,
            logging.INFO,
            "metrics_aggregated",
            rows=aggregation.totals.row_count,
            trend_days=len(trends),
            unresolved_fields=[item.value for item in resolution.unresolved] if resolution else [],
            score=score.value,
            rating=score.rating,
            confidence=score.confidence,
        )
        return MetricsBundle(totals=totals, trends=trends, waste=waste, score=score)

    # ------------------------------------------------------------------
    # Bundle assembly
    # ------------------------------------------------------------------

    def _build_totals(self, aggregation: AggregationResult) -> KeyMetrics:
        raw = aggregation.totals
        ratios = self._totals_formula.calculate(
            {
                "spend": raw.spend,
                "impressions": raw.impressions,
                "clicks": raw.clicks,
                "conversions": raw.conversions,
                "revenue": raw.revenue,
                "purchases": raw.purchases,
                "leads": raw.leads,
                "frequency_sum": raw.frequency_sum,
                "row_count": raw.row_count,
            }
        )
        return KeyMetrics(
            spend=raw.spend,
            revenue=raw.revenue,
            impressions=raw.impressions,
            clicks=raw.clicks,
            conversions=raw.conversions,
            purchases=raw.purchases,
            leads=raw.leads,
            link_clicks=raw.link_clicks,
            landing_page_views=raw.landing_page_views,
            **ratios,
        )

    def _build_trends(self, aggregation: AggregationResult) -> list[DailyTrend]:
        trends: list[DailyTrend] = []
        for day in sorted(aggregation.daily_buckets):
            bucket = aggregation.daily_buckets[day]
            sums = {
                "spend": bucket.spend,
                "impressions": bucket.impressions,
                "clicks": bucket.clicks,
                "conversions": bucket.conversions,
                "revenue": bucket.revenue,
            }
            trends.append(DailyTrend(date=day, **sums, **self._daily_formula.calculate(sums)))
        return trends

    @staticmethod
    def _build_waste(aggregation: AggregationResult, total_spend: float) -> WasteSummary:
        resolution = aggregation.resolution
        if resolution is None or resolution.entity_level is None:
            return WasteSummary()

        label = resolution.entity_level.value
        if not resolution.has_conversion_signal():
            return WasteSummary(entity=label)

        amount = 0.0
        count = 0
        for entity in aggregation.entity_totals.values():
            if entity.spend > 0 and entity.conversions == 0:
                amount += entity.spend
                count += 1

        percentage = amount / total_spend * 100.0 if total_spend > 0 else 0.0
        return WasteSummary(amount=amount, count=count, percentage=percentage, entity=label)

    def _build_score(self, totals: KeyMetrics) -> ScoreResult:
        inputs = {
            "spend": totals.spend,
            "conversions": totals.conversions,
            "impressions": totals.impressions,
            "ctr": totals.ctr,
            "cpa": totals.cpa,
            "cpm": totals.cpm,
            "roas": totals.roas,
            "frequency": totals.frequency,
        }
        outcome = self._model.compute(inputs)
        pillars = outcome.pillars
        return ScoreResult(
            value=outcome.value,
            rating=classify_rating(outcome.value),
            confidence=classify_confidence(totals.conversions),
            drivers=self._model.drivers(inputs, outcome),
            version=self._explanation.version,
            explanation=self._explanation,
            breakdown=ScoreBreakdown(
                performance=pillars.performance,
                delivery=pillars.delivery,
                creative=pillars.creative,
                structure=pillars.structure,
            ),
        )

    def _empty_bundle(self) -> MetricsBundle:
        return MetricsBundle(
            totals=KeyMetrics(),
            trends=[],
            waste=WasteSummary(),
            score=ScoreResult(
                value=0,
                rating="Critical",
                confidence="Low",
                drivers=[_NO_DATA_DRIVER],
                version=self._explanation.version,
                explanation=self._explanation,
                breakdown=ScoreBreakdown(),
            ),
        )


@lru_cache(maxsize=1)
def get_metrics_service() -> MetricsService:
    """
    Return the process-wide metrics service built from environment config.
    """

    return MetricsService(scoring_config=get_scoring_config())


def calculate_aggregated_metrics(rows: Sequence[Row]) -> MetricsBundle:
    """
    Compute the totals / trends / waste / score bundle for *rows*.
    """

    return get_metrics_service().calculate(rows)
