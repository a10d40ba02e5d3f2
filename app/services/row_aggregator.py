"""
app/services/row_aggregator.py

Single-pass aggregation of ad export rows.

Translates loosely-structured export rows into raw running sums and
per-day buckets that the derived-metrics layer can consume directly.

Blended conversions
-------------------
For each row, when purchases or leads is non-zero the row's conversion
count is ``purchases + leads``. Only when both are zero (or unresolved)
does the row fall back to the generic results/conversions column. Each
row decides independently, so a dataset that mixes granular and generic
tracking sums two conversion definitions.

No ratio arithmetic lives here. Division and zero-guards belong to
:mod:`kpi.advertising`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from app.domain.ad_rows import CellValue, Row, SemanticField
from app.mappers.column_resolver import ColumnResolution, ColumnResolver
from app.normalization.dates import parse_report_date
from app.normalization.numeric import parse_number

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawTotals:
    """
    Dataset-wide running sums before any ratio is derived.

    ``frequency_sum`` is the sum of per-row frequency values, not a mean.
    """

    row_count: int = 0
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    link_clicks: float = 0.0
    revenue: float = 0.0
    purchases: float = 0.0
    leads: float = 0.0
    conversions: float = 0.0
    landing_page_views: float = 0.0
    frequency_sum: float = 0.0


@dataclass(frozen=True)
class DailyBucket:
    """Summed delivery figures for one ISO calendar date."""

    date: str
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0


@dataclass(frozen=True)
class EntityTotals:
    """Spend and blended conversions for one ad, ad set or campaign."""

    spend: float = 0.0
    conversions: float = 0.0


@dataclass(frozen=True)
class AggregationResult:
    """
    Output of one aggregation pass.

    ``daily_buckets`` is keyed by ISO date and is unordered; callers sort
    it when building the trend series.
    """

    totals: RawTotals
    daily_buckets: Mapping[str, DailyBucket]
    entity_totals: Mapping[str, EntityTotals]
    resolution: ColumnResolution | None = None


# ---------------------------------------------------------------------------
# Internal accumulators
# ---------------------------------------------------------------------------


@dataclass
class _Accumulator:
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class RowAggregator:
    """
    Accumulates per-field totals and daily buckets in one scan of the rows.

    The schema is taken from the first row and resolved once; every later
    row is read through the resolved column names. Rows are never mutated.
    """

    def __init__(self, resolver: ColumnResolver | None = None) -> None:
        self._resolver = resolver or ColumnResolver()

    def aggregate(self, rows: Sequence[Row]) -> AggregationResult:
        """
        Aggregate *rows* into raw totals, daily buckets and entity totals.

        Returns an all-zero result for an empty sequence.
        """

        if not rows:
            return AggregationResult(totals=RawTotals(), daily_buckets={}, entity_totals={})

        resolution = self._resolver.resolve_schema(rows[0].keys())
        column = resolution.column_for

        spend_col = column(SemanticField.SPEND)
        impressions_col = column(SemanticField.IMPRESSIONS)
        clicks_col = column(SemanticField.CLICKS)
        link_clicks_col = column(SemanticField.LINK_CLICKS)
        frequency_col = column(SemanticField.FREQUENCY)
        revenue_col = column(SemanticField.REVENUE)
        purchases_col = column(SemanticField.PURCHASES)
        leads_col = column(SemanticField.LEADS)
        generic_col = column(SemanticField.GENERIC_CONVERSIONS)
        landing_col = column(SemanticField.LANDING_PAGE_VIEWS)
        date_col = column(SemanticField.DATE)
        entity_col = resolution.entity_column

        totals = _Accumulator()
        link_clicks = leads = purchases = landing_page_views = frequency_sum = 0.0
        daily: dict[str, _Accumulator] = {}
        entities: dict[str, list[float]] = {}

        for row in rows:
            spend = _read(row, spend_col)
            impressions = _read(row, impressions_col)
            clicks = _read(row, clicks_col)
            revenue = _read(row, revenue_col)
            row_purchases = _read(row, purchases_col)
            row_leads = _read(row, leads_col)

            if row_purchases != 0 or row_leads != 0:
                conversions = row_purchases + row_leads
            else:
                conversions = _read(row, generic_col)

            totals.spend += spend
            totals.impressions += impressions
            totals.clicks += clicks
            totals.revenue += revenue
            totals.conversions += conversions
            purchases += row_purchases
            leads += row_leads
            link_clicks += _read(row, link_clicks_col)
            landing_page_views += _read(row, landing_col)
            frequency_sum += _read(row, frequency_col)

            if entity_col is not None:
                entity = _entity_key(row.get(entity_col))
                entry = entities.setdefault(entity, [0.0, 0.0])
                entry[0] += spend
                entry[1] += conversions

            if date_col is None:
                continue
            day = parse_report_date(row.get(date_col))
            if day is None:
                continue
            bucket = daily.setdefault(day.isoformat(), _Accumulator())
            bucket.spend += spend
            bucket.impressions += impressions
            bucket.clicks += clicks
            bucket.conversions += conversions
            bucket.revenue += revenue

        raw_totals = RawTotals(
            row_count=len(rows),
            spend=totals.spend,
            impressions=totals.impressions,
            clicks=totals.clicks,
            link_clicks=link_clicks,
            revenue=totals.revenue,
            purchases=purchases,
            leads=leads,
            conversions=totals.conversions,
            landing_page_views=landing_page_views,
            frequency_sum=frequency_sum,
        )
        logger.debug(
            "Aggregated %d rows into %d daily buckets and %d entities",
            raw_totals.row_count,
            len(daily),
            len(entities),
        )
        return AggregationResult(
            totals=raw_totals,
            daily_buckets={
                key: DailyBucket(
                    date=key,
                    spend=bucket.spend,
                    impressions=bucket.impressions,
                    clicks=bucket.clicks,
                    conversions=bucket.conversions,
                    revenue=bucket.revenue,
                )
                for key, bucket in daily.items()
            },
            entity_totals={
                key: EntityTotals(spend=values[0], conversions=values[1])
                for key, values in entities.items()
            },
            resolution=resolution,
        )


def _read(row: Row, column: str | None) -> float:
    """Numeric value of *column* in *row*; ``0.0`` when the column is unresolved."""
    if column is None:
        return 0.0
    return parse_number(row.get(column))


def _entity_key(value: CellValue) -> str:
    if value is None:
        return ""
    return str(value)
