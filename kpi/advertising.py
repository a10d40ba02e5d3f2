"""
kpi/advertising.py

Paid-media KPI formula implementations.

Expected inputs
---------------
spend : float
    Total amount spent in the period.
impressions : float
    Total ad impressions.
clicks : float
    Total clicks (all).
conversions : float
    Blended conversion count (purchases + leads, or generic results).
revenue : float
    Total attributed conversion value.
purchases : float
    Total purchase events.
leads : float
    Total lead events.
frequency_sum : float
    Sum of per-row frequency values.
row_count : int
    Number of rows that contributed to ``frequency_sum``.

Formulas
--------
CTR               = clicks / impressions * 100
CPC               = spend / clicks
CPA               = spend / conversions
CPM               = spend / impressions * 1000
ROAS              = revenue / spend
Cost per Purchase = spend / purchases
Cost per Lead     = spend / leads
Frequency (mean)  = frequency_sum / row_count

Division-by-zero cases return 0.0, except mean frequency which returns
1.0 (no audience fatigue assumed when there is no data).
"""

from __future__ import annotations

from typing import Any

from kpi.base import BaseKPIFormula

_ZERO = 0.0  # value stored when a ratio denominator is zero
_NO_FATIGUE_FREQUENCY = 1.0


class AdvertisingKPIFormula(BaseKPIFormula):
    """
    Deterministic dataset-level ad KPI calculations.

    All arithmetic is self-contained. No I/O, no logging, no side effects.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        """
        Compute CTR, CPC, CPA, CPM, ROAS, cost per purchase, cost per lead
        and mean frequency from *inputs*.

        Returns
        -------
        dict
            Keys: ``ctr``, ``cpc``, ``cpa``, ``cpm``, ``roas``,
            ``cost_per_purchase``, ``cost_per_lead``, ``frequency``.
        """
        spend = float(inputs.get("spend", 0.0))
        impressions = float(inputs.get("impressions", 0.0))
        clicks = float(inputs.get("clicks", 0.0))
        conversions = float(inputs.get("conversions", 0.0))
        revenue = float(inputs.get("revenue", 0.0))
        purchases = float(inputs.get("purchases", 0.0))
        leads = float(inputs.get("leads", 0.0))
        frequency_sum = float(inputs.get("frequency_sum", 0.0))
        row_count = int(inputs.get("row_count", 0))

        return {
            "ctr": ctr(clicks, impressions),
            "cpc": cost_per(spend, clicks),
            "cpa": cost_per(spend, conversions),
            "cpm": cpm(spend, impressions),
            "roas": roas(revenue, spend),
            "cost_per_purchase": cost_per(spend, purchases),
            "cost_per_lead": cost_per(spend, leads),
            "frequency": mean_frequency(frequency_sum, row_count),
        }


class DailyTrendKPIFormula(BaseKPIFormula):
    """
    Ratio metrics for a single daily bucket.

    Uses the same zero-guards as :class:`AdvertisingKPIFormula`.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        spend = float(inputs.get("spend", 0.0))
        impressions = float(inputs.get("impressions", 0.0))
        clicks = float(inputs.get("clicks", 0.0))
        conversions = float(inputs.get("conversions", 0.0))
        revenue = float(inputs.get("revenue", 0.0))

        return {
            "roas": roas(revenue, spend),
            "cpa": cost_per(spend, conversions),
            "ctr": ctr(clicks, impressions),
            "cpc": cost_per(spend, clicks),
            "cpm": cpm(spend, impressions),
        }


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def ctr(clicks: float, impressions: float) -> float:
    """
    CTR = clicks / impressions * 100.

    Returns 0.0 when impressions is not positive.
    """
    if impressions <= 0:
        return _ZERO
    return clicks / impressions * 100.0


def cpm(spend: float, impressions: float) -> float:
    """
    CPM = spend / impressions * 1000.

    Returns 0.0 when impressions is not positive.
    """
    if impressions <= 0:
        return _ZERO
    return spend / impressions * 1000.0


def roas(revenue: float, spend: float) -> float:
    """
    ROAS = revenue / spend.

    Returns 0.0 when spend is not positive.
    """
    if spend <= 0:
        return _ZERO
    return revenue / spend


def cost_per(spend: float, units: float) -> float:
    """
    Cost per unit = spend / units (CPC, CPA, cost per purchase / lead).

    Returns 0.0 when units is not positive.
    """
    if units <= 0:
        return _ZERO
    return spend / units


def mean_frequency(frequency_sum: float, row_count: int) -> float:
    """
    Mean frequency = frequency_sum / row_count.

    Returns 1.0 when there are no rows.
    """
    if row_count <= 0:
        return _NO_FATIGUE_FREQUENCY
    return frequency_sum / row_count
