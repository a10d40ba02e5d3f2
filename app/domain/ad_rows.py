"""
app/domain/ad_rows.py

Row-level types shared by the metrics pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Union

CellValue = Union[str, int, float, bool, None]
"""One cell of an ad export: text, number, boolean, or absent."""

Row = Mapping[str, CellValue]
"""One export row keyed by column name. Rows are never mutated."""


class SemanticField(str, Enum):
    """
    Business meaning a source column can carry, independent of its header.
    """

    SPEND = "spend"
    IMPRESSIONS = "impressions"
    CLICKS = "clicks"
    LINK_CLICKS = "link_clicks"
    FREQUENCY = "frequency"
    REVENUE = "revenue"
    PURCHASES = "purchases"
    LEADS = "leads"
    GENERIC_CONVERSIONS = "generic_conversions"
    LANDING_PAGE_VIEWS = "landing_page_views"
    DATE = "date"


class EntityLevel(str, Enum):
    """
    Granularity of the entity column used for wasted-spend grouping.
    """

    ADS = "ads"
    AD_SETS = "ad sets"
    CAMPAIGNS = "campaigns"
