"""
app/normalization/dates.py

Report date parsing for daily trend bucketing.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

REPORT_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%d.%m.%Y.",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def parse_report_date(value: Any) -> date | None:
    """
    Parse a report cell into a calendar date.

    Timezone-aware timestamps are converted to UTC before the date part
    is taken. Returns ``None`` for blanks, numbers, booleans and any text
    that matches none of the supported layouts.
    """

    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        return _utc_date(datetime.fromisoformat(normalized))
    except ValueError:
        pass

    for fmt in REPORT_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()
