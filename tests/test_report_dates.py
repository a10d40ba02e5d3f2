from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.normalization.dates import parse_report_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-05", date(2024, 1, 5)),
        (" 2024-01-05 ", date(2024, 1, 5)),
        ("2024/01/05", date(2024, 1, 5)),
        ("01/31/2024", date(2024, 1, 31)),
        ("31.01.2024", date(2024, 1, 31)),
        ("Jan 5, 2024", date(2024, 1, 5)),
        ("5 January 2024", date(2024, 1, 5)),
        ("2024-01-05T10:00:00Z", date(2024, 1, 5)),
    ],
)
def test_supported_layouts(raw: str, expected: date) -> None:
    assert parse_report_date(raw) == expected


def test_aware_timestamp_is_converted_to_utc_date() -> None:
    assert parse_report_date("2024-01-05T23:30:00-02:00") == date(2024, 1, 6)


def test_date_and_datetime_objects() -> None:
    assert parse_report_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_report_date(datetime(2024, 3, 1, 1, 0, tzinfo=timezone.utc)) == date(2024, 3, 1)


@pytest.mark.parametrize("raw", [None, "", "not a date", "2024-13-45", 20240105, True])
def test_unparseable_values_return_none(raw: object) -> None:
    assert parse_report_date(raw) is None
