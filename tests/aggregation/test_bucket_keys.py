"""Unit tests for bucket-key functions."""

from datetime import date, datetime

import pytest

from sleeptrends.aggregation.bucket_keys import get_bucket_key_fn
from sleeptrends.aggregation.conventions import Granularity


@pytest.mark.parametrize(
    "granularity, d, expected",
    [
        ("day", date(2024, 3, 5), "2024-03-05"),
        ("week", date(2024, 3, 5), "2024-w-10"),
        ("fortnight", date(2024, 3, 5), "2024-2w-5"),
        ("month", date(2024, 3, 5), "2024-m-3"),
        ("3months", date(2024, 3, 5), "2024-3m-1"),
        ("3months", date(2024, 4, 1), "2024-3m-2"),
        ("6months", date(2024, 6, 30), "2024-6m-1"),
        ("6months", date(2024, 7, 1), "2024-6m-2"),
        ("year", date(2024, 12, 31), "2024"),
        ("all", date(1999, 1, 1), "all"),
    ],
)
def test_key_shapes(granularity, d, expected):
    assert get_bucket_key_fn(granularity)(d) == expected


def test_week_uses_iso_week_year_at_year_end():
    """2024-12-31 is in ISO week 1 of 2025."""
    key = get_bucket_key_fn("week")
    assert key(date(2024, 12, 31)) == "2025-w-1"
    assert key(date(2025, 1, 1)) == "2025-w-1"
    assert get_bucket_key_fn("fortnight")(date(2024, 12, 31)) == "2025-2w-1"


def test_week_uses_iso_week_year_at_year_start():
    """2021-01-01 is in ISO week 53 of 2020."""
    assert get_bucket_key_fn("week")(date(2021, 1, 1)) == "2020-w-53"
    assert get_bucket_key_fn("fortnight")(date(2021, 1, 1)) == "2020-2w-27"


def test_day_key_matches_calendar_date_string():
    assert get_bucket_key_fn(Granularity.DAY)(datetime(2024, 1, 9)) == "2024-01-09"


def test_accepts_enum_and_datetime():
    fn = get_bucket_key_fn(Granularity.MONTH)
    assert fn(datetime(2023, 11, 2, 0, 0)) == "2023-m-11"


def test_unknown_granularity_raises():
    with pytest.raises(ValueError) as exc_info:
        get_bucket_key_fn("decade")
    assert "decade" in str(exc_info.value)
    assert "fortnight" in str(exc_info.value)
