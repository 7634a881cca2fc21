"""Bucket-key functions: map a calendar date to a granularity-specific key.

Week and fortnight keys use the ISO week-year, so a date such as
2024-12-31 (ISO week 1 of 2025) lands in "2025-w-1" rather than a
"2024-w-1" bucket at the wrong end of the year.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Callable, Union

from sleeptrends.aggregation.conventions import Granularity, parse_granularity

# datetime is a subclass of date, so both are accepted.
BucketKeyFn = Callable[[date], str]


def day_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def week_key(d: date) -> str:
    iso_year, iso_week, _ = d.isocalendar()
    return f"{iso_year}-w-{iso_week}"


def fortnight_key(d: date) -> str:
    iso_year, iso_week, _ = d.isocalendar()
    return f"{iso_year}-2w-{math.ceil(iso_week / 2)}"


def month_key(d: date) -> str:
    return f"{d.year}-m-{d.month}"


def three_month_key(d: date) -> str:
    return f"{d.year}-3m-{math.ceil(d.month / 3)}"


def six_month_key(d: date) -> str:
    return f"{d.year}-6m-{math.ceil(d.month / 6)}"


def year_key(d: date) -> str:
    return f"{d.year}"


def all_key(d: date) -> str:
    return "all"


BUCKET_KEY_FNS: dict[Granularity, BucketKeyFn] = {
    Granularity.DAY: day_key,
    Granularity.WEEK: week_key,
    Granularity.FORTNIGHT: fortnight_key,
    Granularity.MONTH: month_key,
    Granularity.THREE_MONTHS: three_month_key,
    Granularity.SIX_MONTHS: six_month_key,
    Granularity.YEAR: year_key,
    Granularity.ALL: all_key,
}


def get_bucket_key_fn(granularity: Union[str, Granularity]) -> BucketKeyFn:
    """Return the bucket-key function for a granularity name.

    Raises:
        ValueError: If granularity is not a recognized name.
    """
    return BUCKET_KEY_FNS[parse_granularity(granularity)]
