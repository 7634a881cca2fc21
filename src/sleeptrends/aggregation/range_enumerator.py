"""Enumerate the bucket keys spanned by an inclusive date range.

The result lets a chart axis stay contiguous: every bucket the range touches
is listed, whether or not any record falls into it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

from sleeptrends.aggregation.bucket_keys import get_bucket_key_fn
from sleeptrends.aggregation.conventions import Granularity
from sleeptrends.utils.logging import get_logger

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


def as_date(value: Union[date, datetime, str]) -> date:
    """Reduce a date, datetime or ``yyyy-MM-dd`` string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")


def enumerate_bucket_keys(
    start: Union[date, datetime, str],
    end: Union[date, datetime, str],
    granularity: Union[str, Granularity],
) -> list[str]:
    """Ordered, de-duplicated bucket keys for the days in [start, end].

    Walks the range one day at a time and keeps each key at its first
    occurrence. Membership is checked against a set, so long "day" ranges
    stay linear. A reversed range (start > end) yields an empty list.

    Args:
        start: First day (inclusive).
        end: Last day (inclusive).
        granularity: Bucketing unit.

    Returns:
        Keys in chronological order of first appearance.
    """
    key_fn = get_bucket_key_fn(granularity)
    cursor = as_date(start)
    last = as_date(end)
    if cursor > last:
        logger.debug("reversed range %s > %s, no buckets", cursor, last)
        return []

    keys: list[str] = []
    seen: set[str] = set()
    while cursor <= last:
        key = key_fn(cursor)
        if key not in seen:
            seen.add(key)
            keys.append(key)
        cursor += ONE_DAY
    return keys
