"""Grouping engine: partition normalized records into time buckets.

Each surviving record belongs to exactly one Bucket. Per bucket, every
tracked metric gets a StatsDescriptor computed from the members' available
(non-sentinel) values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

import pandas as pd

from sleeptrends.aggregation.bucket_keys import get_bucket_key_fn
from sleeptrends.aggregation.conventions import (
    METRICS,
    Granularity,
    Metric,
    drop_unavailable,
    parse_metric,
)
from sleeptrends.aggregation.range_enumerator import as_date
from sleeptrends.aggregation.records import NormalizedRecord
from sleeptrends.aggregation.stats import EMPTY_STATS, StatsDescriptor, compute_stats

METRIC_COLUMNS = [m.value for m in METRICS]


@dataclass(frozen=True)
class Bucket:
    """Records and per-metric statistics for one time window.

    Attributes:
        key: Bucket key (see bucket_keys).
        min_datetime: Earliest member calendar date.
        max_datetime: Latest member calendar date.
        records: Member records in input order.
        stats: Metric name (Metric.value) -> StatsDescriptor.
    """
    key: str
    min_datetime: datetime
    max_datetime: datetime
    records: tuple[NormalizedRecord, ...]
    stats: dict[str, StatsDescriptor] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.records)

    def get_stats(self, metric: Union[str, Metric]) -> StatsDescriptor:
        """StatsDescriptor for one metric (the empty descriptor if untracked)."""
        return self.stats.get(parse_metric(metric).value, EMPTY_STATS)


def records_to_frame(records: Sequence[NormalizedRecord]) -> pd.DataFrame:
    """One row per record: calendar_date plus one column per tracked metric.

    Missing vitals become NaN.
    """
    rows = [
        {"calendar_date": r.calendar_date, **{m.value: r.metric_value(m) for m in METRICS}}
        for r in records
    ]
    return pd.DataFrame(rows, columns=["calendar_date", *METRIC_COLUMNS])


def filter_by_date_range(
    records: Iterable[NormalizedRecord],
    start: Optional[Union[date, datetime, str]] = None,
    end: Optional[Union[date, datetime, str]] = None,
) -> list[NormalizedRecord]:
    """Keep records whose calendar date is within [start, end] (inclusive).

    A None bound is open.
    """
    lo = as_date(start) if start is not None else None
    hi = as_date(end) if end is not None else None
    out = []
    for r in records:
        d = r.calendar_datetime.date()
        if lo is not None and d < lo:
            continue
        if hi is not None and d > hi:
            continue
        out.append(r)
    return out


def group_records(
    records: Iterable[NormalizedRecord],
    granularity: Union[str, Granularity],
) -> dict[str, Bucket]:
    """Partition records by bucket key and compute per-metric statistics.

    Args:
        records: Normalized records, already filtered to the requested range.
        granularity: Bucketing unit.

    Returns:
        Mapping bucket key -> Bucket, in order of first appearance (which is
        chronological for sorted input).
    """
    key_fn = get_bucket_key_fn(granularity)
    records = list(records)
    if not records:
        return {}

    df = records_to_frame(records)
    df["bucket_key"] = [key_fn(r.calendar_datetime) for r in records]

    buckets: dict[str, Bucket] = {}
    for key, sub in df.groupby("bucket_key", sort=False):
        members = tuple(records[i] for i in sub.index)
        stats = {col: compute_stats(drop_unavailable(sub[col])) for col in METRIC_COLUMNS}
        buckets[str(key)] = Bucket(
            key=str(key),
            min_datetime=min(r.calendar_datetime for r in members),
            max_datetime=max(r.calendar_datetime for r in members),
            records=members,
            stats=stats,
        )
    return buckets
