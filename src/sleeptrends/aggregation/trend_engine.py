"""Trend engine: normalized records in, bucketed statistics and series out.

This module provides the SleepTrendEngine class, which wires normalization,
grouping, range enumeration and series assembly together for one batch of
decoded sleep records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from sleeptrends.aggregation.conventions import Granularity
from sleeptrends.aggregation.errors import EmptyResultError
from sleeptrends.aggregation.grouping import Bucket, filter_by_date_range, group_records
from sleeptrends.aggregation.normalize import normalize_records
from sleeptrends.aggregation.range_enumerator import as_date, enumerate_bucket_keys
from sleeptrends.aggregation.records import NormalizedRecord, RawRecordLike
from sleeptrends.aggregation.series import Selection, Series, assemble_series
from sleeptrends.aggregation.view_state import TrendView
from sleeptrends.utils.logging import get_logger

logger = get_logger(__name__)

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class TrendResult:
    """Everything a renderer needs for one view.

    Attributes:
        view: The view that was computed (with start/end resolved).
        keys: Every bucket key in the range, in axis order.
        buckets: Buckets that have data, keyed by bucket key.
        series: One series per selected (metric, statistic) pair.
    """
    view: TrendView
    keys: tuple[str, ...]
    buckets: dict[str, Bucket]
    series: tuple[Series, ...]

    @property
    def empty_keys(self) -> list[str]:
        """Keys in the range that have no bucket."""
        return [k for k in self.keys if k not in self.buckets]


class SleepTrendEngine:
    """Aggregates one batch of sleep records into time-bucketed statistics.

    Records are normalized once, at construction. All other methods are pure
    functions of those records and their arguments.

    Attributes:
        records: Normalized records, sorted by calendar date.
        n_input: Number of raw records received.
    """

    def __init__(self, raw_records: Iterable[RawRecordLike], *, strict: bool = False) -> None:
        """Normalize raw records.

        Args:
            raw_records: RawRecord objects or decoded Garmin mappings.
            strict: If True, a malformed calendar date fails construction.

        Raises:
            EmptyResultError: If no record survives normalization.
            RecordParseError: On a malformed date when strict=True.
        """
        raw_records = list(raw_records)
        self.n_input = len(raw_records)
        self.records: list[NormalizedRecord] = normalize_records(raw_records, strict=strict)
        if not self.records:
            raise EmptyResultError(self.n_input)
        logger.info(
            "normalized %d of %d sleep record(s) (%s to %s)",
            len(self.records),
            self.n_input,
            self.records[0].calendar_date,
            self.records[-1].calendar_date,
        )

    def date_bounds(self) -> tuple[date, date]:
        """First and last calendar date present in the data."""
        return (
            self.records[0].calendar_datetime.date(),
            self.records[-1].calendar_datetime.date(),
        )

    def _resolve_range(
        self, start: Optional[DateLike], end: Optional[DateLike]
    ) -> tuple[date, date]:
        first, last = self.date_bounds()
        return (
            as_date(start) if start is not None else first,
            as_date(end) if end is not None else last,
        )

    def filter_range(
        self, start: Optional[DateLike] = None, end: Optional[DateLike] = None
    ) -> list[NormalizedRecord]:
        """Records within [start, end]; None bounds default to the data bounds."""
        lo, hi = self._resolve_range(start, end)
        return filter_by_date_range(self.records, lo, hi)

    def group(
        self,
        granularity: Union[str, Granularity],
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> dict[str, Bucket]:
        """Buckets for the records in [start, end]."""
        return group_records(self.filter_range(start, end), granularity)

    def bucket_keys(
        self,
        granularity: Union[str, Granularity],
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> list[str]:
        """Every bucket key spanned by [start, end], including empty ones."""
        lo, hi = self._resolve_range(start, end)
        return enumerate_bucket_keys(lo, hi, granularity)

    def series(
        self,
        selection: Sequence[Selection],
        granularity: Union[str, Granularity],
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> list[Series]:
        """Series for the selection, aligned to the full key range."""
        return assemble_series(
            selection,
            self.group(granularity, start, end),
            self.bucket_keys(granularity, start, end),
        )

    def build(self, view: Optional[TrendView] = None) -> TrendResult:
        """Compute keys, buckets and series for a TrendView.

        Args:
            view: What to chart. Defaults to TrendView() (monthly stage means
                over the whole data range).

        Returns:
            TrendResult with the view's start/end resolved to concrete dates.
        """
        view = view or TrendView()
        lo, hi = self._resolve_range(view.start, view.end)
        resolved = TrendView(
            granularity=view.granularity,
            start=lo,
            end=hi,
            selection=list(view.selection),
        )
        keys = enumerate_bucket_keys(lo, hi, resolved.granularity)
        buckets = group_records(filter_by_date_range(self.records, lo, hi), resolved.granularity)
        series = assemble_series(resolved.selection, buckets, keys)
        logger.debug(
            "built %s view %s..%s: %d key(s), %d with data",
            resolved.granularity.value, lo, hi, len(keys), len(buckets),
        )
        return TrendResult(view=resolved, keys=tuple(keys), buckets=buckets, series=tuple(series))
