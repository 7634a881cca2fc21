"""Exception types raised by the aggregation engine.

Only malformed input at the normalizer boundary and "no usable records" are
surfaced as exceptions. Undefined statistics and reversed date ranges are
represented as data (absent markers / empty sequences) instead.
"""

from __future__ import annotations

from typing import Any, Optional


class SleepTrendsError(Exception):
    """Base class for sleeptrends errors."""


class RecordValidationError(SleepTrendsError):
    """A raw record fails the normalization preconditions.

    Raised by validate_raw_record(). The normalizer catches it and drops the
    record; it never reaches callers of normalize_records().
    """

    def __init__(self, message: str, *, calendar_date: Optional[str] = None) -> None:
        super().__init__(message)
        self.calendar_date = calendar_date


class RecordParseError(SleepTrendsError, ValueError):
    """A raw record carries a calendarDate that is not a valid yyyy-MM-dd date."""

    def __init__(self, value: Any, *, index: Optional[int] = None) -> None:
        where = f"record {index}: " if index is not None else ""
        super().__init__(f"{where}invalid calendarDate {value!r}, expected yyyy-MM-dd")
        self.value = value
        self.index = index


class EmptyResultError(SleepTrendsError):
    """Normalization left zero usable records (the "no data" state)."""

    def __init__(self, n_input: int) -> None:
        super().__init__(f"No sleep data found ({n_input} input record(s), 0 usable)")
        self.n_input = n_input
