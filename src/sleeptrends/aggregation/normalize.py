"""Record normalization.

Validates raw sleep records and enriches the survivors with total sleep time,
per-stage percentages and a parsed calendar date.

Policy
------
- A record whose stage durations sum to <= 0 is dropped.
- A record whose ``unmeasurable_seconds`` is not exactly 0 (including a
  missing value) is dropped. Nights with partial measurement gaps are
  excluded wholesale, never adjusted.
- A malformed ``calendar_date`` drops that record and the batch continues
  (one warning per batch). Pass ``strict=True`` to fail the batch instead.
- Output is sorted ascending by calendar date; ties keep input order.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sleeptrends.aggregation.errors import (
    EmptyResultError,
    RecordParseError,
    RecordValidationError,
)
from sleeptrends.aggregation.records import (
    NormalizedRecord,
    RawRecord,
    RawRecordLike,
    as_raw_record,
)
from sleeptrends.utils.logging import get_logger

logger = get_logger(__name__)

CALENDAR_DATE_FORMAT = "%Y-%m-%d"


def parse_calendar_date(value: object, *, index: int | None = None) -> datetime:
    """Parse a ``yyyy-MM-dd`` string into a naive midnight datetime.

    Raises:
        RecordParseError: If value is not a string in that exact format.
    """
    if not isinstance(value, str):
        raise RecordParseError(value, index=index)
    try:
        return datetime.strptime(value, CALENDAR_DATE_FORMAT)
    except ValueError:
        raise RecordParseError(value, index=index) from None


def validate_raw_record(record: RawRecord) -> float:
    """Check normalization preconditions and return the total sleep seconds.

    Raises:
        RecordValidationError: If total sleep is not positive or the night
            has unmeasurable time.
    """
    total = record.total_sleep_seconds
    if not total > 0:
        raise RecordValidationError(
            f"total sleep must be positive, got {total}",
            calendar_date=record.calendar_date,
        )
    if record.unmeasurable_seconds != 0:
        raise RecordValidationError(
            f"unmeasurable seconds must be 0, got {record.unmeasurable_seconds}",
            calendar_date=record.calendar_date,
        )
    return total


def normalize_record(record: RawRecord, *, index: int | None = None) -> NormalizedRecord:
    """Normalize a single raw record.

    Raises:
        RecordValidationError: If the record fails validation.
        RecordParseError: If its calendar date is malformed.
    """
    total = validate_raw_record(record)
    calendar_datetime = parse_calendar_date(record.calendar_date, index=index)
    factor = 100 / total
    return NormalizedRecord(
        raw=record,
        calendar_datetime=calendar_datetime,
        total_sleep_seconds=total,
        deep_sleep_percent=record.deep_sleep_seconds * factor,
        light_sleep_percent=record.light_sleep_seconds * factor,
        rem_sleep_percent=record.rem_sleep_seconds * factor,
        awake_sleep_percent=record.awake_sleep_seconds * factor,
    )


def normalize_records(
    records: Iterable[RawRecordLike],
    *,
    strict: bool = False,
    require_records: bool = False,
) -> list[NormalizedRecord]:
    """Normalize a batch of raw records (any order).

    Args:
        records: RawRecord objects or decoded Garmin mappings.
        strict: If True, a malformed calendar date fails the whole batch.
        require_records: If True, raise EmptyResultError when nothing survives.

    Returns:
        Normalized records sorted ascending by calendar date (stable).

    Raises:
        RecordParseError: On a malformed date when strict=True.
        EmptyResultError: When require_records=True and no record survives.
    """
    normalized: list[NormalizedRecord] = []
    n_input = 0
    n_invalid = 0
    parse_errors: list[RecordParseError] = []

    for idx, item in enumerate(records):
        n_input += 1
        raw = as_raw_record(item)
        try:
            normalized.append(normalize_record(raw, index=idx))
        except RecordValidationError:
            n_invalid += 1
        except RecordParseError as e:
            if strict:
                raise
            parse_errors.append(e)

    if n_invalid:
        logger.debug("dropped %d record(s) with no sleep or unmeasurable time", n_invalid)
    if parse_errors:
        logger.warning(
            "Skipped %d record(s) with malformed calendarDate (first: %s)",
            len(parse_errors),
            parse_errors[0],
        )

    if require_records and not normalized:
        raise EmptyResultError(n_input)

    # list.sort is stable, so same-day records keep input order
    normalized.sort(key=lambda r: r.calendar_datetime)
    return normalized
