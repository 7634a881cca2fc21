"""Sleep record data model.

This module defines the record types flowing through the engine:
- Vitals: optional per-night SpO2 / heart-rate summary
- RawRecord: one decoded Garmin sleep-data entry
- NormalizedRecord: a RawRecord that passed validation, with derived fields
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from sleeptrends.aggregation.conventions import Metric


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Vitals:
    """Per-night vitals summary (Garmin ``spo2SleepSummary``).

    Negative values are sentinels meaning "not recorded"; they are kept here
    as-is and filtered where samples are built.
    """
    average_hr: Optional[float] = None
    average_spo2: Optional[float] = None
    lowest_spo2: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Vitals":
        return cls(
            average_hr=_optional_float(data.get("averageHR")),
            average_spo2=_optional_float(data.get("averageSPO2")),
            lowest_spo2=_optional_float(data.get("lowestSPO2")),
        )


@dataclass(frozen=True)
class RawRecord:
    """One night of sleep as decoded from a ``*_sleepData.json`` entry.

    Stage durations are in seconds. ``unmeasurable_seconds`` is None when the
    source omitted it.
    """
    calendar_date: str
    deep_sleep_seconds: float = 0.0
    light_sleep_seconds: float = 0.0
    rem_sleep_seconds: float = 0.0
    awake_sleep_seconds: float = 0.0
    unmeasurable_seconds: Optional[float] = None
    vitals: Optional[Vitals] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawRecord":
        """Build a RawRecord from a decoded Garmin mapping.

        Missing or null stage durations read as 0. The vitals block is read
        from ``spo2SleepSummary`` when it is a mapping.
        """
        vitals_data = data.get("spo2SleepSummary")
        return cls(
            calendar_date=data.get("calendarDate"),
            deep_sleep_seconds=_optional_float(data.get("deepSleepSeconds")) or 0.0,
            light_sleep_seconds=_optional_float(data.get("lightSleepSeconds")) or 0.0,
            rem_sleep_seconds=_optional_float(data.get("remSleepSeconds")) or 0.0,
            awake_sleep_seconds=_optional_float(data.get("awakeSleepSeconds")) or 0.0,
            unmeasurable_seconds=_optional_float(data.get("unmeasurableSeconds")),
            vitals=Vitals.from_dict(vitals_data) if isinstance(vitals_data, Mapping) else None,
        )

    @property
    def total_sleep_seconds(self) -> float:
        return (
            self.deep_sleep_seconds
            + self.light_sleep_seconds
            + self.rem_sleep_seconds
            + self.awake_sleep_seconds
        )


RawRecordLike = Union[RawRecord, Mapping[str, Any]]


def as_raw_record(item: RawRecordLike) -> RawRecord:
    """Return item as a RawRecord, converting decoded mappings."""
    if isinstance(item, RawRecord):
        return item
    if isinstance(item, Mapping):
        return RawRecord.from_dict(item)
    raise TypeError(f"Expected RawRecord or mapping, got {type(item).__name__}")


@dataclass(frozen=True)
class NormalizedRecord:
    """A validated sleep record with derived totals and stage percentages.

    The four ``*_percent`` fields sum to 100 (within float rounding).
    """
    raw: RawRecord
    calendar_datetime: datetime
    total_sleep_seconds: float
    deep_sleep_percent: float
    light_sleep_percent: float
    rem_sleep_percent: float
    awake_sleep_percent: float

    @property
    def calendar_date(self) -> str:
        return self.raw.calendar_date

    @property
    def average_hr(self) -> Optional[float]:
        return self.raw.vitals.average_hr if self.raw.vitals else None

    @property
    def average_spo2(self) -> Optional[float]:
        return self.raw.vitals.average_spo2 if self.raw.vitals else None

    @property
    def lowest_spo2(self) -> Optional[float]:
        return self.raw.vitals.lowest_spo2 if self.raw.vitals else None

    def metric_value(self, metric: Union[str, Metric]) -> Optional[float]:
        """Value of a tracked metric on this record (None when not present)."""
        return getattr(self, Metric(metric).value)
