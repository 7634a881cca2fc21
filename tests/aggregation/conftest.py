# tests/aggregation/conftest.py
"""Pytest configuration and shared fixtures for aggregation tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest


def pytest_configure() -> None:
    # Ensure `src` is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def _sleep_entry(
    calendar_date: str,
    deep: float = 100,
    light: float = 200,
    rem: float = 50,
    awake: float = 10,
    unmeasurable: Any = 0,
    vitals: dict | None = None,
) -> dict[str, Any]:
    """Decoded Garmin *_sleepData.json entry."""
    entry: dict[str, Any] = {
        "calendarDate": calendar_date,
        "deepSleepSeconds": deep,
        "lightSleepSeconds": light,
        "remSleepSeconds": rem,
        "awakeSleepSeconds": awake,
        "unmeasurableSeconds": unmeasurable,
    }
    if vitals is not None:
        entry["spo2SleepSummary"] = vitals
    return entry


@pytest.fixture
def sleep_entry() -> Callable[..., dict[str, Any]]:
    return _sleep_entry


@pytest.fixture
def four_nights() -> list[dict[str, Any]]:
    """Four consecutive identical nights (total 360 s)."""
    return [_sleep_entry(f"2024-03-0{d}") for d in range(1, 5)]
