from __future__ import annotations
from datetime import datetime

from . import exceptions


def assert_same_count(expected: int, actual: int, what: str) -> None:
    """Datasets covering the same window must have one reading per interval."""
    if expected != actual:
        raise exceptions.ValidationError(
            f"{what} has {actual} readings; expected {expected} "
            "to match building energy consumption data."
        )


def assert_non_empty(count: int, what: str) -> None:
    if count == 0:
        raise exceptions.ValidationError(f"No {what} readings to aggregate.")


def assert_window(start: datetime, end: datetime) -> None:
    if start.tzinfo is None or end.tzinfo is None:
        raise exceptions.ConfigError("Window bounds must be tz-aware.")
    if not start < end:
        raise exceptions.ConfigError(
            f"Window start {start.isoformat()} must be before end {end.isoformat()}."
        )
