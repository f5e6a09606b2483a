from __future__ import annotations
from datetime import datetime, timezone

import pandas as pd

from . import canon


def to_utc(value: object) -> datetime:
    """
    Coerce an ISO-8601 string, datetime or Timestamp to a tz-aware UTC datetime.

    Naive inputs are taken to be UTC; both APIs report times in Z.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("timestamp is empty")
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not a timestamp: {value!r}") from exc
    if ts is pd.NaT:
        raise ValueError(f"not a timestamp: {value!r}")
    if ts.tz is None:
        ts = ts.tz_localize(timezone.utc)
    else:
        ts = ts.tz_convert(timezone.utc)
    return ts.to_pydatetime()


def carbon_api_time(value: datetime | str) -> str:
    """Format a timestamp as a carbonintensity.org.uk path segment."""
    return to_utc(value).strftime(canon.CARBON_API_TIME_FORMAT)


def energy_api_time(value: datetime | str) -> str:
    """Format a timestamp for Openvolt's start_date / end_date parameters."""
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def utc_index(stamps: list[datetime]) -> pd.DatetimeIndex:
    return pd.DatetimeIndex(pd.to_datetime(stamps, utc=True), name=canon.INDEX_NAME)
