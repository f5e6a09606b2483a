from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from . import canon, utils, validate
from .types import CarbonIntensityReading, FuelMixReading, IntervalReading

logger = logging.getLogger(__name__)


def _floats(values: Iterable[Optional[float]]) -> np.ndarray:
    return np.asarray([np.nan if v is None else v for v in values], dtype=float)


def consumption_frame(readings: Iterable[IntervalReading]) -> pd.DataFrame:
    """
    Interval consumption as a frame.

    Index: tz-aware DatetimeIndex 't_start' (UTC)
    Columns: ['t_end', 'kwh']
    """
    readings = list(readings)
    idx = utils.utc_index([r.start for r in readings])
    return pd.DataFrame(
        {
            "t_end": pd.to_datetime([r.end for r in readings], utc=True),
            "kwh": np.asarray([r.consumption_kwh for r in readings], dtype=float),
        },
        index=idx,
        columns=canon.CONSUMPTION_COLS,
    )


def intensity_frame(readings: Iterable[CarbonIntensityReading]) -> pd.DataFrame:
    """
    Carbon intensity as a frame; missing forecasts/actuals are NaN.

    Index: tz-aware DatetimeIndex 't_start' (UTC)
    Columns: ['t_end', 'forecast_gco2', 'actual_gco2', 'category']
    """
    readings = list(readings)
    idx = utils.utc_index([r.start for r in readings])
    return pd.DataFrame(
        {
            "t_end": pd.to_datetime([r.end for r in readings], utc=True),
            "forecast_gco2": _floats(r.forecast_gco2 for r in readings),
            "actual_gco2": _floats(r.actual_gco2 for r in readings),
            "category": [r.index for r in readings],
        },
        index=idx,
        columns=canon.INTENSITY_COLS,
    )


def fuel_mix_frame(
    readings: Iterable[FuelMixReading], fuels: Sequence[str] = canon.FUELS
) -> pd.DataFrame:
    """
    One row per interval, one column per fuel (percent of generation).

    Known fuels come first in `fuels` order; any other fuel reported by the
    API follows. Fuels missing from an interval are 0.0.
    """
    readings = list(readings)
    idx = utils.utc_index([r.start for r in readings])
    df = pd.DataFrame([dict(r.mix) for r in readings], index=idx)
    extra = [c for c in df.columns if c not in fuels]
    cols = [*fuels, *extra]
    return df.reindex(columns=cols).fillna(0.0).astype(float)


def total_consumption_kwh(readings: Iterable[IntervalReading]) -> float:
    return float(consumption_frame(readings)["kwh"].sum())


def total_co2_kg(readings: Iterable[CarbonIntensityReading]) -> float:
    """
    Sum of settled intensity across intervals, grams -> kilograms.

    Intervals without a published actual contribute nothing.
    """
    actual = intensity_frame(readings)["actual_gco2"]
    missing = int(actual.isna().sum())
    if missing:
        logger.warning(
            "%d of %d intensity readings have no actual value; counted as 0 g",
            missing,
            len(actual),
        )
    return float(actual.fillna(0.0).sum()) / canon.GRAMS_PER_KG


def compute_fuel_mix_average(
    readings: Sequence[FuelMixReading],
    expected_count: Optional[int] = None,
) -> dict[str, float]:
    """
    Arithmetic mean share of each fuel across the intervals.

    - Raises ValidationError when `expected_count` is given and differs from
      the number of readings, or when there are no readings at all.
    - Every known GB fuel appears in the result, 0.0 if never reported.
    """
    if expected_count is not None:
        validate.assert_same_count(expected_count, len(readings), "Generation mix data")
    validate.assert_non_empty(len(readings), "generation mix")

    df = fuel_mix_frame(readings)
    avg = df.sum(axis=0) / len(df)
    return {str(fuel): float(pct) for fuel, pct in avg.items()}
