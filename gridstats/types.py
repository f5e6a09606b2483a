from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Annotated, Dict, Generic, List, Optional, TypedDict, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from . import canon, utils
from .exceptions import GridStatsError

UtcDatetime = Annotated[datetime, BeforeValidator(utils.to_utc)]

T = TypeVar("T")


###
### READINGS
###


class IntervalReading(BaseModel):
    """Metered consumption for one interval [start, end)."""

    model_config = ConfigDict(frozen=True)

    start: UtcDatetime
    end: UtcDatetime
    consumption_kwh: float


class IntervalData(BaseModel):
    """Readings plus the window the energy API actually answered for."""

    model_config = ConfigDict(frozen=True)

    start_interval: UtcDatetime
    end_interval: UtcDatetime
    granularity: str = canon.DEFAULT_GRANULARITY
    readings: List[IntervalReading]


class CarbonIntensityReading(BaseModel):
    """Grid carbon intensity (gCO2/kWh) for one interval.

    Attributes:
        forecast_gco2: Forecast intensity
        actual_gco2: Settled intensity, None until the grid operator publishes it
        index: Category label, e.g. 'low', 'moderate', 'high'
    """

    model_config = ConfigDict(frozen=True)

    start: UtcDatetime
    end: UtcDatetime
    forecast_gco2: Optional[float] = None
    actual_gco2: Optional[float] = None
    index: Optional[str] = None


class FuelMixReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: UtcDatetime
    end: UtcDatetime
    mix: Dict[str, float]  # fuel -> percentage of generation (0-100)


class AggregateStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_consumption_kwh: float
    total_co2_kg: float
    average_fuel_mix: Dict[str, float]
    start: Optional[UtcDatetime] = None
    end: Optional[UtcDatetime] = None
    intervals: int = 0


###
### WIRE FORMATS
###


class _OpenvoltDatum(BaseModel):
    consumption: float  # sent as a decimal string, e.g. "1.25"
    consumption_units: str = "kWh"
    customer_id: Optional[str] = None
    meter_id: Optional[str] = None
    meter_number: Optional[str] = None
    start_interval: UtcDatetime


class OpenvoltIntervalResponse(BaseModel):
    """`GET /v1/interval-data` body."""

    start_interval: UtcDatetime = Field(alias="startInterval")
    end_interval: UtcDatetime = Field(alias="endInterval")
    granularity: str = canon.DEFAULT_GRANULARITY
    data: List[_OpenvoltDatum]

    def to_interval_data(self) -> IntervalData:
        minutes = canon.GRANULARITY_MIN.get(self.granularity, canon.DEFAULT_CADENCE_MIN)
        step = timedelta(minutes=minutes)
        readings = [
            IntervalReading(
                start=d.start_interval,
                end=d.start_interval + step,
                consumption_kwh=d.consumption,
            )
            for d in self.data
        ]
        return IntervalData(
            start_interval=self.start_interval,
            end_interval=self.end_interval,
            granularity=self.granularity,
            readings=readings,
        )


class _Intensity(BaseModel):
    forecast: Optional[float] = None
    actual: Optional[float] = None
    index: Optional[str] = None


class _IntensityDatum(BaseModel):
    start: UtcDatetime = Field(alias="from")
    end: UtcDatetime = Field(alias="to")
    intensity: _Intensity


class IntensityResponse(BaseModel):
    """`GET /intensity/{from}/{to}` body."""

    data: List[_IntensityDatum]

    def to_readings(self) -> list[CarbonIntensityReading]:
        return [
            CarbonIntensityReading(
                start=d.start,
                end=d.end,
                forecast_gco2=d.intensity.forecast,
                actual_gco2=d.intensity.actual,
                index=d.intensity.index,
            )
            for d in self.data
        ]


class _FuelShare(BaseModel):
    fuel: str
    perc: float


class _GenerationDatum(BaseModel):
    start: UtcDatetime = Field(alias="from")
    end: UtcDatetime = Field(alias="to")
    generationmix: List[_FuelShare]


class GenerationResponse(BaseModel):
    """`GET /generation/{from}/{to}` body."""

    data: List[_GenerationDatum]

    def to_readings(self) -> list[FuelMixReading]:
        out = []
        for d in self.data:
            mix: dict[str, float] = {}
            for share in d.generationmix:
                mix[share.fuel] = mix.get(share.fuel, 0.0) + share.perc
            out.append(FuelMixReading(start=d.start, end=d.end, mix=mix))
        return out


###
### RESULTS
###


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """Outcome of a pipeline step: either a value or the error that stopped it."""

    value: Optional[T] = None
    error: Optional[GridStatsError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class StatsPayload(TypedDict):
    start: Optional[str]
    end: Optional[str]
    intervals: int
    total_consumption_kwh: float
    total_co2_kg: float
    average_fuel_mix: Dict[str, float]
