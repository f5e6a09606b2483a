from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import httpx

from . import ingest, transform, validate
from .config import StatsConfig, default_config
from .exceptions import GridStatsError
from .types import (
    AggregateStats,
    CarbonIntensityReading,
    FuelMixReading,
    IntervalData,
    IntervalReading,
    StepResult,
)

logger = logging.getLogger(__name__)


class StatsAggregator:
    """Fetch a meter's consumption and the grid's carbon data, then reduce them.

    Requests are made one at a time, each awaiting the one before it. Nothing
    is retried or cached; the first failure aborts the whole computation.

    Pass an ``httpx.AsyncClient`` to share a connection pool or to substitute
    a mock transport. Otherwise the aggregator opens its own client and
    closes it on ``aclose()`` / exit from ``async with``.
    """

    def __init__(
        self,
        config: Optional[StatsConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config()
        self._owns_client = client is None
        self._client = (
            client if client is not None else httpx.AsyncClient(timeout=self.config.timeout)
        )

    async def __aenter__(self) -> StatsAggregator:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # Fetch steps

    async def fetch_interval_data(
        self,
        meter_id: Optional[str] = None,
        start: Optional[datetime | str] = None,
        end: Optional[datetime | str] = None,
    ) -> IntervalData:
        return await ingest.fetch_interval_data(
            self._client, self.config, meter_id, start, end
        )

    async def fetch_energy_consumption(
        self,
        meter_id: Optional[str] = None,
        start: Optional[datetime | str] = None,
        end: Optional[datetime | str] = None,
    ) -> list[IntervalReading]:
        return await ingest.fetch_energy_consumption(
            self._client, self.config, meter_id, start, end
        )

    async def fetch_carbon_intensity(
        self, start: datetime | str, end: datetime | str
    ) -> list[CarbonIntensityReading]:
        return await ingest.fetch_carbon_intensity(self._client, self.config, start, end)

    async def fetch_fuel_mix(
        self, start: datetime | str, end: datetime | str
    ) -> list[FuelMixReading]:
        return await ingest.fetch_fuel_mix(self._client, self.config, start, end)

    # Reduction

    async def compute_aggregate(self) -> AggregateStats:
        self.config.check_credentials()

        energy = await self.fetch_interval_data()
        consumption_kwh = transform.total_consumption_kwh(energy.readings)

        intensity = await self.fetch_carbon_intensity(
            energy.start_interval, energy.end_interval
        )
        validate.assert_same_count(
            len(energy.readings), len(intensity), "Carbon intensity data"
        )
        co2_kg = transform.total_co2_kg(intensity)

        mix = await self.fetch_fuel_mix(energy.start_interval, energy.end_interval)
        fuel_mix = transform.compute_fuel_mix_average(mix, expected_count=len(intensity))

        stats = AggregateStats(
            total_consumption_kwh=consumption_kwh,
            total_co2_kg=co2_kg,
            average_fuel_mix=fuel_mix,
            start=energy.start_interval,
            end=energy.end_interval,
            intervals=len(energy.readings),
        )
        logger.info(
            "Meter %s: %.3f kWh, %.3f kg CO2 over %d intervals",
            self.config.meter_id,
            stats.total_consumption_kwh,
            stats.total_co2_kg,
            stats.intervals,
        )
        return stats

    async def try_compute_aggregate(self) -> StepResult[AggregateStats]:
        """Like compute_aggregate, but report package errors instead of raising."""
        try:
            return StepResult(value=await self.compute_aggregate())
        except GridStatsError as exc:
            logger.debug("Aggregation failed: %s", exc)
            return StepResult(error=exc)


async def compute_aggregate(
    config: Optional[StatsConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AggregateStats:
    """One-shot helper: build an aggregator, compute, close."""
    async with StatsAggregator(config, client) as agg:
        return await agg.compute_aggregate()
