from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

import httpx
import pydantic

from . import utils
from .config import StatsConfig
from .exceptions import NetworkError, ParseError
from .types import (
    CarbonIntensityReading,
    FuelMixReading,
    GenerationResponse,
    IntensityResponse,
    IntervalData,
    IntervalReading,
    OpenvoltIntervalResponse,
)

logger = logging.getLogger(__name__)

COMMON_HEADERS = {"accept": "application/json"}


async def _get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Any:
    logger.debug("GET %s params=%s", url, dict(params or {}))
    try:
        response = await client.get(
            url, params=params, headers={**COMMON_HEADERS, **(headers or {})}
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise NetworkError(
            f"GET {url} failed with HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"GET {url} failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise ParseError(f"GET {url} did not return JSON") from exc


def _parse(model: type[pydantic.BaseModel], body: Any, url: str) -> Any:
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as exc:
        raise ParseError(
            f"Unexpected response shape from {url}: {exc.error_count()} error(s)\n{exc}"
        ) from exc


async def fetch_interval_data(
    client: httpx.AsyncClient,
    config: StatsConfig,
    meter_id: Optional[str] = None,
    start: Optional[datetime | str] = None,
    end: Optional[datetime | str] = None,
) -> IntervalData:
    """
    Fetch metered consumption from Openvolt's interval-data endpoint.

    Returns the readings together with the window Openvolt reports for them
    (startInterval / endInterval), which is what the grid queries should use.
    """
    url = config.energy_api_url
    params = {
        "meter_id": meter_id or config.meter_id,
        "start_date": utils.energy_api_time(start or config.start),
        "end_date": utils.energy_api_time(end or config.end),
        "granularity": config.granularity,
    }
    body = await _get_json(
        client, url, params=params, headers={"x-api-key": config.api_key}
    )
    data = _parse(OpenvoltIntervalResponse, body, url).to_interval_data()
    logger.debug(
        "Openvolt returned %d readings for %s .. %s",
        len(data.readings),
        data.start_interval.isoformat(),
        data.end_interval.isoformat(),
    )
    return data


async def fetch_energy_consumption(
    client: httpx.AsyncClient,
    config: StatsConfig,
    meter_id: Optional[str] = None,
    start: Optional[datetime | str] = None,
    end: Optional[datetime | str] = None,
) -> list[IntervalReading]:
    data = await fetch_interval_data(client, config, meter_id, start, end)
    return data.readings


async def fetch_carbon_intensity(
    client: httpx.AsyncClient,
    config: StatsConfig,
    start: datetime | str,
    end: datetime | str,
) -> list[CarbonIntensityReading]:
    url = (
        f"{config.carbon_api_url}/intensity/"
        f"{utils.carbon_api_time(start)}/{utils.carbon_api_time(end)}"
    )
    body = await _get_json(client, url)
    readings = _parse(IntensityResponse, body, url).to_readings()
    logger.debug("Carbon intensity returned %d readings", len(readings))
    return readings


async def fetch_fuel_mix(
    client: httpx.AsyncClient,
    config: StatsConfig,
    start: datetime | str,
    end: datetime | str,
) -> list[FuelMixReading]:
    url = (
        f"{config.carbon_api_url}/generation/"
        f"{utils.carbon_api_time(start)}/{utils.carbon_api_time(end)}"
    )
    body = await _get_json(client, url)
    readings = _parse(GenerationResponse, body, url).to_readings()
    logger.debug("Generation mix returned %d readings", len(readings))
    return readings
