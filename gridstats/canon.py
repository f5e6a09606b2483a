from __future__ import annotations
from typing import Final

INDEX_NAME: Final[str] = "t_start"
DEFAULT_TZ: Final[str] = "UTC"
DEFAULT_CADENCE_MIN: Final[int] = 30
DEFAULT_GRANULARITY: Final[str] = "hh"

GRAMS_PER_KG: Final[float] = 1000.0

ENERGY_API_URL: Final[str] = "https://api.openvolt.com/v1/interval-data"
CARBON_API_URL: Final[str] = "https://api.carbonintensity.org.uk"

# Fixed building and month the dashboard was built for
DEFAULT_METER_ID: Final[str] = "6514167223e3d1424bf82742"
DEFAULT_START: Final[str] = "2023-01-01T00:00:00Z"
DEFAULT_END: Final[str] = "2023-01-31T23:59:59Z"

# carbonintensity.org.uk path segments, e.g. 2023-01-01T00:00Z
CARBON_API_TIME_FORMAT: Final[str] = "%Y-%m-%dT%H:%MZ"

# GB generation mix categories reported by the grid API
FUELS: Final[tuple[str, ...]] = (
    "gas",
    "coal",
    "biomass",
    "nuclear",
    "hydro",
    "imports",
    "other",
    "wind",
    "solar",
)

CONSUMPTION_COLS: Final[list[str]] = ["t_end", "kwh"]
INTENSITY_COLS: Final[list[str]] = ["t_end", "forecast_gco2", "actual_gco2", "category"]

# Openvolt granularity code -> interval length
GRANULARITY_MIN: Final[dict[str, int]] = {
    "hh": 30,
    "day": 1440,
}
