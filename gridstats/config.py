from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Mapping, Optional

from . import canon, utils, validate
from .exceptions import ConfigError, require

ENV_PREFIX = "GRIDSTATS_"


def _coerce_time(value: object, name: str) -> datetime:
    try:
        return utils.to_utc(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid {name}: {exc}") from exc


@dataclass(frozen=True)
class StatsConfig:
    # Openvolt
    api_key: str = ""
    meter_id: str = canon.DEFAULT_METER_ID
    energy_api_url: str = canon.ENERGY_API_URL
    granularity: str = canon.DEFAULT_GRANULARITY

    # carbonintensity.org.uk (no auth)
    carbon_api_url: str = canon.CARBON_API_URL

    # Requested window, inclusive of the last interval
    start: datetime = field(default_factory=lambda: utils.to_utc(canon.DEFAULT_START))
    end: datetime = field(default_factory=lambda: utils.to_utc(canon.DEFAULT_END))

    timeout: Optional[float] = None  # seconds; None waits indefinitely

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _coerce_time(self.start, "start"))
        object.__setattr__(self, "end", _coerce_time(self.end, "end"))
        object.__setattr__(self, "carbon_api_url", self.carbon_api_url.rstrip("/"))
        validate.assert_window(self.start, self.end)
        require(
            self.granularity in canon.GRANULARITY_MIN,
            f"Unsupported granularity {self.granularity!r}; "
            f"expected one of: {', '.join(canon.GRANULARITY_MIN)}",
            ConfigError,
        )

    def with_window(self, start: datetime | str, end: datetime | str) -> StatsConfig:
        return replace(
            self, start=_coerce_time(start, "start"), end=_coerce_time(end, "end")
        )

    def check_credentials(self) -> None:
        require(bool(self.api_key), "An Openvolt API key is required.", ConfigError)
        require(bool(self.meter_id), "A meter id is required.", ConfigError)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> StatsConfig:
        """
        Build a config from GRIDSTATS_* environment variables:
          - GRIDSTATS_API_KEY
          - GRIDSTATS_METER_ID
          - GRIDSTATS_ENERGY_API_URL
          - GRIDSTATS_CARBON_API_URL
        Anything unset keeps its default.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, str] = {}
        for name in ("api_key", "meter_id", "energy_api_url", "carbon_api_url"):
            value = env.get(ENV_PREFIX + name.upper())
            if value:
                overrides[name] = value
        return cls(**overrides)


def default_config() -> StatsConfig:
    return StatsConfig()
