from datetime import datetime, timezone

import pytest

import gridstats as gs
from gridstats.exceptions import ConfigError


def test_default_config_is_january_2023():
    cfg = gs.default_config()
    assert cfg.meter_id == gs.canon.DEFAULT_METER_ID
    assert cfg.start == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert cfg.end == datetime(2023, 1, 31, 23, 59, 59, tzinfo=timezone.utc)
    assert cfg.granularity == "hh"
    assert cfg.timeout is None


def test_from_env_overrides_only_what_is_set():
    cfg = gs.StatsConfig.from_env(
        {
            "GRIDSTATS_API_KEY": "k",
            "GRIDSTATS_CARBON_API_URL": "http://localhost:9000/",
            "GRIDSTATS_METER_ID": "",
        }
    )
    assert cfg.api_key == "k"
    assert cfg.carbon_api_url == "http://localhost:9000"
    assert cfg.meter_id == gs.canon.DEFAULT_METER_ID
    assert cfg.energy_api_url == gs.canon.ENERGY_API_URL


def test_with_window_parses_strings():
    cfg = gs.default_config().with_window("2023-02-01", "2023-02-28T23:59:59+01:00")
    assert cfg.start == datetime(2023, 2, 1, tzinfo=timezone.utc)
    assert cfg.end == datetime(2023, 2, 28, 22, 59, 59, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "start,end",
    [
        ("2023-01-02", "2023-01-01"),
        ("2023-01-01", "2023-01-01"),
        ("not a date", "2023-01-01"),
    ],
)
def test_invalid_window_rejected(start, end):
    with pytest.raises(ConfigError):
        gs.StatsConfig(start=start, end=end)


def test_unknown_granularity_rejected():
    with pytest.raises(ConfigError, match="granularity"):
        gs.StatsConfig(granularity="5min")


def test_check_credentials():
    with pytest.raises(ConfigError):
        gs.StatsConfig().check_credentials()
    gs.StatsConfig(api_key="k").check_credentials()
