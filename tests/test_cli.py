import json

import pytest

import gridstats.__main__ as cli
from gridstats.exceptions import NetworkError
from gridstats.types import AggregateStats

STATS = AggregateStats(
    total_consumption_kwh=3.5,
    total_co2_kg=0.3,
    average_fuel_mix={"gas": 40.0, "wind": 60.0},
    intervals=2,
)


@pytest.fixture
def captured(monkeypatch):
    seen = {}

    async def fake_compute(config):
        seen["config"] = config
        return STATS

    monkeypatch.setattr(cli, "compute_aggregate", fake_compute)
    monkeypatch.setenv("GRIDSTATS_API_KEY", "k")
    return seen


def test_main_prints_text(captured, capsys):
    assert cli.main(["--meter-id", "m2", "--start", "2023-03-01", "--end", "2023-03-02"]) == 0
    out = capsys.readouterr().out
    assert "Building Energy Consumption: 3.5 kWh" in out
    cfg = captured["config"]
    assert cfg.meter_id == "m2"
    assert cfg.api_key == "k"
    assert cfg.start.isoformat() == "2023-03-01T00:00:00+00:00"


def test_main_json(captured, capsys):
    assert cli.main(["--format", "json", "--timeout", "5"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["total_co2_kg"] == 0.3
    assert captured["config"].timeout == 5.0


def test_main_reports_errors(monkeypatch, capsys):
    async def failing(config):
        raise NetworkError("GET https://api.openvolt.com failed")

    monkeypatch.setattr(cli, "compute_aggregate", failing)
    assert cli.main([]) == 1
    assert capsys.readouterr().out == ""


def test_main_rejects_bad_window(captured):
    assert cli.main(["--start", "2023-03-02", "--end", "2023-03-01"]) == 1
    assert "config" not in captured
