import json

import httpx
import pytest

import gridstats as gs

API_KEY = "test-key"


@pytest.fixture
def energy_body():
    return {
        "startInterval": "2023-01-01T00:00:00.000Z",
        "endInterval": "2023-01-01T01:00:00.000Z",
        "granularity": "hh",
        "data": [
            {
                "consumption": "1.0",
                "consumption_units": "kWh",
                "customer_id": "c1",
                "meter_id": gs.canon.DEFAULT_METER_ID,
                "meter_number": "M1",
                "start_interval": "2023-01-01T00:00:00.000Z",
            },
            {
                "consumption": "2.5",
                "consumption_units": "kWh",
                "customer_id": "c1",
                "meter_id": gs.canon.DEFAULT_METER_ID,
                "meter_number": "M1",
                "start_interval": "2023-01-01T00:30:00.000Z",
            },
        ],
    }


@pytest.fixture
def intensity_body():
    return {
        "data": [
            {
                "from": "2023-01-01T00:00Z",
                "to": "2023-01-01T00:30Z",
                "intensity": {"forecast": 110, "actual": 100, "index": "low"},
            },
            {
                "from": "2023-01-01T00:30Z",
                "to": "2023-01-01T01:00Z",
                "intensity": {"forecast": 190, "actual": 200, "index": "moderate"},
            },
        ]
    }


@pytest.fixture
def generation_body():
    return {
        "data": [
            {
                "from": "2023-01-01T00:00Z",
                "to": "2023-01-01T00:30Z",
                "generationmix": [
                    {"fuel": "gas", "perc": 50},
                    {"fuel": "wind", "perc": 50},
                ],
            },
            {
                "from": "2023-01-01T00:30Z",
                "to": "2023-01-01T01:00Z",
                "generationmix": [
                    {"fuel": "gas", "perc": 30},
                    {"fuel": "wind", "perc": 70},
                ],
            },
        ]
    }


@pytest.fixture
def config():
    return gs.StatsConfig(
        api_key=API_KEY,
        start="2023-01-01T00:00:00Z",
        end="2023-01-01T00:59:59Z",
    )


@pytest.fixture
def mock_api(energy_body, intensity_body, generation_body):
    """
    Factory for an AsyncClient backed by canned responses.

    Routes are keyed by the first path segment ('interval-data', 'intensity',
    'generation'); a value is either a JSON-able body, an httpx.Response, or
    an exception to raise. Every request is appended to `client.seen`.
    """

    def make(**overrides):
        routes = {
            "interval-data": energy_body,
            "intensity": intensity_body,
            "generation": generation_body,
        }
        routes.update({k.replace("_", "-"): v for k, v in overrides.items()})
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            parts = request.url.path.strip("/").split("/")
            key = "interval-data" if parts[-1] == "interval-data" else parts[0]
            route = routes[key]
            if isinstance(route, Exception):
                raise route
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, content=json.dumps(route).encode())

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.seen = seen  # type: ignore[attr-defined]
        return client

    return make
