import json

import httpx
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock

from app.core.config import Settings
from clients.openweather import OpenWeatherClient
from schemas.dependencies import WeatherDependencies
from schemas.weather import TemperatureUnit


SAN_FRANCISCO = {
    "name": "San Francisco",
    "main": {"temp": 72, "humidity": 65},
    "weather": [{"description": "partly cloudy"}],
}


class FakeProvider:
    """
    httpx MockTransport handler standing in for OpenWeatherMap.

    Records every request so tests can assert on call counts and params.
    """

    def __init__(self, payload=None, status_code: int = 200):
        self.payload = SAN_FRANCISCO if payload is None else payload
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.payload, (bytes, str)):
            return httpx.Response(self.status_code, content=self.payload)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_provider():
    return FakeProvider()


def make_weather_client(http_client: httpx.AsyncClient) -> OpenWeatherClient:
    return OpenWeatherClient(base_url="https://weather.test/data/2.5", http_client=http_client)


@pytest_asyncio.fixture
async def weather_client(fake_provider):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_provider)) as http_client:
        yield make_weather_client(http_client)


@pytest.fixture
def dependencies():
    return WeatherDependencies(
        weather_api_key="test-key",
        temperature_unit=TemperatureUnit.FAHRENHEIT,
        user_name="Alice",
        user_role="admin",
    )


@pytest.fixture
def test_settings():
    return Settings(WEATHER_API_KEY="test-key", agent_timeout_seconds=5.0)


@pytest.fixture
def mock_orchestrator():
    orchestrator = AsyncMock()
    orchestrator.generate = AsyncMock(return_value="Hello Alice (admin)! It's 72°F in San Francisco.")
    return orchestrator
