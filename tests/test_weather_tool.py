"""
Weather tool tests.

Provider is an httpx MockTransport; no network access.
"""

import copy

import pytest

from app.core.errors import UpstreamError, ValidationError
from schemas.dependencies import WeatherDependencies
from schemas.weather import TemperatureUnit, WeatherReport
from tests.conftest import SAN_FRANCISCO, FakeProvider
from tools.weather import WeatherTool, map_provider_response


def _without(path):
    payload = copy.deepcopy(SAN_FRANCISCO)
    target = payload
    for key in path[:-1]:
        target = target[key]
    del target[path[-1]]
    return payload


# ── Scenario A ───────────────────────────────────────────────

@pytest.mark.asyncio
async def test_san_francisco_report(weather_client, fake_provider, dependencies):
    tool = WeatherTool(weather_client)

    result = await tool.execute({"location": "San Francisco"}, dependencies)

    assert result == {
        "location": "San Francisco",
        "temperature": 72,
        "conditions": "partly cloudy",
        "humidity": "65%",
        "unit": "fahrenheit",
    }
    assert fake_provider.calls == 1


@pytest.mark.asyncio
async def test_provider_request_params(weather_client, fake_provider, dependencies):
    tool = WeatherTool(weather_client)

    await tool.execute({"location": "San Francisco"}, dependencies)

    request = fake_provider.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/data/2.5/weather"
    assert request.url.params["q"] == "San Francisco"
    assert request.url.params["appid"] == "test-key"
    assert request.url.params["units"] == "imperial"


@pytest.mark.asyncio
@pytest.mark.parametrize("unit,units_param", [
    (TemperatureUnit.CELSIUS, "metric"),
    (TemperatureUnit.FAHRENHEIT, "imperial"),
])
async def test_unit_follows_dependencies(weather_client, fake_provider, dependencies, unit, units_param):
    tool = WeatherTool(weather_client)
    deps = dependencies.model_copy(update={"temperature_unit": unit})

    result = await tool.execute({"location": "Tokyo"}, deps)

    assert result["unit"] == unit.value
    assert fake_provider.requests[0].url.params["units"] == units_param


# ── Validation of tool input ─────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("tool_input", [{}, {"location": ""}, {"location": "   "}, {"location": 42}])
async def test_invalid_input_rejected_before_network(weather_client, fake_provider, dependencies, tool_input):
    tool = WeatherTool(weather_client)

    with pytest.raises(ValidationError) as exc_info:
        await tool.execute(tool_input, dependencies)

    assert "location" in exc_info.value.message
    assert fake_provider.calls == 0


@pytest.mark.asyncio
async def test_invalid_dependencies_rejected(weather_client, fake_provider):
    tool = WeatherTool(weather_client)
    bad_deps = {"weather_api_key": "k", "temperature_unit": "kelvin", "user_name": "A", "user_role": "b"}

    with pytest.raises(ValidationError) as exc_info:
        await tool.execute({"location": "Paris"}, bad_deps)

    assert "temperature_unit" in exc_info.value.message
    assert fake_provider.calls == 0


# ── Provider response contract ───────────────────────────────

@pytest.mark.parametrize("path", [("name",), ("main", "temp"), ("main", "humidity"), ("main",)])
def test_missing_required_field_fails_closed(path):
    with pytest.raises(ValidationError) as exc_info:
        map_provider_response(_without(path), TemperatureUnit.FAHRENHEIT)

    assert path[-1] in exc_info.value.message


@pytest.mark.parametrize("main", [
    {"temp": "72", "humidity": 65},
    {"temp": 72, "humidity": "65"},
    {"temp": True, "humidity": 65},
    {"temp": None, "humidity": 65},
])
def test_wrongly_typed_field_fails_closed(main):
    payload = {**SAN_FRANCISCO, "main": main}

    with pytest.raises(ValidationError):
        map_provider_response(payload, TemperatureUnit.FAHRENHEIT)


def test_non_string_name_fails_closed():
    payload = {**SAN_FRANCISCO, "name": 123}

    with pytest.raises(ValidationError):
        map_provider_response(payload, TemperatureUnit.CELSIUS)


@pytest.mark.parametrize("weather", [None, [], [{}], [{"icon": "04d"}], [{"description": None}]])
def test_missing_description_defaults_to_unknown(weather):
    payload = copy.deepcopy(SAN_FRANCISCO)
    if weather is None:
        del payload["weather"]
    else:
        payload["weather"] = weather

    report = map_provider_response(payload, TemperatureUnit.CELSIUS)

    assert report.conditions == "unknown"
    assert report.location == "San Francisco"
    assert report.temperature == 72
    assert report.humidity == "65%"
    assert report.unit == TemperatureUnit.CELSIUS


def test_only_first_description_is_used():
    payload = {**SAN_FRANCISCO, "weather": [{"description": "light rain"}, {"description": "mist"}]}

    report = map_provider_response(payload, TemperatureUnit.FAHRENHEIT)

    assert report.conditions == "light rain"


def test_fractional_values_are_kept():
    payload = {**SAN_FRANCISCO, "main": {"temp": 21.37, "humidity": 48.5}}

    report = map_provider_response(payload, TemperatureUnit.CELSIUS)

    assert report.temperature == 21.37
    assert report.humidity == "48.5%"


def test_extra_provider_fields_are_ignored():
    payload = {**SAN_FRANCISCO, "wind": {"speed": 3.1}, "cod": 200}

    report = map_provider_response(payload, TemperatureUnit.FAHRENHEIT)

    assert isinstance(report, WeatherReport)


@pytest.mark.asyncio
async def test_missing_field_from_provider_raises(dependencies):
    import httpx
    from clients.openweather import OpenWeatherClient

    provider = FakeProvider(payload=_without(("main", "temp")))
    client = OpenWeatherClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(provider)))

    with pytest.raises(ValidationError):
        await WeatherTool(client).execute({"location": "San Francisco"}, dependencies)


# ── Upstream failures ────────────────────────────────────────

@pytest.mark.asyncio
async def test_upstream_error_carries_status_text(fake_provider, weather_client, dependencies):
    fake_provider.status_code = 404
    fake_provider.payload = {"cod": "404", "message": "city not found"}

    with pytest.raises(UpstreamError) as exc_info:
        await WeatherTool(weather_client).execute({"location": "Atlantis"}, dependencies)

    assert exc_info.value.message == "Error fetching weather: Not Found"
    assert exc_info.value.status_code == 404


# ── Statelessness ────────────────────────────────────────────

@pytest.mark.asyncio
async def test_repeated_calls_are_identical(weather_client, fake_provider, dependencies):
    tool = WeatherTool(weather_client)

    first = await tool.execute({"location": "San Francisco"}, dependencies)
    second = await tool.execute({"location": "San Francisco"}, dependencies)

    assert first == second
    assert fake_provider.calls == 2


@pytest.mark.asyncio
async def test_dependencies_accepted_as_dict(weather_client):
    tool = WeatherTool(weather_client)
    deps = {
        "weather_api_key": "test-key",
        "temperature_unit": "celsius",
        "user_name": "John",
        "user_role": "guest",
    }

    result = await tool.execute({"location": "Tokyo"}, deps)

    assert result["unit"] == "celsius"


@pytest.mark.asyncio
async def test_tool_definition_is_introspectable(weather_client):
    definition = WeatherTool(weather_client).to_dict()

    assert definition["name"] == "getWeatherForecast"
    assert definition["description"] == "Get the current weather forecast for a location"
    assert definition["input_schema"]["required"] == ["location"]
    assert set(definition["dependencies_schema"]["properties"]) == {
        "weather_api_key", "temperature_unit", "user_name", "user_role",
    }


def test_secret_not_exposed_in_dependencies_repr(dependencies):
    assert "test-key" not in repr(dependencies)
    assert "test-key" not in str(dependencies.model_dump())
    assert isinstance(dependencies, WeatherDependencies)
