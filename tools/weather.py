"""
Weather Tool

Fetches current weather through the provider client and translates the
provider body into a WeatherReport.

Holds no mutable state: safe to call zero, one or many times per request.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from clients.openweather import OpenWeatherClient
from schemas.dependencies import WeatherDependencies
from schemas.weather import ProviderWeatherResponse, TemperatureUnit, WeatherQuery, WeatherReport
from tools.base import Tool


logger = logging.getLogger(__name__)

UNKNOWN_CONDITIONS = "unknown"


def map_provider_response(payload: Any, unit: TemperatureUnit) -> WeatherReport:
    """
    Validate a raw provider body and map it to a WeatherReport.

    Fails closed: a missing or mistyped `name`, `main.temp` or
    `main.humidity` raises ValidationError. Only a missing description
    defaults (to "unknown").
    """
    try:
        data = ProviderWeatherResponse.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic("Invalid provider response", e)

    description = data.description
    return WeatherReport(
        location=data.name,
        temperature=data.main.temp,
        conditions=description if description is not None else UNKNOWN_CONDITIONS,
        humidity=f"{data.main.humidity}%",
        unit=unit,
    )


class WeatherTool(Tool):
    """
    Current weather lookup for a location.

    Input: {"location": "San Francisco"}
    Output: {"location", "temperature", "conditions", "humidity", "unit"}
    """

    TOOL_NAME = "getWeatherForecast"

    input_model = WeatherQuery
    dependencies_model = WeatherDependencies

    def __init__(self, client: OpenWeatherClient):
        self._client = client

    @property
    def name(self) -> str:
        return self.TOOL_NAME

    @property
    def description(self) -> str:
        return "Get the current weather forecast for a location"

    async def run(self, input: WeatherQuery, dependencies: WeatherDependencies) -> Dict[str, Any]:
        payload = await self._client.fetch_current(
            input.location,
            dependencies.weather_api_key.get_secret_value(),
            dependencies.temperature_unit,
        )
        report = map_provider_response(payload, dependencies.temperature_unit)

        logger.debug(f"[WEATHER] {report.location}: {report.temperature} {report.unit.value}, {report.conditions}")
        return report.model_dump(mode="json")
