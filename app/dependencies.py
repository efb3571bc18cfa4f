"""
FastAPI Dependencies

Long-lived objects are created once here, not per request.
Per-request objects (the dependency bag) are assembled by
`assemble_dependencies()`, the single entry point for the provider secret.
"""

from functools import lru_cache
from typing import Mapping, Optional, Union

from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from agents.weather_agent import WeatherAgent
from app.core.config import Settings, settings
from app.core.context import IdentityContext
from app.core.errors import ConfigurationError, ValidationError
from clients.openweather import OpenWeatherClient
from llm.langchain_adapter import LangChainOrchestrator
from schemas.dependencies import WeatherDependencies
from schemas.weather import TemperatureUnit
from tools.registry import bootstrap_tools


TEMPERATURE_UNIT_HEADER = "X-Temperature-Unit"

MISSING_API_KEY_MESSAGE = "Missing WEATHER_API_KEY environment variable"


def _parse_unit(value: Union[str, TemperatureUnit]) -> TemperatureUnit:
    try:
        return TemperatureUnit(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        allowed = ", ".join(unit.value for unit in TemperatureUnit)
        raise ValidationError(f"Invalid temperature unit '{value}' (expected one of: {allowed})")


def temperature_unit_preference(
    headers: Mapping[str, str],
    default: TemperatureUnit,
) -> Union[str, TemperatureUnit]:
    """
    Caller's unit preference: X-Temperature-Unit header, else the default.

    Returned unvalidated; assemble_dependencies() checks it after the secret.
    """
    value = headers.get(TEMPERATURE_UNIT_HEADER)
    if value is None or not value.strip():
        return default
    return value


def assemble_dependencies(
    identity: IdentityContext,
    weather_api_key: Optional[Union[str, SecretStr]],
    temperature_unit: Union[str, TemperatureUnit],
) -> WeatherDependencies:
    """
    Build the validated dependency bag for one request.

    Raises:
        ConfigurationError: the provider secret is absent
        ValidationError: unit or identity do not match the schema
    """
    if isinstance(weather_api_key, SecretStr):
        weather_api_key = weather_api_key.get_secret_value()
    if not weather_api_key:
        raise ConfigurationError(MISSING_API_KEY_MESSAGE)

    try:
        return WeatherDependencies(
            weather_api_key=weather_api_key,
            temperature_unit=_parse_unit(temperature_unit),
            user_name=identity.user_name,
            user_role=identity.user_role,
        )
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic("Invalid dependencies", e)


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_openweather_client() -> OpenWeatherClient:
    app_settings = get_settings()
    return OpenWeatherClient(
        base_url=app_settings.weather_base_url,
        timeout_seconds=app_settings.weather_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_weather_agent() -> WeatherAgent:
    """
    Create and cache the WeatherAgent singleton.

    All components are wired here:
    - OpenWeatherClient: provider HTTP client (shared connection pool)
    - ToolRegistry: holds the weather tool
    - LangChainOrchestrator: tool-calling loop over the chat model
    """
    app_settings = get_settings()
    return WeatherAgent(
        orchestrator=LangChainOrchestrator(app_settings),
        tools=bootstrap_tools(get_openweather_client()),
        timeout_seconds=app_settings.agent_timeout_seconds,
    )


async def close_resources() -> None:
    """Close the provider client if it was ever created."""
    if get_openweather_client.cache_info().currsize:
        await get_openweather_client().aclose()
