from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemas.weather import TemperatureUnit


class Settings(BaseSettings):
    """
    Application configuration settings.

    Loaded once at process start and threaded down explicitly.
    WEATHER_API_KEY, PORT and HOST are read without the service prefix.
    """
    model_config = SettingsConfigDict(env_prefix="WEATHER_AGENT_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "weather-agent"
    environment: str = "local"
    log_level: str = "INFO"

    # API
    api_host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "WEATHER_AGENT_API_HOST"))
    api_port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "WEATHER_AGENT_API_PORT"))

    # Weather provider (OpenWeatherMap)
    weather_api_key: Optional[SecretStr] = Field(default=None, validation_alias="WEATHER_API_KEY")
    weather_base_url: str = "https://api.openweathermap.org/data/2.5"
    weather_timeout_seconds: float = 10.0
    temperature_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT

    # Agent
    agent_timeout_seconds: float = 60.0
    max_tool_rounds: int = 5

    # LLM ("openai" or "azure")
    llm_provider: str = "openai"
    llm_temperature: float = 0.0
    openai_model: str = "gpt-4o"
    azure_openai_endpoint: str = "https://placeholder.openai.azure.com"
    azure_openai_api_version: str = "2024-02-15-preview"
    azure_openai_deployment_name: str = "gpt-4o"


settings = Settings()
