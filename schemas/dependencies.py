from pydantic import BaseModel, ConfigDict, Field, SecretStr

from schemas.weather import TemperatureUnit


class WeatherDependencies(BaseModel):
    """
    Per-request dependency bag.

    Environment-supplied values (secret, preference, identity) that tools
    receive alongside, but separately from, the model-supplied arguments.
    The secret is a SecretStr so it never shows up in repr, logs or dumps.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    weather_api_key: SecretStr = Field(..., description="OpenWeatherMap API key")
    temperature_unit: TemperatureUnit = Field(..., description="Preferred temperature unit")
    user_name: str = Field(..., description="Caller's display name")
    user_role: str = Field(..., description="Caller's role")
