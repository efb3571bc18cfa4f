"""
Weather Schemas

Tool input, tool output and the provider response contract.

The provider fields are STRICT: required fields must be present with the
right JSON type, or validation fails closed. The only permitted default is
`conditions = "unknown"` when the description is absent.
"""

from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, StringConstraints


class TemperatureUnit(str, Enum):
    """Temperature unit preference for a request."""
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def provider_units(self) -> str:
        """OpenWeatherMap `units` query value."""
        return "metric" if self is TemperatureUnit.CELSIUS else "imperial"


Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# --- Tool Input / Output ---

class WeatherQuery(BaseModel):
    """Input for the weather tool."""
    model_config = ConfigDict(extra="forbid")

    location: Location = Field(..., description="The city or location to get weather for")


class WeatherReport(BaseModel):
    """
    Current weather for one location, in the caller's unit.

    Returned to the orchestrator as a tool result.
    """
    model_config = ConfigDict(frozen=True)

    location: str
    temperature: Union[int, float]
    conditions: str
    humidity: str = Field(..., description="Relative humidity as a percentage, e.g. '65%'")
    unit: TemperatureUnit


# --- Provider Contract (OpenWeatherMap /weather) ---

class ProviderCondition(BaseModel):
    description: Optional[StrictStr] = None


class ProviderMain(BaseModel):
    temp: Union[StrictInt, StrictFloat]
    humidity: Union[StrictInt, StrictFloat]


class ProviderWeatherResponse(BaseModel):
    """Fields of the provider body we depend on. Unknown fields are ignored."""
    name: StrictStr
    main: ProviderMain
    weather: List[ProviderCondition] = Field(default_factory=list)

    @property
    def description(self) -> Optional[str]:
        if not self.weather:
            return None
        return self.weather[0].description
