from pydantic import BaseModel, Field

from schemas.weather import Location


class WeatherRequest(BaseModel):
    """
    API request model for the /weather endpoint.

    This is the external contract — clients send this.
    """
    location: Location = Field(..., description="City or free-text location")
