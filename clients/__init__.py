# Provider Clients
from clients.openweather import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
