"""
OpenWeatherMap Client

Thin async client for the current-weather endpoint.
Returns the raw JSON body; validation and mapping live in the weather tool.

DESIGN RULES:
- No retries (a failed lookup surfaces as UpstreamError)
- Explicit timeout on every call
- The API key is sent as the `appid` query parameter and NEVER logged
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.errors import UpstreamError, ValidationError
from schemas.weather import TemperatureUnit


logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """
    Async client for GET {base_url}/weather.

    Holds a shared httpx.AsyncClient (connection pool) and no per-request
    state, so one instance serves all concurrent requests.
    """

    DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            base_url: Provider base URL (without trailing /weather)
            timeout_seconds: Per-call timeout
            http_client: Optional pre-built client (tests inject a MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def fetch_current(
        self,
        location: str,
        api_key: str,
        unit: TemperatureUnit,
    ) -> Dict[str, Any]:
        """
        Fetch current weather for a location.

        Returns:
            Decoded JSON body (unvalidated)

        Raises:
            UpstreamError: non-2xx status, timeout or transport failure
            ValidationError: body is not JSON
        """
        unit = TemperatureUnit(unit)
        params = {
            "q": location,
            "appid": api_key,
            "units": unit.provider_units,
        }

        logger.info(f"[WEATHER] Fetching current weather for '{location}' (units={unit.provider_units})")

        try:
            response = await self._client.get(
                f"{self._base_url}/weather",
                params=params,
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            raise UpstreamError(f"Error fetching weather: timed out after {self._timeout}s")
        except httpx.HTTPError as e:
            raise UpstreamError(f"Error fetching weather: {type(e).__name__}")

        if not response.is_success:
            logger.warning(f"[WEATHER] Provider returned {response.status_code} for '{location}'")
            raise UpstreamError(
                f"Error fetching weather: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise ValidationError("Invalid provider response: body is not valid JSON")

    async def aclose(self) -> None:
        """Close the underlying client if we created it."""
        if self._owns_client:
            await self._client.aclose()
