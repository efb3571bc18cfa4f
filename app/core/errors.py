"""
Error Taxonomy

Typed failures raised by every stage of the weather pipeline.

DESIGN RULES:
- Stages raise, they never format responses
- The /weather route is the single catch point
- Messages are safe to return to the caller (no secrets)
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError


class WeatherAgentError(Exception):
    """Base class for all typed pipeline failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(WeatherAgentError):
    """Required process configuration (the provider secret) is missing."""


class ValidationError(WeatherAgentError):
    """Request body, tool input or provider response failed validation."""

    @classmethod
    def from_pydantic(cls, prefix: str, exc: PydanticValidationError) -> "ValidationError":
        """
        Flatten a pydantic error into a single readable message.

        Example: "Invalid provider response: main.temp: Field required"
        """
        parts = []
        for error in exc.errors():
            loc = ".".join(str(part) for part in error.get("loc", ())) or "body"
            parts.append(f"{loc}: {error.get('msg', 'invalid value')}")
        return cls(f"{prefix}: {'; '.join(parts)}")


class UpstreamError(WeatherAgentError):
    """The weather provider answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OrchestratorError(WeatherAgentError):
    """The reasoning engine failed; its message is passed through."""
