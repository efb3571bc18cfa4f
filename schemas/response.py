from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class WeatherResponse(BaseModel):
    """
    API response envelope for the /weather endpoint.

    Exactly one of `message` (success) or `error` (failure) is set.
    """
    success: bool = Field(..., description="Whether the request succeeded")
    message: Optional[str] = Field(default=None, description="Agent's answer on success")
    error: Optional[str] = Field(default=None, description="Failure message")

    @classmethod
    def ok(cls, message: str) -> "WeatherResponse":
        """Factory for successful responses."""
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, error: str) -> "WeatherResponse":
        """Factory for failed responses."""
        return cls(success=False, error=error)

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
