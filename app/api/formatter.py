"""
Response Formatter

Normalizes success and every failure kind into the fixed envelope.
All failures share one status code; see DESIGN.md.
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from app.core.errors import WeatherAgentError
from schemas.response import WeatherResponse


logger = logging.getLogger(__name__)

FAILURE_STATUS = status.HTTP_400_BAD_REQUEST


def error_message(exc: BaseException) -> str:
    if isinstance(exc, WeatherAgentError):
        return exc.message
    return str(exc) or "Unknown error"


def format_success(message: str) -> JSONResponse:
    return JSONResponse(WeatherResponse.ok(message).to_body(), status_code=status.HTTP_200_OK)


def format_error(exc: BaseException) -> JSONResponse:
    """Log the failure and render `{"success": false, "error": ...}`."""
    if isinstance(exc, WeatherAgentError):
        logger.error(f"[API] {type(exc).__name__}: {exc.message}")
    else:
        logger.exception("[API] Unexpected error", exc_info=exc)
    return JSONResponse(WeatherResponse.fail(error_message(exc)).to_body(), status_code=FAILURE_STATUS)
