"""
Weather API Route

Thin delegation layer: assemble the request's dependencies, validate the
body, hand off to the WeatherAgent, format the result.

This route is the single catch point. Every failure below it leaves as the
`{"success": false, "error": ...}` envelope.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from agents.weather_agent import WeatherAgent
from app.api.formatter import format_error, format_success
from app.core.config import Settings
from app.core.context import get_identity
from app.core.errors import ValidationError
from app.dependencies import (
    assemble_dependencies,
    get_settings,
    get_weather_agent,
    temperature_unit_preference,
)
from schemas.request import WeatherRequest


router = APIRouter()


async def read_weather_request(request: Request) -> WeatherRequest:
    """
    Parse and validate the JSON body.

    Raises:
        ValidationError: malformed JSON, or missing/empty `location`
    """
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Invalid request body: expected a JSON object")

    try:
        return WeatherRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic("Invalid request body", e)


@router.post("/weather")
async def get_weather(
    request: Request,
    settings: Settings = Depends(get_settings),
    agent: WeatherAgent = Depends(get_weather_agent),
) -> JSONResponse:
    """
    Personalized weather summary for `location`.

    Flow:
    1. Identity (set by middleware) + secret + unit -> dependency bag
    2. Body validated before any provider call
    3. WeatherAgent answers, calling the weather tool as it sees fit
    """
    try:
        dependencies = assemble_dependencies(
            get_identity(),
            settings.weather_api_key,
            temperature_unit_preference(request.headers, settings.temperature_unit),
        )
        weather_request = await read_weather_request(request)
        message = await agent.run(weather_request.location, dependencies)
    except Exception as e:
        return format_error(e)

    return format_success(message)
