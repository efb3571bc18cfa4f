import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from app.core.config import settings
from app.core.context import extract_identity, reset_identity, set_identity
from app.core.logging import configure_logging
from app.api.weather import router as weather_router
from app.dependencies import close_resources

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(f"{settings.service_name} starting (environment={settings.environment})")
    yield
    await close_resources()


app = FastAPI(
    title=settings.service_name,
    lifespan=lifespan
)


@app.middleware("http")
async def identity_context(request: Request, call_next):
    """Attach the caller's identity to request-scoped storage."""
    identity = extract_identity(request.headers)
    request.state.identity = identity
    token = set_identity(identity)
    try:
        return await call_next(request)
    finally:
        reset_identity(token)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    latency_ms = int((time.time() - start_time) * 1000)
    logger.info(f"{request.method} {request.url.path} {response.status_code} {latency_ms}ms")
    return response


app.include_router(weather_router)

@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    """Start the HTTP listener."""
    configure_logging()
    logger.info(
        f"Try it out: curl -X POST http://localhost:{settings.api_port}/weather "
        "-H 'Content-Type: application/json' -H 'X-User-Name: Alice' -H 'X-User-Role: admin' "
        "-d '{\"location\": \"San Francisco\"}'"
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
