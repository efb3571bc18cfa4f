import logging
import sys
from app.core.config import settings

def configure_logging() -> None:
    """
    Send service logs to stdout in one format.

    Provider requests carry the API key as the `appid` query parameter and
    httpx/httpcore log every request URL at INFO, so both are held at WARNING
    to keep the key out of the logs. Request lines come from our own
    middleware, which logs method, path and status only.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
