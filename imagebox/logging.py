import uuid
import logging
from datetime import datetime

import pytz
import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def local_timestamper(tz_name: str):
    """structlog processor stamping events with wall-clock time in ``tz_name``."""
    tz = pytz.timezone(tz_name)

    def stamp(logger, method_name, event_dict):
        event_dict["timestamp"] = datetime.now(tz).strftime(TIMESTAMP_FORMAT)
        return event_dict

    return stamp


def setup_logging(level: str = "INFO", tz_name: str = "UTC") -> None:
    level = level.upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            local_timestamper(tz_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response
