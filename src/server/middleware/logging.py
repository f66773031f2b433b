"""Request logging middleware."""
import logging
import time
from typing import Callable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger("messaging_hub.server")
SENSITIVE_FIELDS = frozenset({"authorization", "x-api-key", "cookie", "webhookurl", "webhook_url"})

# Set by the dispatch route on request.state so the response line can name
# the message it created.
DISPATCH_STATE_KEY = "dispatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and its outcome.

    Responses to a dispatch also carry the created message id and its
    aggregate delivery status. Server errors are logged at WARNING.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        start_time = time.perf_counter()
        client_id = request.headers.get("X-Client-ID", "unknown")
        logger.info("Request: %s %s client=%s query=%s", request.method, request.url.path,
                    client_id, sanitize_dict(dict(request.query_params)))

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        dispatched = _dispatched(request)
        if dispatched is not None:
            message_id, delivery = dispatched
            logger.log(level, "Response: %s %s status=%d duration=%.2fms message=%s delivery=%s",
                       request.method, request.url.path, response.status_code, duration_ms,
                       message_id, delivery)
        else:
            logger.log(level, "Response: %s %s status=%d duration=%.2fms",
                       request.method, request.url.path, response.status_code, duration_ms)
        return response


def record_dispatch(request: Request, message_id: str, delivery_status: str) -> None:
    """Note a created message on the request for the response log line."""
    setattr(request.state, DISPATCH_STATE_KEY, (message_id, delivery_status))


def _dispatched(request: Request) -> Optional[tuple[str, str]]:
    return getattr(request.state, DISPATCH_STATE_KEY, None)


def sanitize_dict(data: dict) -> dict:
    """Remove sensitive fields from a dictionary for logging."""
    result = {}
    for key, value in data.items():
        lower_key = key.lower()
        if lower_key in SENSITIVE_FIELDS:
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = sanitize_dict(value)
        else:
            result[key] = value
    return result
