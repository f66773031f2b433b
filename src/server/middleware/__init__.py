"""Server middleware."""
from src.server.middleware.logging import RequestLoggingMiddleware, record_dispatch, sanitize_dict

__all__ = ["RequestLoggingMiddleware", "record_dispatch", "sanitize_dict"]
