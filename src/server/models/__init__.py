"""Pydantic models for request/response validation."""
from src.server.models.requests import SendMessageRequest
from src.server.models.responses import (
    AnalyticsResponse,
    ChannelStatusResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    MessageStatsResponse,
)

__all__ = [
    "SendMessageRequest",
    "AnalyticsResponse",
    "ChannelStatusResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "MessageStatsResponse",
]
