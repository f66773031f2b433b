"""Response models for API endpoints."""
from datetime import datetime
from typing import Annotated, Literal, Optional, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.delivery.models import ChannelOutcome, DeliveryAnalytics, MessageRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChannelStatusResponse(_CamelModel):
    channel: str
    status: Literal["delivered", "failed"]
    delivered_at: Optional[datetime] = None
    attempts: Annotated[int, Field(ge=1)]
    error_message: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: ChannelOutcome) -> "ChannelStatusResponse":
        return cls(
            channel=outcome.channel_value,
            status=outcome.status.value,
            delivered_at=outcome.delivered_at,
            attempts=outcome.attempts,
            error_message=outcome.error_message,
        )


class AnalyticsResponse(_CamelModel):
    total_recipients: int
    delivered: int
    failed: int
    pending: int
    delivery_rate: float

    @classmethod
    def from_analytics(cls, analytics: DeliveryAnalytics) -> "AnalyticsResponse":
        return cls(
            total_recipients=analytics.total_recipients,
            delivered=analytics.delivered,
            failed=analytics.failed,
            pending=analytics.pending,
            delivery_rate=analytics.delivery_rate,
        )


class MessageResponse(_CamelModel):
    message_id: str
    recipients: list[str]
    content: str
    channels: list[str]
    status: Literal["queued", "processing", "delivered", "partially_delivered", "failed"]
    priority: Literal["low", "normal", "high", "urgent"]
    category: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    scheduled_at: Optional[str] = None
    delivered_at: Optional[datetime] = None
    channel_status: dict[str, ChannelStatusResponse]
    analytics: AnalyticsResponse
    mock_data: bool = True

    @classmethod
    def from_record(cls, record: MessageRecord) -> "MessageResponse":
        return cls(
            message_id=record.message_id,
            recipients=list(record.recipients),
            content=record.content,
            channels=[c.value for c in record.channels],
            status=record.status.value,
            priority=record.priority.value,
            category=record.category,
            created_at=record.created_at,
            updated_at=record.updated_at,
            scheduled_at=record.scheduled_at,
            delivered_at=record.delivered_at,
            channel_status={
                channel.value: ChannelStatusResponse.from_outcome(outcome)
                for channel, outcome in record.channel_status.items()
            },
            analytics=AnalyticsResponse.from_analytics(record.analytics),
            mock_data=record.mock_data,
        )


class MessageStatsResponse(_CamelModel):
    queued: int
    processing: int
    delivered: int
    partially_delivered: int
    failed: int
    total: int


class HealthResponse(_CamelModel):
    status: Annotated[Literal["healthy"], Field()]
    service: Annotated[str, Field()]
    version: Annotated[str, Field()]
    timestamp: Annotated[str, Field()]
    messages_stored: Annotated[int, Field(ge=0)]


class ErrorDetail(BaseModel):
    code: Annotated[
        Literal[
            "INVALID_ARGUMENT",
            "MESSAGE_NOT_FOUND",
            "DUPLICATE_MESSAGE",
            "INTERNAL_ERROR",
        ],
        Field(),
    ]
    message: Annotated[str, Field()]
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
