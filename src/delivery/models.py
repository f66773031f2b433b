"""Message, channel outcome and analytics models."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

from src.delivery.errors import InvalidArgumentError


class Channel(Enum):
    """Delivery mechanisms a message can be sent through."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    IN_APP = "in_app"
    WEBHOOK = "webhook"


class Priority(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class MessageStatus(Enum):
    """Aggregate delivery state of a message across its channels."""

    QUEUED = "queued"
    PROCESSING = "processing"
    DELIVERED = "delivered"
    PARTIALLY_DELIVERED = "partially_delivered"
    FAILED = "failed"


class ChannelDeliveryState(Enum):
    DELIVERED = "delivered"
    FAILED = "failed"


def parse_channel(value: Union[Channel, str]) -> Channel:
    """Resolve a channel identifier, raising InvalidArgumentError if unknown."""
    if isinstance(value, Channel):
        return value
    try:
        return Channel(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Channel)
        raise InvalidArgumentError(
            f"Unknown channel {value!r}, expected one of: {allowed}",
            {"channel": value},
        ) from None


def parse_priority(value: Union[Priority, str, None]) -> Priority:
    if value is None:
        return Priority.NORMAL
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise InvalidArgumentError(
            f"Unknown priority {value!r}, expected one of: {allowed}",
            {"priority": value},
        ) from None


@dataclass(frozen=True)
class ChannelOutcome:
    """Result of one delivery attempt on one channel.

    Attributes:
        channel: The channel identifier (a Channel, or the raw string when
            the simulator was handed an unrecognised identifier).
        status: Delivered or failed; there is no partial state per channel.
        attempts: Reported attempt count, at least 1.
        delivered_at: Set only when delivered.
        error_message: Set only when failed.
    """

    channel: Union[Channel, str]
    status: ChannelDeliveryState
    attempts: int = 1
    delivered_at: Optional[datetime] = None
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise InvalidArgumentError("attempts must be at least 1")
        if self.status is ChannelDeliveryState.DELIVERED:
            if self.delivered_at is None:
                raise InvalidArgumentError("delivered outcome requires delivered_at")
            if self.error_message is not None:
                raise InvalidArgumentError("delivered outcome cannot carry an error_message")
        else:
            if self.delivered_at is not None:
                raise InvalidArgumentError("failed outcome cannot carry delivered_at")
            if not self.error_message:
                raise InvalidArgumentError("failed outcome requires an error_message")

    @property
    def channel_value(self) -> str:
        return self.channel.value if isinstance(self.channel, Channel) else self.channel

    @property
    def is_delivered(self) -> bool:
        return self.status is ChannelDeliveryState.DELIVERED


@dataclass(frozen=True)
class DeliveryAnalytics:
    total_recipients: int
    delivered: int
    failed: int
    pending: int

    def __post_init__(self) -> None:
        for name in ("total_recipients", "delivered", "failed", "pending"):
            if getattr(self, name) < 0:
                raise InvalidArgumentError(f"{name} cannot be negative")

    @property
    def delivery_rate(self) -> float:
        if self.total_recipients <= 0:
            return 0.0
        return self.delivered / self.total_recipients * 100


@dataclass(frozen=True)
class DispatchRequest:
    """An already-parsed request to send one message.

    ``template_id``, ``template_variables``, ``scheduled_at`` and
    ``webhook_url`` are carried through to the stored record without being
    acted on. ``template_variables`` is held as a read-only copy.
    Channels may be given as strings; duplicates collapse onto their first
    occurrence.
    """

    recipients: tuple[str, ...]
    content: str
    channels: tuple[Channel, ...]
    priority: Priority = Priority.NORMAL
    category: Optional[str] = None
    template_id: Optional[str] = None
    template_variables: Optional[Mapping[str, Any]] = None
    scheduled_at: Optional[str] = None
    webhook_url: Optional[str] = None
    demo_mode: bool = True

    def __post_init__(self) -> None:
        recipients = tuple(self.recipients or ())
        if not recipients:
            raise InvalidArgumentError("recipients cannot be empty")
        if any(not isinstance(r, str) or not r.strip() for r in recipients):
            raise InvalidArgumentError("recipients cannot contain blank addresses")
        if not isinstance(self.content, str) or not self.content.strip():
            raise InvalidArgumentError("content cannot be blank")
        channels = _unique_channels(self.channels or ())
        if not channels:
            raise InvalidArgumentError("channels cannot be empty")
        object.__setattr__(self, "recipients", recipients)
        object.__setattr__(self, "channels", channels)
        object.__setattr__(self, "priority", parse_priority(self.priority))
        object.__setattr__(self, "template_variables", _frozen_copy(self.template_variables))


def _frozen_copy(values: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if values is None:
        return None
    return MappingProxyType(dict(values))


def _unique_channels(values: Iterable[Union[Channel, str]]) -> tuple[Channel, ...]:
    seen: dict[Channel, None] = {}
    for value in values:
        seen.setdefault(parse_channel(value), None)
    return tuple(seen)


@dataclass(frozen=True)
class MessageRecord:
    """A dispatched message with its per-channel outcomes and analytics.

    Built once by the messaging service and never modified after it is
    stored. ``channel_status`` is a read-only mapping with exactly one
    entry per requested channel.
    """

    message_id: str
    recipients: tuple[str, ...]
    content: str
    channels: tuple[Channel, ...]
    status: MessageStatus
    channel_status: Mapping[Channel, ChannelOutcome]
    analytics: DeliveryAnalytics
    created_at: datetime
    updated_at: datetime
    priority: Priority = Priority.NORMAL
    category: Optional[str] = None
    delivered_at: Optional[datetime] = None
    template_id: Optional[str] = None
    template_variables: Optional[Mapping[str, Any]] = None
    scheduled_at: Optional[str] = None
    webhook_url: Optional[str] = None
    mock_data: bool = True

    def __post_init__(self) -> None:
        if not self.message_id:
            raise InvalidArgumentError("message_id cannot be empty")
        if set(self.channel_status) != set(self.channels):
            raise InvalidArgumentError("channel_status must hold one outcome per requested channel")
        delivered = self.status in (MessageStatus.DELIVERED, MessageStatus.PARTIALLY_DELIVERED)
        if delivered != (self.delivered_at is not None):
            raise InvalidArgumentError("delivered_at is set only for delivered or partially delivered messages")
        object.__setattr__(self, "channel_status", MappingProxyType(dict(self.channel_status)))
        object.__setattr__(self, "template_variables", _frozen_copy(self.template_variables))
