"""Message dispatch, delivery status aggregation and storage."""
from src.delivery.aggregator import aggregate_status, count_outcomes
from src.delivery.analytics import compute_analytics
from src.delivery.errors import (
    DuplicateMessageError,
    InvalidArgumentError,
    MessageNotFoundError,
    MessagingHubError,
)
from src.delivery.models import (
    Channel,
    ChannelDeliveryState,
    ChannelOutcome,
    DeliveryAnalytics,
    DispatchRequest,
    MessageRecord,
    MessageStatus,
    Priority,
)
from src.delivery.query import filter_messages, paginate, query_messages
from src.delivery.service import MessagingService, new_message_id
from src.delivery.simulator import ChannelDeliverySimulator, DEFAULT_SUCCESS_RATES
from src.delivery.store import MessageStore

__all__ = [
    "aggregate_status", "count_outcomes", "compute_analytics",
    "MessagingHubError", "InvalidArgumentError", "MessageNotFoundError", "DuplicateMessageError",
    "Channel", "ChannelDeliveryState", "ChannelOutcome", "DeliveryAnalytics",
    "DispatchRequest", "MessageRecord", "MessageStatus", "Priority",
    "filter_messages", "paginate", "query_messages",
    "MessagingService", "new_message_id",
    "ChannelDeliverySimulator", "DEFAULT_SUCCESS_RATES",
    "MessageStore",
]
