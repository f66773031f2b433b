"""Dispatch, lookup and listing of messages."""
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from src.delivery.aggregator import aggregate_status
from src.delivery.analytics import compute_analytics
from src.delivery.models import (
    DispatchRequest,
    MessageRecord,
    MessageStatus,
)
from src.delivery.query import DEFAULT_PAGE_SIZE, query_messages
from src.delivery.simulator import ChannelDeliverySimulator
from src.delivery.store import MessageStore

logger = logging.getLogger(__name__)

MESSAGE_ID_PREFIX = "msg_"
_DELIVERED_STATUSES = frozenset(
    (MessageStatus.DELIVERED, MessageStatus.PARTIALLY_DELIVERED)
)


def new_message_id() -> str:
    return f"{MESSAGE_ID_PREFIX}{uuid.uuid4()}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessagingService:
    """Sends messages through the simulator and keeps the results.

    The store and simulator are injected so one instance of each can be
    shared by the whole application, and tests can substitute seeded ones.
    """

    def __init__(
        self,
        store: MessageStore,
        simulator: Optional[ChannelDeliverySimulator] = None,
        id_factory: Callable[[], str] = new_message_id,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._simulator = simulator or ChannelDeliverySimulator()
        self._id_factory = id_factory
        self._clock = clock or _utcnow

    @property
    def store(self) -> MessageStore:
        return self._store

    def send_message(self, request: DispatchRequest) -> MessageRecord:
        """Deliver on every requested channel and store the resulting record.

        The record is built completely before it is inserted, so readers
        never observe a half-populated message. Channel failures are part
        of the record, not errors.
        """
        message_id = self._id_factory()
        created_at = self._clock()
        channel_status = {
            channel: self._simulator.deliver(channel)
            for channel in request.channels
        }
        outcomes = list(channel_status.values())
        status = aggregate_status(outcomes, total_channels=len(request.channels))
        analytics = compute_analytics(len(request.recipients), outcomes)
        record = MessageRecord(
            message_id=message_id,
            recipients=request.recipients,
            content=request.content,
            channels=request.channels,
            status=status,
            channel_status=channel_status,
            analytics=analytics,
            created_at=created_at,
            updated_at=created_at,
            priority=request.priority,
            category=request.category,
            delivered_at=self._clock() if status in _DELIVERED_STATUSES else None,
            template_id=request.template_id,
            template_variables=request.template_variables,
            scheduled_at=request.scheduled_at,
            webhook_url=request.webhook_url,
            mock_data=request.demo_mode,
        )
        self._store.put(message_id, record)
        logger.info(
            "Dispatched %s channels=%d recipients=%d status=%s",
            message_id,
            len(request.channels),
            len(request.recipients),
            status.value,
        )
        return record

    def get_message(self, message_id: str) -> Optional[MessageRecord]:
        return self._store.get(message_id)

    def list_messages(
        self,
        status: Union[MessageStatus, str, None] = None,
        category: Optional[str] = None,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> list[MessageRecord]:
        return query_messages(self._store.list_all(), status, category, page, size)

    def stats(self) -> dict[str, int]:
        return self._store.count_by_status()
