"""In-memory message store shared by all requests."""
import logging
import threading
from typing import Optional

from src.delivery.errors import DuplicateMessageError, InvalidArgumentError
from src.delivery.models import MessageRecord, MessageStatus

logger = logging.getLogger(__name__)


class MessageStore:
    """Keeps every dispatched message for the lifetime of the process.

    One lock guards the underlying dict, so inserts, lookups and snapshots
    are safe from request threads and event-loop tasks alike. Records are
    immutable, so readers get the stored objects themselves.
    """

    def __init__(self) -> None:
        self._messages: dict[str, MessageRecord] = {}
        self._lock = threading.Lock()

    def put(self, message_id: str, record: MessageRecord) -> None:
        """Insert a record under a fresh id.

        Raises:
            InvalidArgumentError: If the id is empty or does not match the record.
            DuplicateMessageError: If the id is already taken.
        """
        if not message_id:
            raise InvalidArgumentError("message_id cannot be empty")
        if record.message_id != message_id:
            raise InvalidArgumentError(
                f"record id {record.message_id!r} does not match key {message_id!r}",
            )
        with self._lock:
            if message_id in self._messages:
                logger.warning("Rejected duplicate message id %s", message_id)
                raise DuplicateMessageError(message_id)
            self._messages[message_id] = record

    def get(self, message_id: str) -> Optional[MessageRecord]:
        """Return the record, or None if the id was never stored."""
        with self._lock:
            return self._messages.get(message_id)

    def list_all(self) -> list[MessageRecord]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._messages.values())

    def count_by_status(self) -> dict[str, int]:
        """Count records grouped by status, plus a 'total' key."""
        counts: dict[str, int] = {s.value: 0 for s in MessageStatus}
        for record in self.list_all():
            counts[record.status.value] += 1
        counts["total"] = sum(counts.values())
        return counts

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __contains__(self, message_id: object) -> bool:
        with self._lock:
            return message_id in self._messages
