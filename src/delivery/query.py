"""Filtering and pagination over stored messages."""
from typing import Iterable, Optional, Sequence, TypeVar, Union

from src.delivery.errors import InvalidArgumentError
from src.delivery.models import MessageRecord, MessageStatus

DEFAULT_PAGE_SIZE = 20

T = TypeVar("T")


def filter_messages(
    records: Iterable[MessageRecord],
    status: Union[MessageStatus, str, None] = None,
    category: Optional[str] = None,
) -> list[MessageRecord]:
    """Keep records matching every given filter.

    Matching is exact and case-sensitive. ``None`` or an empty string
    leaves that field unconstrained. An unknown status string simply
    matches nothing.
    """
    wanted_status = status.value if isinstance(status, MessageStatus) else status
    result = []
    for record in records:
        if wanted_status and record.status.value != wanted_status:
            continue
        if category and record.category != category:
            continue
        result.append(record)
    return result


def paginate(items: Sequence[T], page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """Return the zero-based ``page`` of ``size`` items, or [] past the end.

    Raises:
        InvalidArgumentError: If page is negative or size is not positive.
    """
    if page < 0:
        raise InvalidArgumentError(f"page must be zero or greater, got {page}")
    if size < 1:
        raise InvalidArgumentError(f"size must be a positive integer, got {size}")
    start = page * size
    if start >= len(items):
        return []
    return list(items[start:min(start + size, len(items))])


def query_messages(
    records: Iterable[MessageRecord],
    status: Union[MessageStatus, str, None] = None,
    category: Optional[str] = None,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
) -> list[MessageRecord]:
    return paginate(filter_messages(records, status, category), page, size)
