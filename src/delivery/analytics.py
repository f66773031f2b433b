"""Delivery analytics for a dispatched message."""
from typing import Collection

from src.delivery.aggregator import count_outcomes
from src.delivery.errors import InvalidArgumentError
from src.delivery.models import ChannelOutcome, DeliveryAnalytics


def compute_analytics(
    recipient_count: int, outcomes: Collection[ChannelOutcome],
) -> DeliveryAnalytics:
    """Scale channel counts by the number of recipients.

    Every channel is simulated once for the whole recipient list, so a
    channel outcome counts once per recipient. Pending stays zero because
    dispatch resolves every channel before analytics are computed.
    """
    if recipient_count < 0:
        raise InvalidArgumentError(f"recipient_count cannot be negative, got {recipient_count}")
    delivered, failed = count_outcomes(outcomes)
    total = recipient_count * len(outcomes)
    delivered_total = delivered * recipient_count
    failed_total = failed * recipient_count
    return DeliveryAnalytics(
        total_recipients=total,
        delivered=delivered_total,
        failed=failed_total,
        pending=total - delivered_total - failed_total,
    )
