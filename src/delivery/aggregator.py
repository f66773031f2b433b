"""Overall message status from per-channel outcomes."""
from typing import Collection, Optional

from src.delivery.models import ChannelDeliveryState, ChannelOutcome, MessageStatus


def count_outcomes(outcomes: Collection[ChannelOutcome]) -> tuple[int, int]:
    """Return (delivered, failed) channel counts."""
    delivered = sum(1 for o in outcomes if o.status is ChannelDeliveryState.DELIVERED)
    failed = sum(1 for o in outcomes if o.status is ChannelDeliveryState.FAILED)
    return delivered, failed


def aggregate_status(
    outcomes: Collection[ChannelOutcome],
    total_channels: Optional[int] = None,
) -> MessageStatus:
    """Combine channel outcomes into one status.

    Precedence: every channel delivered -> DELIVERED; some delivered ->
    PARTIALLY_DELIVERED; none delivered and every channel failed -> FAILED;
    otherwise PROCESSING. ``total_channels`` defaults to the number of
    outcomes; pass the requested channel count when some are unresolved.
    """
    total = len(outcomes) if total_channels is None else total_channels
    delivered, failed = count_outcomes(outcomes)
    if total > 0 and delivered == total:
        return MessageStatus.DELIVERED
    if 0 < delivered < total:
        return MessageStatus.PARTIALLY_DELIVERED
    if total > 0 and delivered == 0 and failed == total:
        return MessageStatus.FAILED
    return MessageStatus.PROCESSING
