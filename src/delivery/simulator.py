"""Simulated per-channel delivery with configurable success rates."""
import logging
import random
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from src.delivery.errors import InvalidArgumentError
from src.delivery.models import Channel, ChannelDeliveryState, ChannelOutcome

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_RATES: Mapping[Channel, float] = MappingProxyType({
    Channel.EMAIL: 0.95,
    Channel.SMS: 0.90,
    Channel.PUSH: 0.85,
    Channel.IN_APP: 0.98,
    Channel.WEBHOOK: 0.92,
})
DEFAULT_FALLBACK_RATE = 0.80
MAX_REPORTED_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_rate(name: str, rate: float) -> float:
    if not 0.0 <= rate <= 1.0:
        raise InvalidArgumentError(
            f"Success rate for {name} must be between 0 and 1, got {rate!r}",
        )
    return float(rate)


class ChannelDeliverySimulator:
    """Produces a delivery outcome for a channel without contacting anything.

    Each call to :meth:`deliver` draws once from ``rng``. A draw at or below
    the channel's success rate is a delivery; anything above is a failure
    reporting between 1 and 3 attempts. Failures are ordinary return values.

    Args:
        rng: Randomness source. Pass a seeded ``random.Random`` for
            reproducible runs.
        success_rates: Per-channel overrides merged over the defaults.
        default_rate: Rate used for identifiers outside the Channel set.
        clock: Returns the timestamp stamped on delivered outcomes.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        success_rates: Optional[Mapping[Channel, float]] = None,
        default_rate: float = DEFAULT_FALLBACK_RATE,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        rates = dict(DEFAULT_SUCCESS_RATES)
        for channel, rate in (success_rates or {}).items():
            rates[channel] = _check_rate(channel.value, rate)
        self._rates = rates
        self._default_rate = _check_rate("unrecognised channels", default_rate)
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock or _utcnow

    @staticmethod
    def _resolve(channel: Union[Channel, str]) -> Union[Channel, str]:
        if isinstance(channel, Channel):
            return channel
        try:
            return Channel(str(channel).lower())
        except ValueError:
            return channel

    def success_rate(self, channel: Union[Channel, str]) -> float:
        """Look up the success rate, falling back for unknown identifiers."""
        return self._rates.get(self._resolve(channel), self._default_rate)

    def deliver(self, channel: Union[Channel, str]) -> ChannelOutcome:
        channel = self._resolve(channel)
        rate = self.success_rate(channel)
        draw = self._rng.random()
        if draw <= rate:
            return ChannelOutcome(
                channel=channel,
                status=ChannelDeliveryState.DELIVERED,
                attempts=1,
                delivered_at=self._clock(),
            )
        name = channel.value if isinstance(channel, Channel) else channel
        attempts = self._rng.randint(1, MAX_REPORTED_ATTEMPTS)
        logger.debug(
            "Simulated %s delivery failed (draw=%.4f rate=%.2f attempts=%d)",
            name, draw, rate, attempts,
        )
        return ChannelOutcome(
            channel=channel,
            status=ChannelDeliveryState.FAILED,
            attempts=attempts,
            error_message=f"Simulated {name} delivery failure",
        )
