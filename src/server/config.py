"""Server configuration."""
import logging
import os
import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from src.delivery.models import Channel
from src.delivery.simulator import DEFAULT_FALLBACK_RATE

logger = logging.getLogger(__name__)

SERVICE_VERSION = "2.0.0"

_RECOGNISED_BOOL_VALUES = frozenset(
    ("1", "true", "yes", "0", "false", "no")
)


@dataclass(frozen=True)
class SimulationConfig:
    """How the channel delivery simulator behaves.

    ``success_rates`` overrides the built-in per-channel table; channels
    not listed keep their default. ``seed`` makes a whole run reproducible.
    """

    success_rates: Mapping[Channel, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    default_rate: float = DEFAULT_FALLBACK_RATE
    seed: Optional[int] = None

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


@dataclass(frozen=True)
class PaginationConfig:
    default_page_size: int = 20
    max_page_size: int = 100


@dataclass(frozen=True)
class ServerConfig:
    service_name: str = "Messaging Hub"
    version: str = SERVICE_VERSION
    log_level: str = "INFO"
    request_logging: bool = True
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean environment variable with explicit default.

    Recognises ``true/1/yes`` and ``false/0/no`` (case-insensitive).
    Returns *default* when the value is empty or unset, and logs a warning
    for anything else.
    """
    if not value:
        return default
    normalised = value.lower()
    if normalised not in _RECOGNISED_BOOL_VALUES:
        logger.warning(
            "Unrecognised boolean value %r, using default %s. "
            "Expected one of: true/1/yes or false/0/no.",
            value,
            default,
        )
        return default
    return normalised in ("1", "true", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_rate(name: str) -> Optional[float]:
    raw = os.environ.get(name, "")
    if not raw:
        return None
    try:
        rate = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not 0.0 <= rate <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {rate}")
    return rate


def load_config_from_env() -> ServerConfig:
    overrides: dict[Channel, float] = {}
    for channel in Channel:
        rate = _env_rate(f"HUB_SUCCESS_RATE_{channel.name}")
        if rate is not None:
            overrides[channel] = rate
    default_rate = _env_rate("HUB_DEFAULT_SUCCESS_RATE")

    seed_raw = os.environ.get("HUB_SIMULATION_SEED", "")
    seed = _env_int("HUB_SIMULATION_SEED", 0) if seed_raw else None

    default_size = _env_int("HUB_DEFAULT_PAGE_SIZE", 20)
    max_size = _env_int("HUB_MAX_PAGE_SIZE", 100)
    if default_size < 1 or max_size < default_size:
        raise ValueError(
            "HUB_DEFAULT_PAGE_SIZE must be positive and not exceed HUB_MAX_PAGE_SIZE"
        )

    return ServerConfig(
        log_level=os.environ.get("HUB_LOG_LEVEL", "INFO").upper(),
        request_logging=_parse_bool(os.environ.get("HUB_REQUEST_LOGGING", ""), default=True),
        simulation=SimulationConfig(
            success_rates=MappingProxyType(overrides),
            default_rate=DEFAULT_FALLBACK_RATE if default_rate is None else default_rate,
            seed=seed,
        ),
        pagination=PaginationConfig(
            default_page_size=default_size,
            max_page_size=max_size,
        ),
    )
