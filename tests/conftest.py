"""Pytest fixtures shared across the test suite."""
import random
from datetime import datetime, timezone
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from src.delivery.models import Channel
from src.delivery.service import MessagingService, new_message_id
from src.delivery.simulator import ChannelDeliverySimulator
from src.delivery.store import MessageStore
from src.server.app import create_app
from src.server.config import PaginationConfig, ServerConfig, SimulationConfig

FIXED_NOW = datetime(2026, 2, 5, 14, 30, tzinfo=timezone.utc)
ALWAYS = 0.0
NEVER = 0.999


class ScriptedRandom(random.Random):
    """Random source that replays fixed draws.

    ``random()`` returns the next value from ``draws``; ``randint()`` returns
    the next value from ``attempts`` (or the lower bound once exhausted).
    """

    def __init__(self, draws: Iterable[float] = (), attempts: Iterable[int] = ()) -> None:
        super().__init__(0)
        self._draws = list(draws)
        self._attempts = list(attempts)

    def random(self) -> float:
        if not self._draws:
            raise AssertionError("ScriptedRandom ran out of draws")
        return self._draws.pop(0)

    def randint(self, a: int, b: int) -> int:
        return self._attempts.pop(0) if self._attempts else a


def make_service(
    draws: Iterable[float] = (), attempts: Iterable[int] = (),
    store: MessageStore | None = None, message_id: str | None = None,
) -> MessagingService:
    simulator = ChannelDeliverySimulator(
        rng=ScriptedRandom(draws, attempts), clock=lambda: FIXED_NOW,
    )
    return MessagingService(
        store=store if store is not None else MessageStore(),
        simulator=simulator,
        clock=lambda: FIXED_NOW,
        id_factory=(lambda: message_id) if message_id else new_message_id,
    )


@pytest.fixture
def store() -> MessageStore:
    return MessageStore()


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(
        log_level="WARNING",
        simulation=SimulationConfig(seed=1234),
        pagination=PaginationConfig(default_page_size=20, max_page_size=50),
    )


@pytest.fixture
def always_deliver_config(server_config: ServerConfig) -> ServerConfig:
    """Config whose simulator delivers on every channel."""
    return ServerConfig(
        log_level=server_config.log_level,
        simulation=SimulationConfig(
            success_rates={c: 1.0 for c in Channel},
            default_rate=1.0,
            seed=1,
        ),
        pagination=server_config.pagination,
    )


@pytest.fixture
def client(always_deliver_config: ServerConfig) -> TestClient:
    app = create_app(always_deliver_config)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def valid_message() -> dict:
    return {
        "recipients": ["user@example.com", "admin@example.com"],
        "content": "Your order #12345 has been shipped!",
        "channels": ["email", "push"],
        "priority": "high",
        "category": "order_updates",
        "templateId": "order_shipped_template",
        "templateVariables": {"orderNumber": "12345"},
    }
