"""Tests for delivery models."""
import pytest

from src.delivery.errors import InvalidArgumentError
from src.delivery.models import (
    Channel,
    ChannelDeliveryState,
    ChannelOutcome,
    DispatchRequest,
    MessageStatus,
    Priority,
    parse_channel,
    parse_priority,
)
from tests.conftest import FIXED_NOW


def _request(**kwargs) -> DispatchRequest:
    defaults = dict(
        recipients=("user@example.com",),
        content="Hello",
        channels=("email",),
    )
    defaults.update(kwargs)
    return DispatchRequest(**defaults)


class TestEnums:
    def test_wire_values(self) -> None:
        assert [c.value for c in Channel] == ["email", "sms", "push", "in_app", "webhook"]
        assert [p.value for p in Priority] == ["low", "normal", "high", "urgent"]
        assert [s.value for s in MessageStatus] == [
            "queued", "processing", "delivered", "partially_delivered", "failed",
        ]

    def test_parse_channel(self) -> None:
        assert parse_channel("push") is Channel.PUSH
        assert parse_channel(Channel.SMS) is Channel.SMS
        with pytest.raises(InvalidArgumentError, match="Unknown channel"):
            parse_channel("fax")

    def test_parse_priority(self) -> None:
        assert parse_priority(None) is Priority.NORMAL
        assert parse_priority("urgent") is Priority.URGENT
        with pytest.raises(InvalidArgumentError, match="Unknown priority"):
            parse_priority("critical")


class TestDispatchRequest:
    def test_normalises_fields(self) -> None:
        r = _request(recipients=["a@x.com", "b@x.com"], channels=["email", "sms", "email"], priority="high")
        assert r.recipients == ("a@x.com", "b@x.com")
        assert r.channels == (Channel.EMAIL, Channel.SMS)
        assert r.priority is Priority.HIGH

    def test_defaults(self) -> None:
        r = _request()
        assert r.priority is Priority.NORMAL
        assert r.category is None
        assert r.demo_mode is True

    @pytest.mark.parametrize("kwargs,match", [
        ({"recipients": ()}, "recipients"),
        ({"recipients": ("ok@x.com", "  ")}, "blank"),
        ({"content": ""}, "content"),
        ({"content": "   "}, "content"),
        ({"channels": ()}, "channels"),
        ({"channels": ("email", "fax")}, "Unknown channel"),
        ({"priority": "critical"}, "Unknown priority"),
    ])
    def test_rejects_malformed_input(self, kwargs: dict, match: str) -> None:
        with pytest.raises(InvalidArgumentError, match=match):
            _request(**kwargs)

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            _request(recipients=())

    def test_template_variables_are_copied(self) -> None:
        variables = {"name": "Ada"}
        r = _request(template_variables=variables)
        variables["name"] = "Grace"
        assert r.template_variables == {"name": "Ada"}
        with pytest.raises(TypeError):
            r.template_variables["name"] = "Grace"


class TestChannelOutcome:
    def test_delivered_requires_timestamp(self) -> None:
        with pytest.raises(InvalidArgumentError, match="delivered_at"):
            ChannelOutcome(Channel.EMAIL, ChannelDeliveryState.DELIVERED)

    def test_failed_requires_error_and_no_timestamp(self) -> None:
        with pytest.raises(InvalidArgumentError, match="error_message"):
            ChannelOutcome(Channel.EMAIL, ChannelDeliveryState.FAILED)
        with pytest.raises(InvalidArgumentError, match="delivered_at"):
            ChannelOutcome(Channel.EMAIL, ChannelDeliveryState.FAILED,
                           delivered_at=FIXED_NOW, error_message="x")

    def test_attempts_must_be_positive(self) -> None:
        with pytest.raises(InvalidArgumentError, match="attempts"):
            ChannelOutcome(Channel.EMAIL, ChannelDeliveryState.FAILED, attempts=0, error_message="x")

    def test_frozen(self) -> None:
        o = ChannelOutcome(Channel.EMAIL, ChannelDeliveryState.DELIVERED, delivered_at=FIXED_NOW)
        with pytest.raises(AttributeError):
            o.attempts = 2  # type: ignore[misc]
