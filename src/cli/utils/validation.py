"""Input validation utilities for CLI commands."""

from src.delivery.models import Channel, MessageStatus, Priority

_CHANNEL_VALUES = tuple(c.value for c in Channel)
_PRIORITY_VALUES = tuple(p.value for p in Priority)
_STATUS_VALUES = tuple(s.value for s in MessageStatus)


def validate_url(url: str) -> str:
    """Validate and return a hub base URL. Raises ValueError if invalid."""
    if not url or not url.strip():
        raise ValueError("Hub URL cannot be empty")
    url = url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError("Hub URL must start with http:// or https://")
    if len(url) > 2048:
        raise ValueError("Hub URL cannot exceed 2048 characters")
    return url


def validate_recipients(recipients: list[str] | None) -> list[str]:
    """Strip recipients and drop blanks. Raises ValueError if none remain."""
    cleaned = [r.strip() for r in recipients or [] if r and r.strip()]
    if not cleaned:
        raise ValueError("At least one recipient is required")
    return cleaned


def validate_channels(channels: list[str] | None) -> list[str]:
    """Normalise channel names. Raises ValueError on unknown channels."""
    if not channels:
        raise ValueError("At least one channel is required")
    result = []
    for raw in channels:
        name = raw.strip().lower()
        if name not in _CHANNEL_VALUES:
            raise ValueError(
                f"Unknown channel '{raw}'. Expected one of: {', '.join(_CHANNEL_VALUES)}"
            )
        if name not in result:
            result.append(name)
    return result


def validate_priority(priority: str) -> str:
    name = priority.strip().lower()
    if name not in _PRIORITY_VALUES:
        raise ValueError(
            f"Unknown priority '{priority}'. Expected one of: {', '.join(_PRIORITY_VALUES)}"
        )
    return name


def validate_status(status: str) -> str:
    """Validate a status filter. Status matching is exact, so no case folding."""
    if status not in _STATUS_VALUES:
        raise ValueError(
            f"Unknown status '{status}'. Expected one of: {', '.join(_STATUS_VALUES)}"
        )
    return status


def validate_message_content(content: str) -> str:
    """Validate and return message content. Raises ValueError if invalid."""
    if not content or not content.strip():
        raise ValueError("Message content cannot be empty")
    if len(content) > 65536:
        raise ValueError("Message content cannot exceed 65536 characters")
    return content


def parse_template_vars(pairs: list[str] | None) -> dict[str, str] | None:
    """Parse KEY=VALUE pairs into a dict. Raises ValueError on bad pairs."""
    if not pairs:
        return None
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Template variable must be KEY=VALUE, got '{pair}'")
        result[key.strip()] = value
    return result
