"""CLI utilities."""

from .config import ClientSettings, ConfigError, ConfigManager
from .validation import (
    parse_template_vars,
    validate_channels,
    validate_message_content,
    validate_priority,
    validate_recipients,
    validate_status,
    validate_url,
)

__all__ = [
    "ConfigManager",
    "ConfigError",
    "ClientSettings",
    "parse_template_vars",
    "validate_channels",
    "validate_message_content",
    "validate_priority",
    "validate_recipients",
    "validate_status",
    "validate_url",
]
