"""Output formatting utilities."""

from .formatters import (
    format_error,
    format_key_value,
    format_message,
    format_success,
    format_table,
    styled_status,
)
from .json_output import json_output

__all__ = [
    "format_error",
    "format_key_value",
    "format_message",
    "format_success",
    "format_table",
    "styled_status",
    "json_output",
]
