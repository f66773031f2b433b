"""CLI commands."""

from . import (
    get,
    init,
    list_messages,
    send,
    serve,
    stats,
)

__all__ = [
    "get",
    "init",
    "list_messages",
    "send",
    "serve",
    "stats",
]
