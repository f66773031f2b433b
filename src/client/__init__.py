"""Messaging hub Python client library."""

from .client import HubClient
from .exceptions import HubError, HubRequestError, HubTransportError
from .transport import Transport

__all__ = [
    "HubClient", "Transport",
    "HubError", "HubRequestError", "HubTransportError",
]
