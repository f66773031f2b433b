"""Async client for the messaging hub HTTP API."""

from __future__ import annotations

from typing import Any, Sequence

import httpx

from .exceptions import HubRequestError
from .transport import Transport, raise_for_error


class HubClient:
    """Client for the messaging hub. Must be used as async context manager.

    ``transport`` is handed to httpx, so tests can pass an
    ``httpx.ASGITransport`` wrapping an in-process app.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, max_retries: int = 3,
                 transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url
        self._transport = Transport(base_url, timeout, max_retries, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "HubClient":
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        await self._transport.__aexit__(*args)

    async def send_message(self, recipients: Sequence[str], content: str, channels: Sequence[str],
                           priority: str = "normal", category: str | None = None,
                           template_id: str | None = None, template_variables: dict[str, Any] | None = None,
                           scheduled_at: str | None = None, webhook_url: str | None = None) -> dict:
        body: dict[str, Any] = {"recipients": list(recipients), "content": content,
                                "channels": list(channels), "priority": priority}
        optional = {"category": category, "templateId": template_id, "templateVariables": template_variables,
                    "scheduledAt": scheduled_at, "webhookUrl": webhook_url}
        body.update({k: v for k, v in optional.items() if v is not None})
        status_code, data = await self._transport.post("/v2/messages", body)
        raise_for_error(status_code, data)
        return data

    async def get_message(self, message_id: str) -> dict | None:
        """Fetch one message, or None if the hub does not know the id."""
        status_code, data = await self._transport.get(f"/v2/messages/{message_id}")
        if status_code == 404:
            return None
        raise_for_error(status_code, data)
        return data

    async def list_messages(self, status: str | None = None, category: str | None = None,
                            page: int = 0, size: int = 20) -> list[dict]:
        params: dict[str, Any] = {"page": page, "size": size}
        if status:
            params["status"] = status
        if category:
            params["category"] = category
        status_code, data = await self._transport.get("/v2/messages", params=params)
        raise_for_error(status_code, data)
        if not isinstance(data, list):
            raise HubRequestError("Unexpected response body for message listing", status_code=status_code)
        return data

    async def stats(self) -> dict[str, int]:
        status_code, data = await self._transport.get("/v2/stats")
        raise_for_error(status_code, data)
        return data
