"""HTTP transport layer with retry logic for idempotent requests."""

import asyncio
import random
from typing import Any

import httpx

from .exceptions import HubRequestError, HubTransportError


class Transport:
    """Thin httpx wrapper. GETs are retried with backoff, POSTs never are."""

    def __init__(self, base_url: str, timeout: float = 30.0, max_retries: int = 3,
                 client_id: str = "hub-cli", transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._client_id = client_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "Transport":
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=httpx.Timeout(self._timeout),
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20), transport=self._transport)
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "X-Client-ID": self._client_id}

    def _backoff(self, attempt: int) -> float:
        delay = min(1.0 * (2 ** attempt), 30.0)
        return max(0.1, delay + delay * 0.25 * (2 * random.random() - 1))

    def _retryable(self, code: int) -> bool:
        return code in (408, 429, 500, 502, 503, 504)

    async def post(self, path: str, data: dict) -> tuple[int, Any]:
        if not self._client:
            raise HubTransportError("Transport not initialized")
        return await self._request("POST", path, data=data, attempts=1)

    async def get(self, path: str, params: dict | None = None) -> tuple[int, Any]:
        if not self._client:
            raise HubTransportError("Transport not initialized")
        return await self._request("GET", path, params=params, attempts=self._max_retries)

    async def _request(self, method: str, path: str, attempts: int, data: dict | None = None,
                       params: dict | None = None) -> tuple[int, Any]:
        last_err: Exception | None = None
        for i in range(attempts):
            try:
                resp = await self._client.request(method, path, json=data, params=params, headers=self._headers())
                if self._retryable(resp.status_code) and i < attempts - 1:
                    await asyncio.sleep(self._backoff(i))
                    continue
                try:
                    return resp.status_code, resp.json() if resp.content else None
                except ValueError:
                    return resp.status_code, None
            except (httpx.TimeoutException, httpx.RequestError) as e:
                last_err = e
                if i < attempts - 1:
                    await asyncio.sleep(self._backoff(i))
        raise HubTransportError(f"Request failed after {attempts} attempts: {last_err}")


def raise_for_error(status_code: int, body: Any) -> None:
    """Turn a non-2xx response into a HubRequestError."""
    if 200 <= status_code < 300:
        return
    code = None
    details = None
    message = f"Hub returned HTTP {status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code")
        details = error.get("details")
        message = error.get("message") or message
    elif isinstance(body, dict) and "detail" in body:
        code = "INVALID_FORMAT"
        details = {"validation_errors": body["detail"]}
        message = "Request validation failed"
    raise HubRequestError(message, status_code=status_code, code=code, details=details)
