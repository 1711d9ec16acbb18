"""HTTP client for a running relay's control plane."""

import os
from typing import Any

import httpx

DEFAULT_RELAY_URL = "http://localhost:3001"


class RelayClientError(Exception):
    """The relay could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def default_relay_url() -> str:
    return os.environ.get("RELAY_URL", DEFAULT_RELAY_URL)


class RelayClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RelayClient":
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=httpx.Timeout(self._timeout),
            transport=self._transport)
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def create_session(self) -> dict:
        return await self._request("POST", "/create-session")

    async def check_session(self, code: str) -> dict:
        return await self._request("GET", f"/check-session/{code}")

    async def health(self) -> dict:
        return await self._request("GET", "/health")

    async def _request(self, method: str, path: str) -> dict:
        if not self._client:
            raise RelayClientError("Client not initialized")
        try:
            resp = await self._client.request(method, path)
        except httpx.RequestError as e:
            raise RelayClientError(f"Cannot reach relay at {self._base_url}: {e}") from e
        if resp.status_code >= 400:
            raise RelayClientError(f"Relay answered {resp.status_code} for {method} {path}", resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise RelayClientError(f"Relay sent invalid JSON for {method} {path}", resp.status_code) from e
