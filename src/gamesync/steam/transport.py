"""
HTTP transport boundary.

The client only needs a `fetch(url)` coroutine returning an object with
`ok`, `status` and an async `json()`. HttpxTransport is the default
implementation; tests and hosts may pass any compatible callable.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from gamesync.logger import get_logger


class TransportError(Exception):
    """Raised by a transport when no HTTP response could be obtained."""


class TransportResponse(Protocol):
    """Minimal response surface the client interprets."""

    @property
    def ok(self) -> bool: ...

    @property
    def status(self) -> int: ...

    async def json(self) -> Any: ...


Fetch = Callable[[str], Awaitable[TransportResponse]]


@dataclass(frozen=True)
class HttpxResponse:
    """Adapts an httpx.Response to the TransportResponse surface."""

    response: httpx.Response

    @property
    def ok(self) -> bool:
        return self.response.is_success

    @property
    def status(self) -> int:
        return self.response.status_code

    async def json(self) -> Any:
        return self.response.json()


class HttpxTransport:
    """
    Fetch implementation backed by httpx.AsyncClient.

    Example:
        >>> async with HttpxTransport(timeout=30) as fetch:
        ...     response = await fetch("https://api.steampowered.com/...")
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds
            client: Pre-built client (owned by the caller, never closed here)
        """
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._logger = get_logger(__name__, component="transport")

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={
                    "User-Agent": "GameSync/1.0",
                    "Accept": "application/json",
                },
            )
            self._owns_client = True
        return self._client

    async def __call__(self, url: str) -> HttpxResponse:
        try:
            response = await self.client.get(url)
        except httpx.TransportError as e:
            self._logger.debug("Transport failure", error_type=type(e).__name__)
            raise TransportError(str(e)) from e
        return HttpxResponse(response)

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
