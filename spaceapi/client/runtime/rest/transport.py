"""HTTP transport.

The executor only needs one primitive: send a request, get back a status
and a body. ``Transport`` is that seam; ``AiohttpTransport`` is the default
implementation and tests substitute scripted fakes.
"""

from __future__ import annotations

import errno
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import aiohttp

from ...core.exceptions import TransportError


@dataclass(frozen=True)
class RawResponse:
    """Status, body and headers of one HTTP response."""

    status: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> RawResponse:
        """Perform one HTTP call.

        Raises:
            TransportError: On network failures; ``retryable`` is set for
                benign connection resets
        """
        ...

    async def close(self) -> None: ...


def _is_benign_reset(exc: BaseException) -> bool:
    """Server closed an idle keep-alive connection under our feet."""
    if isinstance(exc, (aiohttp.ServerDisconnectedError, ConnectionResetError)):
        return True
    return isinstance(exc, aiohttp.ClientOSError) and exc.errno == errno.ECONNRESET


class AiohttpTransport:
    """Transport over a lazily created ``aiohttp.ClientSession``."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> RawResponse:
        data = body.encode("utf-8") if body is not None else None
        try:
            async with self.session.request(
                method, url, headers=dict(headers), data=data
            ) as response:
                text = await response.text()
                return RawResponse(
                    status=response.status,
                    body=text,
                    headers=dict(response.headers),
                )
        except (aiohttp.ClientError, OSError) as e:
            raise TransportError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                url=url,
                retryable=_is_benign_reset(e),
            ) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> AiohttpTransport:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
