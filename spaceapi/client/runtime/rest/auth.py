"""OAuth client-credentials token handling.

One ``TokenManager`` per client holds the bearer token. It is refreshed
lazily: before a call when it is missing or expired, and after the server
rejects it with a 401. Refreshes are serialized with an ``asyncio.Lock`` so
concurrent callers that see the same stale token trigger a single exchange.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from ...core.exceptions import AuthError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ServiceCredentials:
    """Client id and secret of a Space service account."""

    client_id: str
    client_secret: str = field(repr=False)

    def basic_authorization(self) -> str:
        raw = f"{self.client_id}:{self.client_secret}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")


@dataclass(frozen=True)
class BearerToken:
    """Access token with its expiry; no expiry means it must be refreshed."""

    value: str = field(repr=False)
    expires_at: datetime | None = None

    def expired(self, now: datetime) -> bool:
        return self.expires_at is None or now >= self.expires_at

    @classmethod
    def from_response(cls, payload: Any, now: datetime) -> BearerToken:
        """Parse ``{"access_token": ..., "expires_in": seconds}``.

        Raises:
            AuthError: If the payload is malformed
        """
        try:
            value = payload["access_token"]
            expires_in = int(payload["expires_in"])
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError(f"malformed token response: {e!r}") from e
        if not isinstance(value, str) or not value:
            raise AuthError("malformed token response: empty access_token")
        return cls(value=value, expires_at=now + timedelta(seconds=expires_in))


class TokenManager:
    """Process-wide bearer token slot of one client."""

    def __init__(
        self,
        exchange: Callable[[], Awaitable[Any]],
        *,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the token slot.

        Args:
            exchange: Coroutine function performing the token request and
                returning its parsed JSON body
            clock: Source of the current time
        """
        self._exchange = exchange
        self._clock = clock
        self._token: BearerToken | None = None
        self._lock = asyncio.Lock()
        self.refresh_count = 0

    @property
    def token(self) -> BearerToken | None:
        return self._token

    def _valid(self, token: BearerToken | None) -> bool:
        return token is not None and not token.expired(self._clock())

    async def get(self) -> BearerToken:
        """Current token, refreshed first if missing or expired."""
        token = self._token
        if self._valid(token):
            return token  # type: ignore[return-value]
        async with self._lock:
            if not self._valid(self._token):
                await self._refresh()
            return self._token  # type: ignore[return-value]

    async def refresh(self, stale: BearerToken | None = None) -> BearerToken:
        """Replace ``stale`` with a fresh token.

        If another caller already replaced ``stale`` while we waited for the
        lock, its token is returned instead of exchanging again.
        """
        async with self._lock:
            current = self._token
            if current is not None and current is not stale and self._valid(current):
                return current
            return await self._refresh()

    def invalidate(self) -> None:
        self._token = None

    async def _refresh(self) -> BearerToken:
        payload = await self._exchange()
        token = BearerToken.from_response(payload, self._clock())
        self._token = token
        self.refresh_count += 1
        logger.info(
            "token_refreshed",
            extra={
                "expires_at": token.expires_at.isoformat() if token.expires_at else None,
                "refresh_count": self.refresh_count,
            },
        )
        return token
