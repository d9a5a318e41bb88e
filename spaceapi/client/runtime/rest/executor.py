"""Request executor: one logical API call with auth and retries.

Architecture:
    execute() builds the HTTP request (query string for GET, JSON body
    otherwise), attaches the authorization header and drives the attempt
    loop:

    - 200: parse JSON and return
    - 401: refresh the bearer token and repeat the call; does not consume
      the backoff budget but is bounded by ``max_auth_refreshes``
    - 404: NotFoundError, never retried
    - 429 / 5xx / benign connection reset: sleep with exponential backoff
      and retry up to ``max_attempts``
      (a 429 waits at least as long as its ``Retry-After`` header asks)
    - anything else: ApiError with the response attached

    Exceeding ``max_attempts`` raises RetriesExhaustedError chained to the
    last transient failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from ...core.config import TOKEN_ENDPOINT, TOKEN_REQUEST_BODY
from ...core.enums import AuthScheme, HttpMethod
from ...core.exceptions import (
    ApiError,
    AuthError,
    NotFoundError,
    RetriesExhaustedError,
    TransientServerError,
    TransportError,
)
from .auth import Clock, ServiceCredentials, TokenManager, utc_now
from .query import to_json_body, to_query_string
from .transport import RawResponse, Transport

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

_BODY_PREVIEW = 500


@dataclass(frozen=True)
class RetryPolicy:
    """Retry budget for transient failures.

    Attributes:
        max_attempts: Total attempts per call, including the first one
        base_delay: Delay before the first retry, doubled for each further retry
        max_auth_refreshes: Token refreshes allowed per call after a 401
    """

    max_attempts: int = 3
    base_delay: float = 0.2
    max_auth_refreshes: int = 1

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("RetryPolicy max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("RetryPolicy base_delay cannot be negative")
        if self.max_auth_refreshes < 0:
            raise ValueError("RetryPolicy max_auth_refreshes cannot be negative")

    def delay(self, attempt: int) -> float:
        """Backoff after the given (1-based) failed attempt."""
        return self.base_delay * 2 ** (attempt - 1)


def is_transient_status(status: int) -> bool:
    return status == 429 or 500 <= status < 600


def retry_after(headers: Mapping[str, str]) -> float | None:
    """Seconds from a numeric ``Retry-After`` header, if the server sent one."""
    for name, value in headers.items():
        if name.lower() != "retry-after":
            continue
        try:
            seconds = float(value)
        except ValueError:
            return None
        return seconds if seconds >= 0 else None
    return None


class RequestExecutor:
    """Issues API calls against one Space server."""

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        credentials: ServiceCredentials | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = utc_now,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._credentials = credentials
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._tokens = TokenManager(self._exchange_token, clock=clock)

    @property
    def tokens(self) -> TokenManager:
        return self._tokens

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def url_for(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def execute(
        self,
        endpoint: str,
        method: str | HttpMethod = HttpMethod.GET,
        parameters: Mapping[str, Any] | None = None,
        *,
        auth: AuthScheme = AuthScheme.BEARER,
    ) -> Any:
        """Execute one API call and return its parsed JSON body.

        Args:
            endpoint: Path such as ``/api/http/absences`` (or an absolute URL)
            method: HTTP method
            parameters: Query parameters for GET, JSON body fields otherwise
            auth: Authorization scheme of the call

        Raises:
            NotFoundError: On 404
            AuthError: If no token can be obtained or the server keeps rejecting it
            RetriesExhaustedError: If transient failures outlast the retry budget
            ApiError: On any other unexpected response
            TransportError: On non-benign network failures
        """
        method = HttpMethod.from_str(method)
        parameters = parameters or {}
        url = self.url_for(endpoint)
        headers = {"Accept": "application/json"}
        body: str | None = None
        if method is HttpMethod.GET:
            url += to_query_string(parameters)
        else:
            body = to_json_body(parameters)
            if body is not None:
                headers["Content-Type"] = "application/json"
        return await self._send(method, url, headers, body, auth)

    async def _exchange_token(self) -> Any:
        if self._credentials is None:
            raise AuthError("bearer authorization requires service credentials")
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        url = self.url_for(TOKEN_ENDPOINT)
        try:
            return await self._send(
                HttpMethod.POST, url, headers, TOKEN_REQUEST_BODY, AuthScheme.BASIC
            )
        except AuthError:
            raise
        except ApiError as e:
            raise AuthError(
                f"token exchange failed: {e}",
                url=e.url,
                status_code=e.status_code,
                body=e.body,
                attempts=e.attempts,
            ) from e

    async def _authorization(self, auth: AuthScheme) -> tuple[str | None, Any]:
        if auth is AuthScheme.BEARER:
            token = await self._tokens.get()
            return f"Bearer {token.value}", token
        if auth is AuthScheme.BASIC:
            if self._credentials is None:
                raise AuthError("basic authorization requires service credentials")
            return self._credentials.basic_authorization(), None
        return None, None

    async def _send(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        body: str | None,
        auth: AuthScheme,
    ) -> Any:
        policy = self._retry_policy
        attempt = 1
        calls = 0
        auth_refreshes = 0
        last_failure: TransientServerError | TransportError | None = None
        last_response: RawResponse | None = None
        server_delay: float | None = None

        while True:
            authorization, token = await self._authorization(auth)
            request_headers = dict(headers)
            if authorization is not None:
                request_headers["Authorization"] = authorization

            calls += 1
            start = perf_counter()
            try:
                response = await self._transport.send(
                    method.value, url, headers=request_headers, body=body
                )
            except TransportError as e:
                self._log_attempt(method, url, attempt, None, start, "transport_error")
                if not e.retryable:
                    raise
                last_failure, last_response, server_delay = e, None, None
            else:
                status = response.status
                if status == 200:
                    self._log_attempt(method, url, attempt, status, start, "success")
                    return self._parse(response, url, calls)

                if status == 401:
                    self._log_attempt(method, url, attempt, status, start, "unauthorized")
                    if auth is AuthScheme.BEARER and auth_refreshes < policy.max_auth_refreshes:
                        auth_refreshes += 1
                        await self._tokens.refresh(stale=token)
                        continue
                    raise AuthError(
                        f"{method.value} {url} was rejected with 401",
                        url=url,
                        status_code=status,
                        body=response.body,
                        attempts=calls,
                    )

                if status == 404:
                    self._log_attempt(method, url, attempt, status, start, "not_found")
                    raise NotFoundError(
                        f"object not found: {method.value} {url}",
                        url=url,
                        status_code=status,
                        body=response.body,
                        attempts=calls,
                    )

                if not is_transient_status(status):
                    self._log_attempt(method, url, attempt, status, start, "fatal")
                    raise ApiError(
                        f"{method.value} {url} returned unexpected status {status}: "
                        f"{response.body[:_BODY_PREVIEW]}",
                        url=url,
                        status_code=status,
                        body=response.body,
                        attempts=calls,
                    )

                self._log_attempt(method, url, attempt, status, start, "retryable")
                last_response = response
                server_delay = retry_after(response.headers) if status == 429 else None
                last_failure = TransientServerError(
                    f"{method.value} {url} returned {status}",
                    url=url,
                    status_code=status,
                    body=response.body,
                    attempts=calls,
                )

            if attempt >= policy.max_attempts:
                raise RetriesExhaustedError(
                    f"{method.value} {url} failed after {attempt} attempts: {last_failure}",
                    url=url,
                    status_code=last_response.status if last_response else None,
                    body=last_response.body if last_response else None,
                    attempts=calls,
                ) from last_failure

            delay = policy.delay(attempt)
            if server_delay is not None:
                delay = max(delay, server_delay)
            logger.warning(
                "http_retry",
                extra={
                    "method": method.value,
                    "url": url,
                    "attempt": attempt,
                    "delay_s": delay,
                    "reason": str(last_failure),
                },
            )
            await self._sleep(delay)
            attempt += 1

    def _parse(self, response: RawResponse, url: str, calls: int) -> Any:
        if not response.body:
            return None
        try:
            return json.loads(response.body)
        except ValueError as e:
            raise ApiError(
                f"invalid JSON from {url}: {e}",
                url=url,
                status_code=response.status,
                body=response.body,
                attempts=calls,
            ) from e

    def _log_attempt(
        self,
        method: HttpMethod,
        url: str,
        attempt: int,
        status: int | None,
        start: float,
        outcome: str,
    ) -> None:
        logger.debug(
            "http_attempt",
            extra={
                "method": method.value,
                "url": url,
                "attempt": attempt,
                "status": status,
                "latency_ms": (perf_counter() - start) * 1000.0,
                "outcome": outcome,
            },
        )
