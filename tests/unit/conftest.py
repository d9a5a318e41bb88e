"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from spaceapi.client.runtime.rest import (
    RawResponse,
    RequestExecutor,
    RetryPolicy,
    ServiceCredentials,
)

BASE_URL = "https://example.jetbrains.space"


@dataclass
class SentRequest:
    method: str
    url: str
    headers: dict[str, str]
    body: str | None

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.url).query)


def json_response(payload: Any, status: int = 200) -> RawResponse:
    return RawResponse(status=status, body=json.dumps(payload))


class FakeTransport:
    """Replays scripted responses; token requests are answered separately.

    Scripted items are RawResponse instances or exceptions to raise.
    """

    def __init__(self, responses=(), token_responses=None) -> None:
        self.responses = list(responses)
        self.token_responses = list(token_responses) if token_responses is not None else None
        self.calls: list[SentRequest] = []
        self.token_calls: list[SentRequest] = []
        self.closed = False

    def _next_token(self) -> Any:
        if self.token_responses is None:
            return json_response(
                {"access_token": f"token-{len(self.token_calls)}", "expires_in": 600}
            )
        return self.token_responses.pop(0)

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str | None = None,
    ) -> RawResponse:
        request = SentRequest(method, url, dict(headers), body)
        if urlsplit(url).path == "/oauth/token":
            self.token_calls.append(request)
            item = self._next_token()
        else:
            self.calls.append(request)
            item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_executor(sleep):
    """Factory for executors wired to a FakeTransport."""

    def factory(responses=(), token_responses=None, retry_policy=None, **kwargs):
        transport = FakeTransport(responses, token_responses)
        executor = RequestExecutor(
            BASE_URL,
            transport,
            ServiceCredentials("client", "secret"),
            retry_policy=retry_policy or RetryPolicy(),
            sleep=sleep,
            **kwargs,
        )
        return executor, transport

    return factory


@pytest.fixture
def transport_factory():
    """The FakeTransport class, for tests wiring their own client."""
    return FakeTransport
