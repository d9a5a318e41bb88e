"""Custom exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class SpaceError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidSelectionError(SpaceError, KeyError):
    """A field path does not exist in the response structure.

    Raised at request build time, before any network call is made.
    """

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)
        super().__init__(f"unknown field path: {'.'.join(self.path) or '<empty>'}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class StructureDiscoveryError(SpaceError, TypeError):
    """The structure of a type cannot be investigated."""

    pass


class ReservedParameterError(SpaceError, ValueError):
    """Special `$`-prefixed parameters are managed by the library."""

    def __init__(self, key: str) -> None:
        super().__init__(f"special parameter {key} can't be set directly")
        self.key = key


class MultipleMultiValueParametersError(SpaceError):
    """Only one multi-value parameter can be supplied per request."""

    def __init__(self, existing: str, key: str) -> None:
        super().__init__(
            f"only one multi-value parameter can be supplied: {existing!r} is already set, "
            f"got {key!r}"
        )
        self.existing = existing
        self.key = key


class TransportError(SpaceError):
    """Network-level failure while talking to the server.

    ``retryable`` marks benign conditions such as the server closing an idle
    keep-alive connection.
    """

    def __init__(self, message: str, *, url: str, retryable: bool = False) -> None:
        super().__init__(message)
        self.url = url
        self.retryable = retryable


class ApiError(SpaceError):
    """Unexpected HTTP response from the API."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        attempts: int = 1,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        self.attempts = attempts


class NotFoundError(ApiError):
    """The requested object does not exist (HTTP 404)."""

    pass


class TransientServerError(ApiError):
    """Rate limiting or server-side failure (HTTP 429 / 5xx)."""

    pass


class AuthError(ApiError):
    """Token exchange failed, or the server keeps rejecting fresh tokens."""

    pass


class RetriesExhaustedError(ApiError):
    """All retry attempts failed; carries the last observed response."""

    pass


class PaginationLimitError(SpaceError):
    """The server kept returning pages past the configured ceiling."""

    def __init__(self, message: str, *, max_pages: int, partial: list[Any]) -> None:
        super().__init__(message)
        self.max_pages = max_pages
        self.partial = partial


class BatchInterruptedError(SpaceError):
    """A batch was interrupted before all pages and chunks were fetched.

    ``partial`` holds whatever was collected so far. It is never returned as
    a complete result.
    """

    def __init__(self, message: str, *, partial: list[Any]) -> None:
        super().__init__(message)
        self.partial = partial
