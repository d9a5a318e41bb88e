"""Core enums."""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods understood by the request executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def from_str(cls, value: str | HttpMethod) -> HttpMethod:
        """Normalize a method name, e.g. ``"get"`` -> ``HttpMethod.GET``."""
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value}") from None


class AuthScheme(str, Enum):
    """How a call is authorized."""

    BASIC = "basic"  # service credentials, used for the token exchange only
    BEARER = "bearer"
    NONE = "none"
