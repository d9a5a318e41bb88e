"""Date codecs for Space API payloads.

Space serializes dates either as ISO strings or as objects such as
``{"iso": "2020-07-21", "year": 2020, ...}``; timestamps come as
``{"iso": "...", "timestamp": 1595289600000}``.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def _unwrap_date(value: Any) -> Any:
    if isinstance(value, dict):
        if "iso" in value:
            return value["iso"]
        raise ValueError(f"date object without 'iso' field: {value!r}")
    return value


def _unwrap_datetime(value: Any) -> Any:
    if isinstance(value, dict):
        if "iso" in value:
            return value["iso"]
        if "timestamp" in value:
            return datetime.fromtimestamp(value["timestamp"] / 1000, tz=UTC)
        raise ValueError(f"datetime object without 'iso' or 'timestamp' field: {value!r}")
    return value


SpaceDate = Annotated[
    date,
    BeforeValidator(_unwrap_date),
    PlainSerializer(lambda d: d.isoformat(), return_type=str),
]

SpaceDateTime = Annotated[
    datetime,
    BeforeValidator(_unwrap_datetime),
    PlainSerializer(lambda d: d.isoformat(), return_type=str),
]


def format_date(value: date) -> str:
    """Format a date the way query parameters expect it (``YYYY-MM-DD``)."""
    return value.isoformat()
