"""Chunking and paging metadata definitions.

This module defines the data structures used to describe how a batch
request is split into chunks (multi-value parameters) and pages (cursor
continuation), and what the aggregated result looks like.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking policy for multi-value parameters.

    Attributes:
        chunk_size: Maximum number of values sent in one sub-request
    """

    chunk_size: int = 20

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError("ChunkPolicy chunk_size must be at least 1")


@dataclass(frozen=True)
class PagePolicy:
    """Paging policy for cursor-based batch endpoints.

    Attributes:
        cursor_parameter: Query parameter carrying the previous cursor
        max_pages: Ceiling on pages fetched per chunk, guarding against a
            server that never reaches its declared total
    """

    cursor_parameter: str = "$skip"
    max_pages: int = 1000

    def __post_init__(self) -> None:
        if self.max_pages < 1:
            raise ValueError("PagePolicy max_pages must be at least 1")


@dataclass(frozen=True)
class ChunkPlan:
    """Plan for a single chunk.

    Attributes:
        chunk_index: Zero-based index of this chunk in the overall plan
        key: Multi-value parameter name (None when the request has none)
        values: Values of the multi-value parameter sent with this chunk
    """

    chunk_index: int = 0
    key: str | None = None
    values: tuple[str, ...] | None = None

    def apply(self, parameters: dict[str, Any]) -> dict[str, Any]:
        """Copy of ``parameters`` with this chunk's values substituted."""
        result = dict(parameters)
        if self.key is not None:
            result[self.key] = list(self.values or ())
        return result


@dataclass
class ChunkResult:
    """Result of chunked execution.

    Attributes:
        data: Aggregated elements from all chunks and pages, in order
        chunks_used: Number of chunks that were fetched
        pages_fetched: Number of HTTP pages fetched across all chunks
    """

    data: list[Any]
    chunks_used: int
    pages_fetched: int = 0

    @property
    def total_points(self) -> int:
        return len(self.data)
