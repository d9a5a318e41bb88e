"""Structured logging for chunking and paging operations."""

from __future__ import annotations

import logging

from .definitions import ChunkResult

logger = logging.getLogger(__name__)


def log_chunk_plan(
    *,
    endpoint_id: str,
    total_chunks: int,
    chunk_size: int,
    total_values: int | None = None,
) -> None:
    """Log chunk plan creation.

    Args:
        endpoint_id: Endpoint identifier
        total_chunks: Total number of chunks planned
        chunk_size: Maximum values per chunk
        total_values: Number of multi-value parameter values, if any
    """
    logger.info(
        "chunk_plan_created",
        extra={
            "endpoint_id": endpoint_id,
            "total_chunks": total_chunks,
            "chunk_size": chunk_size,
            "total_values": total_values,
        },
    )


def log_chunk_completed(
    *,
    endpoint_id: str,
    chunk_index: int,
    rows_aggregated: int,
    pages: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk, with all its pages."""
    logger.info(
        "chunk_completed",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "rows_aggregated": rows_aggregated,
            "pages": pages,
            "latency_ms": latency_ms,
        },
    )


def log_page_fetched(
    *,
    endpoint_id: str,
    chunk_index: int,
    page_index: int,
    rows: int,
    total_count: int | None,
    cursor: str,
) -> None:
    logger.debug(
        "page_fetched",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "page_index": page_index,
            "rows": rows,
            "total_count": total_count,
            "cursor": cursor,
        },
    )


def log_chunk_execution_complete(
    *,
    endpoint_id: str,
    result: ChunkResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of chunk execution."""
    logger.info(
        "chunk_execution_complete",
        extra={
            "endpoint_id": endpoint_id,
            "chunks_used": result.chunks_used,
            "pages_fetched": result.pages_fetched,
            "total_points": result.total_points,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_chunk_error(
    *,
    endpoint_id: str,
    chunk_index: int,
    error: Exception,
    rows_collected: int,
) -> None:
    """Log a chunk that failed and aborted the batch.

    Args:
        endpoint_id: Endpoint identifier
        chunk_index: Zero-based index of the chunk that failed
        error: The exception raised while paging the chunk
        rows_collected: Rows of this chunk fetched before the failure
    """
    logger.error(
        "chunk_error",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "status_code": getattr(error, "status_code", None),
            "rows_collected": rows_collected,
        },
    )
