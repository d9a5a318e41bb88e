"""Chunk execution: page through every chunk and aggregate the results.

For each chunk plan the executor fetches the first page, then keeps asking
for the next one with the cursor parameter set to the last returned cursor,
while the cursor still moves and the declared total has not been reached.
Results are concatenated in chunk order, then page order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from time import perf_counter
from typing import Any

from ...core.exceptions import BatchInterruptedError, PaginationLimitError
from ...models.batch import BatchResponse
from .definitions import ChunkPlan, ChunkResult, PagePolicy
from .telemetry import (
    log_chunk_completed,
    log_chunk_error,
    log_chunk_execution_complete,
    log_page_fetched,
)

FetchPage = Callable[[ChunkPlan, str | None], Awaitable[BatchResponse[Any]]]


class ChunkExecutor:
    """Executes chunk plans and aggregates paged results."""

    def __init__(self, policy: PagePolicy | None = None, endpoint_id: str = "unknown") -> None:
        """Initialize chunk executor.

        Args:
            policy: Paging policy (cursor parameter, page ceiling)
            endpoint_id: Endpoint identifier used in telemetry
        """
        self._policy = policy or PagePolicy()
        self._endpoint_id = endpoint_id

    async def execute(
        self,
        *,
        plans: list[ChunkPlan],
        fetch_page: FetchPage,
        timeout: float | None = None,
    ) -> ChunkResult:
        """Execute chunk plans and aggregate results.

        Args:
            plans: Chunk plans to execute, in order
            fetch_page: Async function fetching one page of a chunk; the
                second argument is the cursor (None for the first page)
            timeout: Optional bound, in seconds, on the whole execution

        Returns:
            ChunkResult with aggregated data and metadata

        Raises:
            BatchInterruptedError: If ``timeout`` expires; carries the partial data
            PaginationLimitError: If a chunk exceeds the page ceiling
        """
        aggregated: list[Any] = []
        chunks_used = 0
        pages_fetched = 0
        start = perf_counter()

        deadline = asyncio.timeout(timeout)
        try:
            async with deadline:
                for plan in plans:
                    chunk_start = perf_counter()
                    before = len(aggregated)
                    try:
                        pages = await self._paginate(plan, fetch_page, aggregated)
                    except Exception as e:
                        log_chunk_error(
                            endpoint_id=self._endpoint_id,
                            chunk_index=plan.chunk_index,
                            error=e,
                            rows_collected=len(aggregated) - before,
                        )
                        raise
                    chunks_used += 1
                    pages_fetched += pages
                    log_chunk_completed(
                        endpoint_id=self._endpoint_id,
                        chunk_index=plan.chunk_index,
                        rows_aggregated=len(aggregated) - before,
                        pages=pages,
                        latency_ms=(perf_counter() - chunk_start) * 1000.0,
                    )
        except TimeoutError as e:
            if not deadline.expired():
                raise
            raise BatchInterruptedError(
                f"batch {self._endpoint_id} timed out after {timeout}s "
                f"with {len(aggregated)} items fetched",
                partial=aggregated,
            ) from e

        result = ChunkResult(data=aggregated, chunks_used=chunks_used, pages_fetched=pages_fetched)
        log_chunk_execution_complete(
            endpoint_id=self._endpoint_id,
            result=result,
            total_latency_ms=(perf_counter() - start) * 1000.0,
        )
        return result

    async def _paginate(
        self,
        plan: ChunkPlan,
        fetch_page: FetchPage,
        aggregated: list[Any],
    ) -> int:
        """Fetch every page of one chunk into ``aggregated``; returns the page count."""
        page = await fetch_page(plan, None)
        pages = 1
        collected = len(page.data)
        aggregated.extend(page.data)
        self._log_page(plan, pages, page)

        previous: str | None = None
        while page.next != previous and (
            page.total_count is None or collected < page.total_count
        ):
            if pages >= self._policy.max_pages:
                raise PaginationLimitError(
                    f"batch {self._endpoint_id} exceeded {self._policy.max_pages} pages "
                    f"(collected {collected} of {page.total_count})",
                    max_pages=self._policy.max_pages,
                    partial=aggregated,
                )
            previous = page.next
            page = await fetch_page(plan, previous)
            pages += 1
            collected += len(page.data)
            aggregated.extend(page.data)
            self._log_page(plan, pages, page)
        return pages

    def _log_page(self, plan: ChunkPlan, page_index: int, page: BatchResponse[Any]) -> None:
        log_page_fetched(
            endpoint_id=self._endpoint_id,
            chunk_index=plan.chunk_index,
            page_index=page_index,
            rows=len(page.data),
            total_count=page.total_count,
            cursor=page.next,
        )
