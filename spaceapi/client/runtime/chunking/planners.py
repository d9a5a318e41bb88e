"""Chunk planning for multi-value parameters.

Space limits how many values a multi-value filter may carry, so longer
lists are split into consecutive chunks, each fetched as its own paged
sub-request.
"""

from __future__ import annotations

from collections.abc import Sequence

from .definitions import ChunkPlan, ChunkPolicy
from .telemetry import log_chunk_plan


class ChunkPlanner:
    """Splits a multi-value parameter into chunk plans."""

    def __init__(self, policy: ChunkPolicy | None = None, endpoint_id: str = "unknown") -> None:
        self._policy = policy or ChunkPolicy()
        self._endpoint_id = endpoint_id

    def plan(self, key: str | None = None, values: Sequence[str] | None = None) -> list[ChunkPlan]:
        """Plan chunks for a request.

        Args:
            key: Multi-value parameter name, or None for a plain request
            values: Values of the multi-value parameter

        Returns:
            One plan per chunk, in value order. A plain request gets a
            single plan; an empty value list gets none.
        """
        if key is None:
            return [ChunkPlan(chunk_index=0)]

        values = tuple(values or ())
        size = self._policy.chunk_size
        plans = [
            ChunkPlan(chunk_index=index, key=key, values=values[start : start + size])
            for index, start in enumerate(range(0, len(values), size))
        ]

        log_chunk_plan(
            endpoint_id=self._endpoint_id,
            total_chunks=len(plans),
            chunk_size=size,
            total_values=len(values),
        )
        return plans
