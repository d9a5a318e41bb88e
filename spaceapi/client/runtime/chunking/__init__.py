"""Chunking and paging layer for batch endpoints.

Architecture:
    - definitions.py: policies, chunk plans and results
    - planners.py: splits a multi-value parameter into chunks
    - executors.py: pages through each chunk and aggregates the results
    - telemetry.py: structured logging

Usage:
    Batch requests plan their chunks with ChunkPlanner, then hand the plans
    and a page-fetching coroutine to ChunkExecutor.
"""

from __future__ import annotations

from .definitions import ChunkPlan, ChunkPolicy, ChunkResult, PagePolicy
from .executors import ChunkExecutor
from .planners import ChunkPlanner

__all__ = [
    "ChunkPolicy",
    "PagePolicy",
    "ChunkPlan",
    "ChunkResult",
    "ChunkPlanner",
    "ChunkExecutor",
]
