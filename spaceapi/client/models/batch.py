"""Batch envelope of cursor-paginated collection endpoints."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BatchResponse(BaseModel, Generic[T]):
    """One page of a collection result.

    ``next`` is the cursor to pass as ``$skip`` to get the following page.
    """

    next: str
    total_count: int | None = Field(None, alias="totalCount")
    data: list[T] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
