"""Request builders for Space API calls.

A request is a mutable builder: parameters and field selections are added
with chainable methods, then ``execute()`` performs the call. Executing does
not consume the builder; it can be modified and executed again.

Example:
    >>> absences = await (
    ...     service.get_absences("All")
    ...     .add_parameter("since", date(2024, 1, 1))
    ...     .add_parameter_list("members", member_ids)
    ...     .add_field("member", "name")
    ...     .add_recursive_field("location", "parent")
    ...     .execute()
    ... )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import date
from types import MappingProxyType
from typing import Any, Generic, Self, TypeVar

from pydantic import TypeAdapter

from ..core.enums import HttpMethod
from ..core.exceptions import MultipleMultiValueParametersError, ReservedParameterError
from ..fields import DatatypeStructure, FieldSpecs, batch_structure, discover
from ..models.batch import BatchResponse
from ..runtime.chunking import (
    ChunkExecutor,
    ChunkPlan,
    ChunkPlanner,
    ChunkPolicy,
    PagePolicy,
)
from ..runtime.rest import RequestExecutor, stringify

T = TypeVar("T")

ParameterValue = str | bool | int | date

FIELDS_PARAMETER = "$fields"


def _check_key(key: str) -> None:
    if key.startswith("$"):
        raise ReservedParameterError(key)


class ApiRequest(ABC, Generic[T]):
    """Builder interface shared by all request kinds."""

    @abstractmethod
    def add_parameter(self, key: str, value: ParameterValue) -> Self:
        """Add a query parameter, e.g. ``add_parameter("since", date(2020, 7, 21))``.

        Dates are sent as ``YYYY-MM-DD`` and booleans as ``true``/``false``.

        Raises:
            ReservedParameterError: If ``key`` starts with ``$``
        """

    @abstractmethod
    def add_parameter_list(self, key: str, values: Iterable[ParameterValue]) -> Self:
        """Add a multi-value parameter, e.g. ``members=id1&members=id2``.

        Only one multi-value parameter per request can be specified.

        Raises:
            MultipleMultiValueParametersError: If one is already set
        """

    @abstractmethod
    def add_field(self, field_name: str, *field_names: str) -> Self:
        """Ask to receive a specific, possibly nested, field.

        Space serializes all immediate fields by default, but references only
        come with their ``id``. ``add_field("member", "location")`` gets the
        member's location embedded in the response.

        Raises:
            InvalidSelectionError: If the field does not exist
        """

    @abstractmethod
    def add_recursive_field(self, field_name: str, *field_names: str) -> Self:
        """Ask to receive a field recursively.

        ``add_field("parent")`` on a location serializes its parent, but the
        grandparent only comes with its ``id``. ``add_recursive_field("parent")``
        serializes the entire chain.

        Raises:
            InvalidSelectionError: If the field does not exist
        """

    @abstractmethod
    async def execute(self) -> T:
        """Execute the request and return the parsed result."""


class ObjectApiRequest(ApiRequest[T]):
    """Request returning a single object or a plain (non-batched) list."""

    def __init__(
        self,
        executor: RequestExecutor,
        endpoint: str,
        response_type: Any,
        *,
        method: str | HttpMethod = HttpMethod.GET,
        structure: DatatypeStructure | None = None,
    ) -> None:
        self._executor = executor
        self.endpoint = endpoint
        self.method = HttpMethod.from_str(method)
        self._adapter: TypeAdapter[T] = TypeAdapter(response_type)
        self._fields = FieldSpecs.for_structure(
            structure if structure is not None else discover(response_type)
        )
        self._parameters: dict[str, Any] = {}
        self._multi_key: str | None = None

    @property
    def parameters(self) -> Mapping[str, Any]:
        return MappingProxyType(self._parameters)

    @property
    def fields(self) -> FieldSpecs:
        return self._fields

    def add_parameter(self, key: str, value: ParameterValue) -> Self:
        _check_key(key)
        self._parameters[key] = stringify(value)
        return self

    def add_parameter_list(self, key: str, values: Iterable[ParameterValue]) -> Self:
        _check_key(key)
        if self._multi_key is not None:
            raise MultipleMultiValueParametersError(self._multi_key, key)
        self._multi_key = key
        self._parameters[key] = [stringify(value) for value in values]
        return self

    def add_field(self, field_name: str, *field_names: str) -> Self:
        self._fields.add_field(field_name, *field_names)
        return self

    def add_recursive_field(self, field_name: str, *field_names: str) -> Self:
        self._fields.add_recursive_field(field_name, *field_names)
        return self

    def build_parameters(self, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Parameters of one call: the template, ``extra`` overrides, and ``$fields``."""
        parameters = dict(self._parameters)
        if extra:
            parameters.update(extra)
        parameters[FIELDS_PARAMETER] = self._fields.serialize()
        return parameters

    async def execute_with(self, extra: Mapping[str, Any] | None = None) -> T:
        """Execute with per-call parameter overrides that are not kept in the template."""
        payload = await self._executor.execute(
            self.endpoint, self.method, self.build_parameters(extra)
        )
        return self._adapter.validate_python(payload)

    async def execute(self) -> T:
        return await self.execute_with()


class BatchApiRequest(ApiRequest[list[T]]):
    """Request against a cursor-paginated endpoint.

    The response envelope ``{next, totalCount, data}`` is handled
    transparently: field paths are rewritten under ``data``, every page is
    fetched, and a multi-value parameter longer than the chunk size is split
    into several sub-requests whose results are concatenated in order.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        endpoint: str,
        element_type: Any,
        *,
        method: str | HttpMethod = HttpMethod.GET,
        chunk_policy: ChunkPolicy | None = None,
        page_policy: PagePolicy | None = None,
    ) -> None:
        self._request: ObjectApiRequest[BatchResponse[Any]] = ObjectApiRequest(
            executor,
            endpoint,
            BatchResponse[element_type],
            method=method,
            structure=batch_structure(discover(element_type)),
        )
        self._chunk_policy = chunk_policy or ChunkPolicy()
        self._page_policy = page_policy or PagePolicy()
        self._multi_key: str | None = None
        self._multi_values: list[str] | None = None

    @property
    def endpoint(self) -> str:
        return self._request.endpoint

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._request.parameters

    @property
    def fields(self) -> FieldSpecs:
        return self._request.fields

    def add_parameter(self, key: str, value: ParameterValue) -> Self:
        self._request.add_parameter(key, value)
        return self

    def add_parameter_list(self, key: str, values: Iterable[ParameterValue]) -> Self:
        _check_key(key)
        if self._multi_key is not None:
            raise MultipleMultiValueParametersError(self._multi_key, key)
        self._multi_key = key
        self._multi_values = [stringify(value) for value in values]
        return self

    def add_field(self, field_name: str, *field_names: str) -> Self:
        self._request.add_field("data", field_name, *field_names)
        return self

    def add_recursive_field(self, field_name: str, *field_names: str) -> Self:
        self._request.add_recursive_field("data", field_name, *field_names)
        return self

    async def execute(self, *, timeout: float | None = None) -> list[T]:
        """Fetch every chunk and page.

        Args:
            timeout: Optional bound, in seconds, on the whole batch

        Raises:
            BatchInterruptedError: If ``timeout`` expires before completion
            PaginationLimitError: If the server never stops paging
        """
        planner = ChunkPlanner(self._chunk_policy, endpoint_id=self.endpoint)
        plans = planner.plan(self._multi_key, self._multi_values)
        executor = ChunkExecutor(self._page_policy, endpoint_id=self.endpoint)
        result = await executor.execute(plans=plans, fetch_page=self._fetch_page, timeout=timeout)
        return result.data

    async def _fetch_page(self, plan: ChunkPlan, cursor: str | None) -> BatchResponse[Any]:
        extra = plan.apply({})
        if cursor is not None:
            extra[self._page_policy.cursor_parameter] = cursor
        return await self._request.execute_with(extra)
