"""Space service facade.

Architecture:
    SpaceService owns the transport, the bearer token slot and the request
    executor of one Space server, and hands out request builders. Endpoint
    methods map to API paths; required parameters are method arguments,
    optional ones are added on the returned builder.

    There are three kinds of GET queries, returning:
    - a single object: ``get()``
    - a plain list of objects: ``get_list()``
    - a batch (cursor-paginated list): ``get_batch()``

Example:
    >>> async with SpaceService.from_config(SpaceConfig.from_env()) as space:
    ...     holidays = await space.get_holidays().add_parameter("location", loc_id).execute()
"""

from __future__ import annotations

from datetime import date
from typing import Any, TypeVar

from ..core.config import SpaceConfig
from ..core.enums import HttpMethod
from ..models import (
    AbsenceRecord,
    BusinessEntity,
    BusinessEntityRelation,
    MemberLocation,
    MemberProfile,
    ProfileWorkingDays,
    PublicHoliday,
    WorkingDays,
)
from ..runtime.chunking import ChunkPolicy, PagePolicy
from ..runtime.rest import (
    AiohttpTransport,
    RequestExecutor,
    RetryPolicy,
    ServiceCredentials,
    Transport,
)
from .request import ApiRequest, BatchApiRequest, ObjectApiRequest

T = TypeVar("T")


class SpaceService:
    """Entry point for Space HTTP API calls."""

    def __init__(
        self,
        domain: str,
        client_id: str,
        client_secret: str,
        *,
        transport: Transport | None = None,
        retry_policy: RetryPolicy | None = None,
        chunk_policy: ChunkPolicy | None = None,
        page_policy: PagePolicy | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the service.

        Args:
            domain: Domain name of the Space server, e.g. "example.jetbrains.space"
            client_id: Service (client) id
            client_secret: Service secret
            transport: HTTP transport (defaults to an aiohttp-based one)
            retry_policy: Retry budget for transient failures
            chunk_policy: Chunk size for multi-value parameters
            page_policy: Cursor parameter and page ceiling of batch requests
            timeout: Per-call HTTP timeout of the default transport, in seconds
        """
        self.domain = domain
        self._owns_transport = transport is None
        self._transport: Transport = transport or AiohttpTransport(timeout=timeout)
        self._executor = RequestExecutor(
            f"https://{domain}",
            self._transport,
            ServiceCredentials(client_id, client_secret),
            retry_policy=retry_policy,
        )
        self._chunk_policy = chunk_policy or ChunkPolicy()
        self._page_policy = page_policy or PagePolicy()

    @classmethod
    def from_config(
        cls, config: SpaceConfig, *, transport: Transport | None = None
    ) -> SpaceService:
        return cls(
            config.domain,
            config.client_id,
            config.client_secret.get_secret_value(),
            transport=transport,
            retry_policy=RetryPolicy(
                max_attempts=config.max_attempts, base_delay=config.base_delay
            ),
            chunk_policy=ChunkPolicy(chunk_size=config.chunk_size),
            page_policy=PagePolicy(max_pages=config.max_pages),
            timeout=config.timeout,
        )

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    # Generic builders

    def get(self, endpoint: str, object_type: type[T]) -> ApiRequest[T]:
        """Request for an object from an arbitrary endpoint.

        Args:
            endpoint: API path, e.g. "/api/http/team-directory/profiles/id:abc"
            object_type: Expected response type, e.g. ``MemberProfile``
        """
        return ObjectApiRequest(self._executor, endpoint, object_type)

    def get_list(self, endpoint: str, element_type: type[T]) -> ApiRequest[list[T]]:
        """Request for a (non-batched) list from an arbitrary endpoint."""
        return ObjectApiRequest(
            self._executor,
            endpoint,
            list[element_type],  # type: ignore[valid-type]
            method=HttpMethod.GET,
        )

    def get_batch(self, endpoint: str, element_type: type[T]) -> BatchApiRequest[T]:
        """Request for a batched (paginated) list from an arbitrary endpoint."""
        return BatchApiRequest(
            self._executor,
            endpoint,
            element_type,
            chunk_policy=self._chunk_policy,
            page_policy=self._page_policy,
        )

    # Public holidays

    def get_holidays(self) -> BatchApiRequest[PublicHoliday]:
        """Public holidays.

        Optional parameters:
            - "startDate", inclusive, date
            - "endDate", inclusive, date
            - "location", id of a location; holidays of parent locations are included
        """
        return self.get_batch("/api/http/public-holidays/holidays", PublicHoliday)

    def get_profile_holidays(
        self, member_id: str, since: date, till: date
    ) -> ApiRequest[list[PublicHoliday]]:
        """Public holidays that apply to one member between two dates (inclusive)."""
        return (
            self.get_list("/api/http/public-holidays/holidays/profile-holidays", PublicHoliday)
            .add_parameter("startDate", since)
            .add_parameter("endDate", till)
            .add_parameter("profile", member_id)
        )

    # Absences

    def get_absences(self, view_mode: str = "All") -> BatchApiRequest[AbsenceRecord]:
        """Absence records.

        Optional filtering parameters: "member", "members" (multi-value),
        "location", "team", "since", "till", "reason".

        Args:
            view_mode: One of "All", "WithAccessibleReasonUnapproved",
                "WithAccessibleReasonAll"
        """
        return self.get_batch("/api/http/absences", AbsenceRecord).add_parameter(
            "viewMode", view_mode
        )

    # Team directory

    def get_profiles(self) -> BatchApiRequest[MemberProfile]:
        """Member profiles.

        Optional filtering parameters: "query", "reportPastMembers" (bool).
        """
        return self.get_batch("/api/http/team-directory/profiles", MemberProfile)

    def get_profile(self, member_id: str) -> ApiRequest[MemberProfile]:
        return self.get(f"/api/http/team-directory/profiles/id:{member_id}", MemberProfile)

    def get_member_locations(self) -> BatchApiRequest[MemberLocation]:
        return self.get_batch("/api/http/team-directory/member-locations", MemberLocation)

    def get_working_days(self, member_id: str | None = None) -> BatchApiRequest[Any]:
        """Working days of one member, or of every member when ``member_id`` is None."""
        if member_id is None:
            return self.get_batch(
                "/api/http/team-directory/profiles/working-days", ProfileWorkingDays
            )
        return self.get_batch(
            f"/api/http/team-directory/profiles/id:{member_id}/working-days", WorkingDays
        )

    # HRM

    def get_business_entities(self) -> ApiRequest[list[BusinessEntity]]:
        return self.get_list("/api/http/hrm/business-entities", BusinessEntity)

    def get_business_entity_relations(
        self, member_id: str | None = None
    ) -> ApiRequest[list[BusinessEntityRelation]]:
        """Business entity relations of one member, or all of them (batched)."""
        if member_id is None:
            return self.get_batch(
                "/api/http/hrm/business-entities/relations", BusinessEntityRelation
            )
        return self.get_list(
            f"/api/http/hrm/business-entities/relations/{member_id}", BusinessEntityRelation
        )

    async def close(self) -> None:
        """Close the transport if this service created it."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> SpaceService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
