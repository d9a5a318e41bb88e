"""Unit tests for the SpaceService facade."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock

import pytest

from spaceapi.client.api import BatchApiRequest, ObjectApiRequest, SpaceService
from spaceapi.client.core import SpaceConfig
from spaceapi.client.runtime.rest import AiohttpTransport, RawResponse


def ok(payload) -> RawResponse:
    return RawResponse(200, json.dumps(payload))


@pytest.fixture
def service(transport_factory):
    def factory(responses=()):
        transport = transport_factory(responses)
        space = SpaceService("example.jetbrains.space", "client", "secret", transport=transport)
        return space, transport

    return factory


class TestSpaceServiceConstruction:
    """Test SpaceService wiring."""

    def test_base_url(self, service):
        space, _ = service()
        assert space.executor.base_url == "https://example.jetbrains.space"

    def test_from_config(self, transport_factory):
        config = SpaceConfig(
            domain="https://example.jetbrains.space",
            client_id="client",
            client_secret="secret",
            max_attempts=5,
            base_delay=0.5,
        )
        space = SpaceService.from_config(config, transport=transport_factory())

        assert space.domain == "example.jetbrains.space"
        assert space.executor.retry_policy.max_attempts == 5
        assert space.executor.retry_policy.base_delay == 0.5

    def test_default_transport(self):
        space = SpaceService("example.jetbrains.space", "client", "secret")
        assert isinstance(space._transport, AiohttpTransport)

    @pytest.mark.asyncio
    async def test_injected_transport_is_not_closed(self, service):
        space, transport = service()
        async with space:
            pass
        assert not transport.closed

    @pytest.mark.asyncio
    async def test_owned_transport_is_closed(self):
        space = SpaceService("example.jetbrains.space", "client", "secret")
        space._transport.close = AsyncMock()

        await space.close()

        space._transport.close.assert_awaited_once()


class TestSpaceServiceEndpoints:
    """Test endpoint builders map to the right paths and defaults."""

    def test_batch_endpoints(self, service):
        space, _ = service()
        expected = {
            space.get_holidays(): "/api/http/public-holidays/holidays",
            space.get_absences(): "/api/http/absences",
            space.get_profiles(): "/api/http/team-directory/profiles",
            space.get_member_locations(): "/api/http/team-directory/member-locations",
            space.get_working_days(): "/api/http/team-directory/profiles/working-days",
            space.get_working_days("m1"): "/api/http/team-directory/profiles/id:m1/working-days",
            space.get_business_entity_relations(): "/api/http/hrm/business-entities/relations",
        }
        for request, endpoint in expected.items():
            assert isinstance(request, BatchApiRequest)
            assert request.endpoint == endpoint

    def test_object_endpoints(self, service):
        space, _ = service()
        expected = {
            space.get_profile("m1"): "/api/http/team-directory/profiles/id:m1",
            space.get_business_entities(): "/api/http/hrm/business-entities",
            space.get_business_entity_relations("m1"): (
                "/api/http/hrm/business-entities/relations/m1"
            ),
        }
        for request, endpoint in expected.items():
            assert isinstance(request, ObjectApiRequest)
            assert request.endpoint == endpoint

    def test_absences_view_mode(self, service):
        space, _ = service()
        assert dict(space.get_absences().parameters) == {"viewMode": "All"}
        request = space.get_absences("WithAccessibleReasonAll")
        assert request.parameters["viewMode"] == "WithAccessibleReasonAll"

    def test_profile_holidays_parameters(self, service):
        space, _ = service()
        request = space.get_profile_holidays("m1", date(2024, 1, 1), date(2024, 1, 31))
        assert dict(request.parameters) == {
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
            "profile": "m1",
        }

    @pytest.mark.asyncio
    async def test_end_to_end_absences(self, service):
        """Test a filtered, field-selected absence query through the facade."""
        space, transport = service(
            [
                ok(
                    {
                        "next": "1",
                        "totalCount": 1,
                        "data": [
                            {
                                "id": "a1",
                                "member": {"id": "m1", "username": "jdoe"},
                                "since": {"iso": "2024-01-02"},
                                "till": {"iso": "2024-01-05"},
                                "reason": {"id": "r1", "name": "Vacation"},
                            }
                        ],
                    }
                )
            ]
        )

        absences = await (
            space.get_absences()
            .add_parameter("since", date(2024, 1, 1))
            .add_parameter_list("members", ["m1"])
            .add_field("member")
            .add_field("reason")
            .execute()
        )

        assert absences[0].member.username == "jdoe"
        assert absences[0].reason.name == "Vacation"
        assert absences[0].till == date(2024, 1, 5)
        query = transport.calls[0].query
        assert query["$fields"] == ["*,data(*,member,reason)"]
        assert query["members"] == ["m1"]
        assert query["since"] == ["2024-01-01"]
        assert query["viewMode"] == ["All"]
        assert transport.calls[0].headers["Authorization"] == "Bearer token-1"
