"""Unit tests for API response models."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from spaceapi.client.models import (
    AbsenceRecord,
    BatchResponse,
    BusinessEntityRelation,
    CFValue,
    EnumCFValue,
    Location,
    MemberLocation,
    MemberProfile,
    Membership,
    ProfileName,
    ProfileWorkingDays,
    PublicHoliday,
    SpaceDate,
    SpaceDateTime,
    StringCFValue,
    Team,
    TimeRanged,
    format_date,
)


class TestDates:
    """Test the date codecs."""

    def test_iso_string(self):
        assert TypeAdapter(SpaceDate).validate_python("2020-07-21") == date(2020, 7, 21)

    def test_date_object(self):
        payload = {"iso": "2020-07-21", "year": 2020, "month": 7, "day": 21}
        assert TypeAdapter(SpaceDate).validate_python(payload) == date(2020, 7, 21)

    def test_date_object_without_iso(self):
        with pytest.raises(ValidationError):
            TypeAdapter(SpaceDate).validate_python({"year": 2020})

    def test_datetime_timestamp(self):
        value = TypeAdapter(SpaceDateTime).validate_python({"timestamp": 1595289600000})
        assert value == datetime(2020, 7, 21, tzinfo=UTC)

    def test_datetime_iso(self):
        value = TypeAdapter(SpaceDateTime).validate_python({"iso": "2020-07-21T10:00:00Z"})
        assert value == datetime(2020, 7, 21, 10, tzinfo=UTC)

    def test_serialization(self):
        assert TypeAdapter(SpaceDate).dump_python(date(2020, 7, 21)) == "2020-07-21"
        assert format_date(date(2020, 1, 2)) == "2020-01-02"


class TestSpaceObject:
    def test_camel_case_wire_names(self):
        holiday = PublicHoliday.model_validate(
            {"id": "h1", "name": "New Year", "date": {"iso": "2024-01-01"}, "workingDay": False}
        )
        assert holiday.working_day is False
        assert holiday.date == date(2024, 1, 1)

    def test_snake_case_names_accepted(self):
        holiday = PublicHoliday(id="h1", working_day=True)
        assert holiday.working_day is True

    def test_unknown_fields_ignored(self):
        location = Location.model_validate({"id": "l1", "somethingNew": 1})
        assert location.id == "l1"

    def test_frozen(self):
        location = Location(id="l1")
        with pytest.raises(ValidationError):
            location.name = "x"

    def test_reference_only_payload(self):
        """A reference that only came back with its id still parses."""
        absence = AbsenceRecord.model_validate({"id": "a1", "member": {"id": "m1"}})
        assert absence.member.id == "m1"
        assert absence.member.name is None


class TestLocation:
    def test_hierarchy(self):
        location = Location.model_validate(
            {"id": "office", "parent": {"id": "city", "parent": {"id": "country"}}}
        )
        assert [loc.id for loc in location.hierarchy()] == ["office", "city", "country"]
        assert location.is_ancestor_or_self("country")
        assert location.is_ancestor_or_self("office")
        assert not location.is_ancestor_or_self("elsewhere")

    def test_team_hierarchy(self):
        team = Team.model_validate({"id": "t2", "parent": {"id": "t1"}})
        assert [t.id for t in team.hierarchy()] == ["t2", "t1"]


class TestMemberProfile:
    def test_full_profile(self):
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "username": "jdoe",
                "name": {"firstName": "Jane", "lastName": "Doe"},
                "leftAt": {"iso": "2023-05-01T00:00:00Z", "timestamp": 1682899200000},
                "customFields": {"Employee ID": {"className": "StringCFValue", "value": "42"}},
                "memberships": [{"team": {"id": "t1"}, "since": {"iso": "2020-01-01"}}],
                "managers": [{"id": "m0"}],
            }
        )
        assert str(profile.name) == "Jane Doe"
        assert profile.name.last_then_first() == "Doe Jane"
        assert profile.date_left() == date(2023, 5, 1)
        assert profile.custom_field_value("Employee ID") == "42"
        assert profile.custom_field_value("Missing") is None
        assert profile.memberships[0].team.id == "t1"
        assert profile.managers[0].id == "m0"

    def test_current_member(self):
        profile = MemberProfile(id="m1")
        assert profile.date_left() is None

    def test_partial_name(self):
        assert ProfileName(first_name="Jane").last_then_first() == "Jane"

    def test_enum_custom_field_yields_selected_option(self):
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "customFields": {
                    "Wear size": {"className": "EnumCFValue", "value": {"id": "e1", "value": "XL"}},
                    "Unset": {"className": "EnumCFValue", "value": None},
                },
            }
        )
        assert isinstance(profile.custom_field("Wear size"), EnumCFValue)
        assert profile.custom_field_value("Wear size") == "XL"
        assert profile.custom_field_value("Unset") is None

    def test_unknown_custom_field_class_keeps_raw_value(self):
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "customFields": {
                    "Skills": {"className": "MultiEnumCFValue", "values": ["a", "b"]},
                    "Untagged": {"value": 7},
                },
            }
        )
        skills = profile.custom_field("Skills")
        assert type(skills) is CFValue
        assert skills.values == ["a", "b"]
        assert profile.custom_field_value("Untagged") == 7

    def test_custom_field_helpers(self):
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "name": {"firstName": "Jane", "lastName": "Doe"},
                "customFields": {
                    "Employee Number": {"className": "StringCFValue", "value": "E-7"},
                    "Wear Size": {"className": "EnumCFValue", "value": {"value": "M"}},
                    "Gender": {"className": "EnumCFValue", "value": {"value": "F"}},
                },
            }
        )
        assert isinstance(profile.custom_field("Employee Number"), StringCFValue)
        assert profile.employee_number() == "E-7"
        assert profile.wear_size() == "M"
        assert profile.gender_option() == "F"
        assert profile.formal_name() is None
        assert profile.formal_or_last_first_name() == "Doe Jane"

    def test_formal_name_wins(self):
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "name": {"firstName": "Jane", "lastName": "Doe"},
                "customFields": {
                    "Formal name": {"className": "StringCFValue", "value": "Dr. J. Doe"}
                },
            }
        )
        assert profile.formal_or_last_first_name() == "Dr. J. Doe"

    def test_helpers_check_field_class(self):
        """A helper ignores a custom field of the wrong class."""
        profile = MemberProfile.model_validate(
            {
                "id": "m1",
                "customFields": {
                    "Wear Size": {"className": "StringCFValue", "value": "M"},
                    "Employee Number": {"className": "EnumCFValue", "value": {"value": "1"}},
                },
            }
        )
        assert profile.wear_size() is None
        assert profile.employee_number() is None
        assert MemberProfile(id="m2").formal_or_last_first_name() is None

    def test_custom_field_instances_keep_their_class(self):
        profile = MemberProfile(
            id="m1", custom_fields={"Wear Size": EnumCFValue(value={"value": "L"})}
        )
        assert profile.wear_size() == "L"


class TestTimeRanged:
    """Test inclusive date ranges with open ends."""

    @pytest.mark.parametrize(
        "model",
        [Membership, MemberLocation, AbsenceRecord, BusinessEntityRelation],
    )
    def test_bounded_range(self, model):
        ranged = model.model_validate(
            {"id": "x", "since": "2024-03-01", "till": "2024-03-10"}
        )
        assert isinstance(ranged, TimeRanged)
        assert ranged.contains_date(date(2024, 3, 1))
        assert ranged.contains_date(date(2024, 3, 5))
        assert ranged.contains_date(date(2024, 3, 10))
        assert not ranged.contains_date(date(2024, 2, 29))
        assert not ranged.contains_date(date(2024, 3, 11))

    def test_open_start(self):
        membership = Membership(till=date(2024, 1, 31))
        assert membership.contains_date(date(1990, 1, 1))
        assert not membership.contains_date(date(2024, 2, 1))

    def test_open_end(self):
        location = MemberLocation(id="l1", since=date(2024, 1, 1))
        assert location.contains_date(date(2099, 12, 31))
        assert not location.contains_date(date(2023, 12, 31))

    def test_unbounded(self):
        assert AbsenceRecord(id="a1").contains_date(date(2024, 6, 1))


class TestBatchResponse:
    def test_envelope(self):
        page = BatchResponse[Location].model_validate(
            {"next": "2", "totalCount": 3, "data": [{"id": "a"}, {"id": "b"}]}
        )
        assert page.next == "2"
        assert page.total_count == 3
        assert [loc.id for loc in page.data] == ["a", "b"]

    def test_total_count_optional(self):
        page = BatchResponse[int].model_validate({"next": "0", "data": []})
        assert page.total_count is None

    def test_working_days_envelope(self):
        page = BatchResponse[ProfileWorkingDays].model_validate(
            {
                "next": "1",
                "data": [
                    {
                        "profile": {"id": "m1"},
                        "workingDays": {
                            "id": "w1",
                            "workingDaysSpec": {
                                "workingHours": [
                                    {
                                        "day": 1,
                                        "checked": True,
                                        "interval": {
                                            "since": {"hours": 9, "minutes": 0},
                                            "till": {"hours": 17, "minutes": 30},
                                        },
                                    }
                                ]
                            },
                        },
                    }
                ],
            }
        )
        hours = page.data[0].working_days.working_days_spec.working_hours[0]
        assert hours.checked is True
        assert str(hours.interval.till) == "17:30"
