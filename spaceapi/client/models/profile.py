"""Member profile models."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import Discriminator, Tag

from .base import SpaceObject, TimeRanged
from .dates import SpaceDate, SpaceDateTime
from .location import Location
from .team import Membership


class ProfileName(SpaceObject):
    first_name: str | None = None
    last_name: str | None = None

    def last_then_first(self) -> str:
        return " ".join(part for part in (self.last_name, self.first_name) if part)

    def __str__(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class CFValue(SpaceObject):
    """Custom field value, tagged with the server-side class name.

    Class names without a dedicated subclass keep the raw ``value`` and
    ``values`` payloads.
    """

    class_name: str | None = None
    value: Any = None
    values: list[Any] | None = None

    def typed_value(self) -> Any:
        return self.value


class StringCFValue(CFValue):
    def typed_value(self) -> str | None:
        return self.value if isinstance(self.value, str) else None


class EnumCFValue(CFValue):
    """Enumeration value; the payload is the selected option."""

    def typed_value(self) -> str | None:
        if isinstance(self.value, dict):
            return self.value.get("value")
        return None


_CF_VALUE_CLASSES = {"StringCFValue", "EnumCFValue"}


def _cf_value_tag(raw: Any) -> str:
    if isinstance(raw, CFValue):
        name = type(raw).__name__
    else:
        name = raw.get("className", raw.get("class_name")) if isinstance(raw, dict) else None
    return name if name in _CF_VALUE_CLASSES else "other"


AnyCFValue = Annotated[
    Annotated[StringCFValue, Tag("StringCFValue")]
    | Annotated[EnumCFValue, Tag("EnumCFValue")]
    | Annotated[CFValue, Tag("other")],
    Discriminator(_cf_value_tag),
]


class MemberProfile(SpaceObject):
    id: str
    username: str | None = None
    name: ProfileName | None = None
    location: Location | None = None
    locations: list[MemberLocation] | None = None
    joined: SpaceDate | None = None
    left_at: SpaceDateTime | None = None
    birthday: SpaceDate | None = None
    gender: str | None = None
    about: str | None = None
    managers: list[MemberProfile] | None = None
    memberships: list[Membership] | None = None
    custom_fields: dict[str, AnyCFValue] | None = None

    def date_left(self) -> date | None:
        return self.left_at.date() if self.left_at else None

    def custom_field(self, name: str) -> CFValue | None:
        if not self.custom_fields:
            return None
        return self.custom_fields.get(name)

    def custom_field_value(self, name: str) -> Any:
        """Value of a single-valued custom field, ``None`` when absent.

        Enumeration fields yield the selected option rather than the raw
        option object.
        """
        field = self.custom_field(name)
        return field.typed_value() if field is not None else None

    def _typed_field(self, name: str, kind: type[CFValue]) -> Any:
        field = self.custom_field(name)
        return field.typed_value() if isinstance(field, kind) else None

    def employee_number(self) -> str | None:
        return self._typed_field("Employee Number", StringCFValue)

    def formal_name(self) -> str | None:
        return self._typed_field("Formal name", StringCFValue)

    def formal_or_last_first_name(self) -> str | None:
        """Formal name if set, otherwise "Last First"."""
        formal = self.formal_name()
        if formal:
            return formal
        return self.name.last_then_first() if self.name else None

    def wear_size(self) -> str | None:
        return self._typed_field("Wear Size", EnumCFValue)

    def gender_option(self) -> str | None:
        """Gender recorded as an enumeration custom field."""
        return self._typed_field("Gender", EnumCFValue)

    def __str__(self) -> str:
        return f"MemberProfile(id={self.id!r}, name={self.name})"


class MemberLocation(TimeRanged, SpaceObject):
    """Where a member is located over a date range."""

    id: str
    archived: bool | None = None
    location: Location | None = None
    member: MemberProfile | None = None
    since: SpaceDate | None = None
    till: SpaceDate | None = None


MemberProfile.model_rebuild()
