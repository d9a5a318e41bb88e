"""HRM business entities."""

from __future__ import annotations

from .base import SpaceObject, TimeRanged
from .dates import SpaceDate
from .location import Location
from .profile import MemberProfile


class BusinessEntity(SpaceObject):
    id: str
    archived: bool | None = None
    location: Location | None = None
    name: str | None = None


class BusinessEntityRelation(TimeRanged, SpaceObject):
    id: str
    archived: bool | None = None
    entity: BusinessEntity | None = None
    member: MemberProfile | None = None
    since: SpaceDate | None = None
    till: SpaceDate | None = None
