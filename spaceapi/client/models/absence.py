"""Absence models."""

from __future__ import annotations

from .base import SpaceObject, TimeRanged
from .dates import SpaceDate
from .location import Location
from .profile import MemberProfile


class AbsenceReason(SpaceObject):
    id: str
    name: str | None = None


class AbsenceRecord(TimeRanged, SpaceObject):
    id: str
    archived: bool | None = None
    member: MemberProfile | None = None
    description: str | None = None
    since: SpaceDate | None = None
    till: SpaceDate | None = None
    location: Location | None = None
    reason: AbsenceReason | None = None
