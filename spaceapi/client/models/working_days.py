"""Working days and working hours."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .base import SpaceObject
from .dates import SpaceDate
from .profile import MemberProfile


class TimeOfDay(BaseModel):
    """Not a SpaceObject: always serialized as a whole."""

    hours: int
    minutes: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


class TimeInterval(BaseModel):
    """Not a SpaceObject: always serialized as a whole."""

    since: TimeOfDay
    till: TimeOfDay

    model_config = ConfigDict(frozen=True)


class WorkingHours(SpaceObject):
    checked: bool | None = None
    day: int | None = None
    interval: TimeInterval | None = None


class WorkingLocation(SpaceObject):
    day: int | None = None
    remote: bool | None = None


class WorkingDaysSpec(SpaceObject):
    working_hours: list[WorkingHours] | None = None
    locations: list[WorkingLocation] | None = None


class WorkingDays(SpaceObject):
    id: str
    date_start: SpaceDate | None = None
    date_end: SpaceDate | None = None
    working_days_spec: WorkingDaysSpec | None = None


class ProfileWorkingDays(SpaceObject):
    profile: MemberProfile | None = None
    working_days: WorkingDays | None = None
