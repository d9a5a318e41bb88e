"""Public holiday model."""

from __future__ import annotations

from .base import SpaceObject
from .dates import SpaceDate


class PublicHoliday(SpaceObject):
    id: str
    name: str | None = None
    date: SpaceDate | None = None
    working_day: bool | None = None
