"""Data models for Space API responses.

All models are pydantic v2 models. ``SpaceObject`` subclasses double as the
declared schema that structure discovery walks; helper value types that are
plain ``BaseModel`` subclasses are treated as primitives.
"""

from .absence import AbsenceReason, AbsenceRecord
from .base import SpaceObject, TimeRanged
from .batch import BatchResponse
from .business_entity import BusinessEntity, BusinessEntityRelation
from .dates import SpaceDate, SpaceDateTime, format_date
from .holiday import PublicHoliday
from .location import Location
from .profile import (
    CFValue,
    EnumCFValue,
    MemberLocation,
    MemberProfile,
    ProfileName,
    StringCFValue,
)
from .team import Membership, Role, Team
from .working_days import (
    ProfileWorkingDays,
    TimeInterval,
    TimeOfDay,
    WorkingDays,
    WorkingDaysSpec,
    WorkingHours,
    WorkingLocation,
)

__all__ = [
    "SpaceObject",
    "TimeRanged",
    "BatchResponse",
    "SpaceDate",
    "SpaceDateTime",
    "format_date",
    "Location",
    "Team",
    "Role",
    "Membership",
    "ProfileName",
    "CFValue",
    "StringCFValue",
    "EnumCFValue",
    "MemberProfile",
    "MemberLocation",
    "AbsenceReason",
    "AbsenceRecord",
    "PublicHoliday",
    "TimeOfDay",
    "TimeInterval",
    "WorkingHours",
    "WorkingLocation",
    "WorkingDaysSpec",
    "WorkingDays",
    "ProfileWorkingDays",
    "BusinessEntity",
    "BusinessEntityRelation",
]
