"""Base class of all non-primitive Space API response entities."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SpaceObject(BaseModel):
    """Common ancestor of API objects.

    Structure discovery only looks inside subclasses of this class; anything
    else (strings, dates, opaque maps, helper value types) is a primitive.
    A subclass that declares an ``id`` field is a reference, every other
    subclass is a literal (embedded) object.

    Attributes use snake_case in Python and camelCase on the wire. Every field
    should be optional: the server omits whatever the ``$fields`` selection
    does not ask for.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class TimeRanged:
    """Mixin for objects valid over a ``since``..``till`` date range.

    Both ends are inclusive; a missing end leaves that side open.
    """

    def contains_date(self, day: date) -> bool:
        since = getattr(self, "since", None)
        till = getattr(self, "till", None)
        return (since is None or day >= since) and (till is None or day <= till)
