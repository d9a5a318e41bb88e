"""Team directory location model."""

from __future__ import annotations

from collections.abc import Iterator

from .base import SpaceObject


class Location(SpaceObject):
    """A location of the organization (country, city, office...).

    ``parent`` has the same type; request it with
    ``add_recursive_field("parent")`` to get the whole ancestry.
    """

    id: str
    name: str | None = None
    parent: Location | None = None
    type: str | None = None

    def hierarchy(self) -> Iterator[Location]:
        """This location followed by its ancestors."""
        location: Location | None = self
        while location is not None:
            yield location
            location = location.parent

    def is_ancestor_or_self(self, location_id: str) -> bool:
        return any(location.id == location_id for location in self.hierarchy())
