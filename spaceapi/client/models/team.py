"""Team directory teams, roles and memberships."""

from __future__ import annotations

from collections.abc import Iterator

from .base import SpaceObject, TimeRanged
from .dates import SpaceDate


class Team(SpaceObject):
    id: str
    name: str | None = None
    parent: Team | None = None

    def hierarchy(self) -> Iterator[Team]:
        """This team followed by its parent teams."""
        team: Team | None = self
        while team is not None:
            yield team
            team = team.parent


class Role(SpaceObject):
    id: str
    name: str | None = None


class Membership(TimeRanged, SpaceObject):
    """Membership of a profile in a team, with its validity range."""

    since: SpaceDate | None = None
    till: SpaceDate | None = None
    team: Team | None = None
    role: Role | None = None
