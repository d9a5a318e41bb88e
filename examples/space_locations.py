#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from spaceapi.client import SpaceConfig, SpaceService


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print member locations with their full hierarchy")
    p.add_argument("--past", action="store_true", help="include members who left")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with SpaceService.from_config(SpaceConfig.from_env()) as space:
        profiles = await (
            space.get_profiles()
            .add_parameter("reportPastMembers", args.past)
            .add_field("name")
            .add_recursive_field("location", "parent")
            .execute()
        )

    for profile in sorted(profiles, key=lambda p: p.name.last_then_first() if p.name else ""):
        chain = "-"
        if profile.location:
            chain = " < ".join(loc.name or loc.id for loc in profile.location.hierarchy())
        print(f"{profile.name!s:30} {chain}")


if __name__ == "__main__":
    asyncio.run(main())
