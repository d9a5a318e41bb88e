#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from datetime import date, timedelta

from spaceapi.client import SpaceConfig, SpaceService


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List recent absences of Space members")
    p.add_argument("days", nargs="?", type=int, default=30)
    p.add_argument("--member", action="append", default=[], help="member id (repeatable)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    till = date.today()
    since = till - timedelta(days=args.days)
    async with SpaceService.from_config(SpaceConfig.from_env()) as space:
        request = (
            space.get_absences()
            .add_parameter("since", since)
            .add_parameter("till", till)
            .add_field("member", "name")
            .add_field("reason")
        )
        if args.member:
            request.add_parameter_list("members", args.member)
        absences = await request.execute()

    print(f"Absences between {since} and {till}: {len(absences)}")
    print(f"{'Member':30} | {'Since':10} | {'Till':10} | Reason")
    print("-" * 70)
    for a in absences:
        name = str(a.member.name) if a.member and a.member.name else "?"
        reason = a.reason.name if a.reason and a.reason.name else ""
        print(f"{name:30} | {a.since!s:10} | {a.till!s:10} | {reason}")


if __name__ == "__main__":
    asyncio.run(main())
