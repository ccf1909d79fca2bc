#!/usr/bin/env python3
"""Example: Background Charge Refresh

Runs RefreshChargeAutomation against the wall clock and prints every
snapshot the store publishes while charges refill in the background.

Usage:
    python examples/02_refresh_automation.py

Requirements:
    pip install skill-recast
"""
from __future__ import annotations

import asyncio
import datetime

from skill_recast import (
    CreateSkillEvent,
    InMemorySkillStore,
    RefreshChargeAutomation,
    Skill,
    UseSkillEvent,
    duration_recast,
)


def print_snapshot(snapshot: tuple[Skill, ...]) -> None:
    charges = ", ".join(
        f"{s.name}={s.casting_charge}/{s.casting_charge_limit}" for s in snapshot
    )
    print(f"  [{datetime.datetime.now():%H:%M:%S.%f}] {charges}")


async def main() -> None:
    store = InMemorySkillStore()
    unsubscribe = store.subscribe(print_snapshot)

    now = datetime.datetime.now()
    blink = await store.handle_create(
        CreateSkillEvent(
            name="Blink",
            casting_charge_limit=3,
            recast=duration_recast(seconds=1),
            initially_available=True,
            created_at=now,
        )
    )
    await store.handle_use(UseSkillEvent(skill_id=blink, used_at=datetime.datetime.now()))

    print("Refreshing every 250 ms for 3 seconds:")
    async with RefreshChargeAutomation(store, interval_ms=250) as automation:
        await asyncio.sleep(3)
    print(f"Done: {automation!r}")
    unsubscribe()


if __name__ == "__main__":
    asyncio.run(main())
