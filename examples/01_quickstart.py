#!/usr/bin/env python3
"""Example: Quickstart — skill-recast

Minimal working example: create a skill with a 30 second recast, spend its
charges, then refresh on a hand-driven clock and watch them come back.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install skill-recast
"""
from __future__ import annotations

import asyncio
import datetime

import skill_recast
from skill_recast import (
    CreateSkillEvent,
    ManualClock,
    OutOfChargeError,
    RefreshChargeEvent,
    UseSkillEvent,
    duration_recast,
    quick_store,
)
from skill_recast.skills import logic


async def main() -> None:
    print(f"skill-recast version: {skill_recast.__version__}")

    clock = ManualClock(datetime.datetime(2024, 5, 13, 12, 0, 0))
    store = await quick_store()

    # Step 1: Create a skill with two charges, one available right away
    skill_id = await store.handle_create(
        CreateSkillEvent(
            name="Dash",
            casting_charge_limit=2,
            recast=duration_recast(seconds=30),
            initially_available=True,
            created_at=clock(),
        )
    )
    print(f"Created: {await store.get_by_id(skill_id)}")

    # Step 2: Spend charges until the pool runs dry
    for attempt in range(2):
        try:
            await store.handle_use(UseSkillEvent(skill_id=skill_id, used_at=clock()))
            print(f"  Use {attempt + 1}: ok")
        except OutOfChargeError as error:
            print(f"  Use {attempt + 1}: rejected ({error.error_code})")

    # Step 3: Let time pass and refresh
    for seconds in (20, 15, 30):
        clock.advance(datetime.timedelta(seconds=seconds))
        changed = await store.handle_refresh(RefreshChargeEvent(now=clock()))
        skill = await store.get_by_id(skill_id)
        assert skill is not None
        print(
            f"  {clock().time()}: charges={skill.casting_charge}/{skill.casting_charge_limit} "
            f"changed={bool(changed)} next={logic.recast_at(skill)}"
        )


if __name__ == "__main__":
    asyncio.run(main())
