#!/usr/bin/env python3
"""Example: Skill Books and Calendar Recasts

Loads skills.yaml, seeds a store from it and shows when each skill's next
charge is due under duration, daily and weekly recast policies.

Usage:
    python examples/03_skill_book.py

Requirements:
    pip install skill-recast
"""
from __future__ import annotations

import asyncio
import datetime
from pathlib import Path

from skill_recast import RefreshChargeEvent, SkillBook, UseSkillEvent, quick_store
from skill_recast.skills import logic

_BOOK = Path(__file__).parent / "skills.yaml"


async def main() -> None:
    book = SkillBook.load(_BOOK)
    print(f"Loaded {len(book.skills)} skills (refresh every {book.settings.refresh_interval_ms} ms)")

    start = datetime.datetime(2024, 5, 13, 9, 0, 0)  # a Monday
    store = await quick_store(book, created_at=start)

    # Use every skill that has a charge
    for skill in store.skills():
        if logic.has_charge(skill):
            await store.handle_use(UseSkillEvent(skill_id=skill.id, used_at=start))

    for skill in store.skills():
        print(f"  {skill.name:<14} {skill.recast.recast_type:<8} next={logic.recast_at(skill)}")

    # Jump ahead eight days and refresh
    later = start + datetime.timedelta(days=8)
    changed = await store.handle_refresh(RefreshChargeEvent(now=later))
    print(f"\nAfter refresh at {later}: {len(changed)} skill(s) recharged")
    for skill in store.skills():
        print(f"  {skill.name:<14} {skill.casting_charge}/{skill.casting_charge_limit}")


if __name__ == "__main__":
    asyncio.run(main())
