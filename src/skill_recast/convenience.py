"""Convenience API for skill-recast — 3-line quickstart.

Example
-------
::

    from skill_recast import duration_recast, quick_store, CreateSkillEvent

    store = await quick_store()
    skill_id = await store.handle_create(
        CreateSkillEvent(
            name="Dash",
            casting_charge_limit=2,
            recast=duration_recast(seconds=30),
            initially_available=True,
            created_at=now,
        )
    )

    # or seed a store straight from a YAML skill book
    store = await quick_store("skills.yaml")
"""
from __future__ import annotations

import datetime
from pathlib import Path

from skill_recast.clock import CurrentDateTime, SystemClock
from skill_recast.config import SkillBook, populate
from skill_recast.recast.policy import (
    DailyRecast,
    DayOfWeek,
    DurationRecast,
    ManualRecast,
    WeeklyRecast,
)
from skill_recast.skills.store import InMemorySkillStore


def _parse_time(at: datetime.time | str) -> datetime.time:
    if isinstance(at, datetime.time):
        return at
    return datetime.time.fromisoformat(at)


def duration_recast(
    seconds: float = 0.0,
    minutes: float = 0.0,
    hours: float = 0.0,
) -> DurationRecast:
    """Build a :class:`DurationRecast` from seconds/minutes/hours."""
    return DurationRecast(
        recast_time=datetime.timedelta(seconds=seconds, minutes=minutes, hours=hours)
    )


def daily_recast(at: datetime.time | str, interval_days: int = 0) -> DailyRecast:
    """Build a :class:`DailyRecast`.  ``at`` may be ``"HH:MM"``."""
    return DailyRecast(available_at=_parse_time(at), interval_days=interval_days)


def weekly_recast(
    day: DayOfWeek | str | int,
    at: datetime.time | str,
    interval_weeks: int = 0,
) -> WeeklyRecast:
    """Build a :class:`WeeklyRecast`.  ``day`` may be a weekday name."""
    return WeeklyRecast(
        recast_day_of_week=DayOfWeek.parse(day),
        available_at=_parse_time(at),
        interval_weeks=interval_weeks,
    )


def manual_recast() -> ManualRecast:
    return ManualRecast()


async def quick_store(
    book: SkillBook | str | Path | None = None,
    created_at: datetime.datetime | None = None,
    clock: CurrentDateTime | None = None,
) -> InMemorySkillStore:
    """Return an :class:`InMemorySkillStore`, optionally seeded from a skill book.

    Parameters
    ----------
    book:
        A :class:`SkillBook` or a path to a YAML skill book.
    created_at:
        Creation instant for seeded skills.  Defaults to ``clock()``.
    clock:
        The clock that will drive the store, e.g. the one handed to
        :class:`~skill_recast.clock.RefreshChargeAutomation`.  Seeding from
        it keeps naive and timezone-aware instants from being mixed.
        Defaults to a naive :class:`~skill_recast.clock.SystemClock`.
    """
    store = InMemorySkillStore()
    if book is None:
        return store
    if not isinstance(book, SkillBook):
        book = SkillBook.load(book)
    if created_at is None:
        created_at = (clock or SystemClock())()
    await populate(store, book, created_at)
    return store


__all__ = [
    "duration_recast",
    "daily_recast",
    "weekly_recast",
    "manual_recast",
    "quick_store",
]
