"""Recast policy subsystem — cooldown strategies and ready-instant arithmetic."""
from __future__ import annotations

from skill_recast.recast.policy import (
    DailyRecast,
    DayOfWeek,
    DurationRecast,
    ManualRecast,
    RecastPolicy,
    TimeBasedRecast,
    WeeklyRecast,
    is_time_based,
    ready_at,
    until_ready,
)

__all__ = [
    "DayOfWeek",
    "DurationRecast",
    "DailyRecast",
    "WeeklyRecast",
    "ManualRecast",
    "TimeBasedRecast",
    "RecastPolicy",
    "is_time_based",
    "ready_at",
    "until_ready",
]
