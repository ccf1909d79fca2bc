"""skill-recast — charge and cooldown scheduling for reusable skills.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Quick-start example
-------------------
>>> import skill_recast as sr
>>> sr.__version__
'0.1.0'

Subpackages
-----------
recast:
    Recast policies (duration, daily, weekly, manual) and ready-instant arithmetic.
skills:
    Skill values, pure charge logic, events, and the in-memory store.
clock:
    Clock sources and the periodic charge-refresh automation.
config:
    YAML skill books and runtime settings.
errors:
    Exception hierarchy.
"""
from __future__ import annotations

__version__: str = "0.1.0"

from skill_recast.clock import (
    CurrentDateTime,
    ManualClock,
    RefreshChargeAutomation,
    SystemClock,
)
from skill_recast.config import RecastSettings, SkillBook, SkillDefinition, populate
from skill_recast.convenience import (
    daily_recast,
    duration_recast,
    manual_recast,
    quick_store,
    weekly_recast,
)
from skill_recast.errors import (
    DuplicateSkillIdError,
    OutOfChargeError,
    RecastPreconditionError,
    SkillNotFoundError,
    SkillRecastError,
)

# -- Recast ---------------------------------------------------------------
from skill_recast.recast import (
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

# -- Skills ---------------------------------------------------------------
from skill_recast.skills import (
    AddChargeEvent,
    CreateSkillEvent,
    DeleteSkillEvent,
    InMemorySkillStore,
    RefreshChargeEvent,
    RefreshResult,
    Skill,
    SkillMutator,
    SkillReader,
    UseSkillEvent,
)

__all__: list[str] = [
    "__version__",
    # convenience
    "duration_recast",
    "daily_recast",
    "weekly_recast",
    "manual_recast",
    "quick_store",
    # recast
    "DayOfWeek",
    "DurationRecast",
    "DailyRecast",
    "WeeklyRecast",
    "ManualRecast",
    "RecastPolicy",
    "TimeBasedRecast",
    "is_time_based",
    "ready_at",
    "until_ready",
    # skills
    "Skill",
    "RefreshResult",
    "CreateSkillEvent",
    "UseSkillEvent",
    "DeleteSkillEvent",
    "AddChargeEvent",
    "RefreshChargeEvent",
    "InMemorySkillStore",
    "SkillReader",
    "SkillMutator",
    # clock
    "CurrentDateTime",
    "SystemClock",
    "ManualClock",
    "RefreshChargeAutomation",
    # config
    "RecastSettings",
    "SkillDefinition",
    "SkillBook",
    "populate",
    # errors
    "SkillRecastError",
    "SkillNotFoundError",
    "OutOfChargeError",
    "DuplicateSkillIdError",
    "RecastPreconditionError",
]
