"""Skills subsystem — skill values, charge logic, events and the store.

Provides a layered architecture:

1. **base** — the immutable :class:`Skill` value.
2. **logic** — pure charge transitions (:func:`use`,
   :func:`refresh_casting_charge`, ...).
3. **events** — validated commands consumed by the store.
4. **store** — :class:`InMemorySkillStore`, the single writer.
"""
from __future__ import annotations

from skill_recast.skills.base import Skill, new_skill_id
from skill_recast.skills.events import (
    AddChargeEvent,
    CreateSkillEvent,
    DeleteSkillEvent,
    RefreshChargeEvent,
    SkillEvent,
    UseSkillEvent,
)
from skill_recast.skills.logic import (
    RefreshResult,
    add_charge,
    create_skill,
    has_charge,
    is_full_charged,
    is_unused,
    recast_at,
    refresh_casting_charge,
    remove_charge,
    until_recast,
    use,
    will_recast_over_time,
)
from skill_recast.skills.store import (
    InMemorySkillStore,
    SkillMutator,
    SkillObserver,
    SkillReader,
)

__all__ = [
    "Skill",
    "new_skill_id",
    "CreateSkillEvent",
    "UseSkillEvent",
    "DeleteSkillEvent",
    "AddChargeEvent",
    "RefreshChargeEvent",
    "SkillEvent",
    "RefreshResult",
    "create_skill",
    "is_unused",
    "has_charge",
    "is_full_charged",
    "will_recast_over_time",
    "recast_at",
    "until_recast",
    "refresh_casting_charge",
    "use",
    "add_charge",
    "remove_charge",
    "InMemorySkillStore",
    "SkillReader",
    "SkillMutator",
    "SkillObserver",
]
