"""Skill events — the commands that drive every store mutation.

Each event is a frozen pydantic model carrying exactly the fields its
mutation needs.  Field constraints are shared with
:class:`~skill_recast.skills.base.Skill`, so a payload that would produce
an invalid skill is rejected when the event is constructed, before it
reaches the store.  The store therefore trusts every event it receives.

Events are transient: the caller builds one and hands it to the matching
``handle_*`` method of a :class:`~skill_recast.skills.store.SkillMutator`.
"""
from __future__ import annotations

import datetime
from typing import Union

from pydantic import BaseModel, ConfigDict

from skill_recast.recast.policy import RecastPolicy
from skill_recast.skills.base import CastingChargeLimit, SkillId, SkillName


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CreateSkillEvent(_Event):
    """Create a new skill.

    Attributes
    ----------
    name:
        Skill name.
    casting_charge_limit:
        Maximum charges.
    recast:
        Recast policy.
    initially_available:
        When True the skill starts with one charge, otherwise with none.
    created_at:
        Creation instant, also the initial recasting-from anchor.
    """

    name: SkillName
    casting_charge_limit: CastingChargeLimit
    recast: RecastPolicy
    initially_available: bool
    created_at: datetime.datetime


class UseSkillEvent(_Event):
    """Spend one charge of ``skill_id`` at ``used_at``."""

    skill_id: SkillId
    used_at: datetime.datetime


class DeleteSkillEvent(_Event):
    """Remove ``skill_id`` from the store."""

    skill_id: SkillId


class AddChargeEvent(_Event):
    """Grant one extra charge to ``skill_id`` (capped at its limit)."""

    skill_id: SkillId


class RefreshChargeEvent(_Event):
    """Advance every skill's charge state to ``now``."""

    now: datetime.datetime


SkillEvent = Union[
    CreateSkillEvent, UseSkillEvent, DeleteSkillEvent, AddChargeEvent, RefreshChargeEvent
]

__all__ = [
    "CreateSkillEvent",
    "UseSkillEvent",
    "DeleteSkillEvent",
    "AddChargeEvent",
    "RefreshChargeEvent",
    "SkillEvent",
]
