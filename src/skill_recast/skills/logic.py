"""Charge logic — pure transitions over :class:`~skill_recast.skills.base.Skill`.

A skill's charge count is a bounded counter in ``[0, casting_charge_limit]``
moved by two independent forces:

* **Scheduled refill** — :func:`refresh_casting_charge` credits one charge
  for every recast period that has completed by ``now``.
* **Consumption** — :func:`use` spends one charge.

:func:`add_charge` and :func:`remove_charge` are manual adjustments for
callers that manage charges themselves (e.g. skills with a manual recast).

None of the functions here mutate their input; each returns a new skill,
or the very same object when nothing changed.
"""
from __future__ import annotations

import datetime
import logging
from typing import NamedTuple

from skill_recast.recast.policy import is_time_based, ready_at, until_ready
from skill_recast.skills.base import Skill, new_skill_id
from skill_recast.skills.events import CreateSkillEvent

logger = logging.getLogger(__name__)


class RefreshResult(NamedTuple):
    """Outcome of :func:`refresh_casting_charge`."""

    skill: Skill
    changed: bool


def create_skill(
    event: CreateSkillEvent,
    created_at: datetime.datetime | None = None,
    skill_id: str | None = None,
) -> Skill:
    """Build a new skill from a :class:`CreateSkillEvent`.

    Parameters
    ----------
    event:
        The validated create event.
    created_at:
        Creation instant.  Defaults to ``event.created_at``.
    skill_id:
        Identifier to assign.  Defaults to a fresh UUID.

    Returns
    -------
    Skill
        A skill holding one charge if ``event.initially_available`` is
        set (zero otherwise), anchored at ``created_at``.
    """
    created = event.created_at if created_at is None else created_at
    return Skill(
        id=skill_id or new_skill_id(),
        name=event.name,
        created_at=created,
        last_used_at=None,
        casting_charge=1 if event.initially_available else 0,
        casting_charge_limit=event.casting_charge_limit,
        recast=event.recast,
        recasting_from=created,
    )


def is_unused(skill: Skill) -> bool:
    """True if the skill has never been used."""
    return skill.last_used_at is None


def has_charge(skill: Skill) -> bool:
    return skill.casting_charge > 0


def is_full_charged(skill: Skill) -> bool:
    return skill.casting_charge >= skill.casting_charge_limit


def will_recast_over_time(skill: Skill) -> bool:
    """True if a charge is currently on its way back through the passage of time."""
    if is_full_charged(skill):
        return False
    return is_time_based(skill.recast)


def recast_at(skill: Skill) -> datetime.datetime | None:
    """Instant the next charge returns, or ``None`` if no recast is scheduled."""
    if not will_recast_over_time(skill):
        return None
    return ready_at(skill.recast, skill.recasting_from)


def until_recast(
    skill: Skill, now: datetime.datetime
) -> datetime.timedelta | None:
    """Time left until :func:`recast_at`, or ``None`` if no recast is scheduled.

    The result is zero or negative when the charge is already due but has
    not been credited by :func:`refresh_casting_charge` yet.
    """
    if not will_recast_over_time(skill):
        return None
    return until_ready(skill.recast, skill.recasting_from, now)


def refresh_casting_charge(skill: Skill, now: datetime.datetime) -> RefreshResult:
    """Credit every recast period that has completed by ``now``.

    Each completed period adds one charge and moves the recasting-from
    anchor to that period's ready instant, from which the next period is
    computed.  Crediting stops when the pool is full or the next ready
    instant lies after ``now``.

    Parameters
    ----------
    skill:
        The skill to advance.
    now:
        The current instant.

    Returns
    -------
    RefreshResult
        ``(skill, False)`` with the *same* object when nothing was
        credited, otherwise the updated skill and ``True``.
    """
    if not is_time_based(skill.recast):
        return RefreshResult(skill, False)

    recasting_from = skill.recasting_from
    casting_charge = skill.casting_charge
    while casting_charge < skill.casting_charge_limit:
        ready = ready_at(skill.recast, recasting_from)
        if now < ready:
            break
        recasting_from = ready
        casting_charge += 1

    if casting_charge == skill.casting_charge:
        return RefreshResult(skill, False)

    logger.debug(
        "Skill %r recharged %d -> %d (anchor %s).",
        skill.name,
        skill.casting_charge,
        casting_charge,
        recasting_from.isoformat(),
    )
    refreshed = skill.evolve(
        casting_charge=casting_charge,
        recasting_from=recasting_from,
    )
    return RefreshResult(refreshed, True)


def use(skill: Skill, used_at: datetime.datetime) -> Skill:
    """Spend one charge at ``used_at``.

    The caller is expected to check :func:`has_charge` first; the charge is
    floored at zero regardless.  If a recast was already running before
    this use, it keeps counting from its existing anchor.  If the pool was
    full (or the policy is manual), the anchor restarts at ``used_at``.
    """
    keep_recasting = will_recast_over_time(skill)
    return skill.evolve(
        casting_charge=max(0, skill.casting_charge - 1),
        recasting_from=skill.recasting_from if keep_recasting else used_at,
        last_used_at=used_at,
    )


def add_charge(skill: Skill) -> Skill:
    """Add one charge, capped at the limit.  The anchor is left alone."""
    return skill.evolve(
        casting_charge=min(skill.casting_charge_limit, skill.casting_charge + 1)
    )


def remove_charge(skill: Skill) -> Skill:
    """Remove one charge, floored at zero."""
    return skill.evolve(casting_charge=max(0, skill.casting_charge - 1))


__all__ = [
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
]
