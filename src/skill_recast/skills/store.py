"""Skill store — the authoritative collection of skills.

The store exposes two capability surfaces:

* :class:`SkillReader` — snapshot reads, point lookups and change
  subscription.
* :class:`SkillMutator` — one ``handle_*`` coroutine per
  :mod:`event <skill_recast.skills.events>`.

:class:`InMemorySkillStore` implements both.  The current state is an
immutable tuple sorted by ``created_at``, with ties kept in creation
order.  Every successful write swaps in a new tuple and then notifies
subscribers with it, so readers only ever see complete snapshots.  Writes
are serialised through a single :class:`asyncio.Lock`, which keeps a
periodic refresh from interleaving with a user-initiated use, create or
delete.

The handlers are coroutines for interface uniformity with stores that sit
on real I/O; the in-memory implementation never suspends inside a write.

All instants in one store must be of one kind, either all naive or all
timezone-aware.  A mismatching event is rejected with
:class:`~skill_recast.errors.RecastPreconditionError`.
"""
from __future__ import annotations

import asyncio
import datetime
import logging
from typing import Callable, Protocol

from skill_recast.errors import (
    DuplicateSkillIdError,
    OutOfChargeError,
    RecastPreconditionError,
    SkillNotFoundError,
)
from skill_recast.skills import logic
from skill_recast.skills.base import Skill, new_skill_id
from skill_recast.skills.events import (
    AddChargeEvent,
    CreateSkillEvent,
    DeleteSkillEvent,
    RefreshChargeEvent,
    UseSkillEvent,
)

logger = logging.getLogger(__name__)

SkillObserver = Callable[[tuple[Skill, ...]], None]


def _is_aware(instant: datetime.datetime) -> bool:
    return instant.utcoffset() is not None


class SkillReader(Protocol):
    """Read-side operations of a skill store."""

    def skills(self) -> tuple[Skill, ...]:
        ...

    def subscribe(self, observer: SkillObserver) -> Callable[[], None]:
        ...

    async def get_all(self) -> list[Skill]:
        ...

    async def get_by_id(self, skill_id: str) -> Skill | None:
        ...


class SkillMutator(Protocol):
    """Write-side operations of a skill store."""

    async def handle_create(self, event: CreateSkillEvent) -> str:
        ...

    async def handle_use(self, event: UseSkillEvent) -> None:
        ...

    async def handle_delete(self, event: DeleteSkillEvent) -> None:
        ...

    async def handle_add_charge(self, event: AddChargeEvent) -> None:
        ...

    async def handle_refresh(self, event: RefreshChargeEvent) -> list[str]:
        ...


class InMemorySkillStore:
    """In-memory :class:`SkillReader` and :class:`SkillMutator`.

    Parameters
    ----------
    id_factory:
        Zero-argument callable producing ids for new skills.  Defaults to
        random UUID strings.

    Example
    -------
    ::

        store = InMemorySkillStore()
        skill_id = await store.handle_create(create_event)
        await store.handle_use(UseSkillEvent(skill_id=skill_id, used_at=now))
        await store.handle_refresh(RefreshChargeEvent(now=later))
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._skills: tuple[Skill, ...] = ()
        self._observers: list[SkillObserver] = []
        self._id_factory = id_factory or new_skill_id
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def skills(self) -> tuple[Skill, ...]:
        """Return the current snapshot, ordered by ``created_at``."""
        return self._skills

    def subscribe(self, observer: SkillObserver) -> Callable[[], None]:
        """Register ``observer`` to receive every new snapshot.

        Returns
        -------
        Callable[[], None]
            Call it to unsubscribe.  Calling it twice is harmless.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    async def get_all(self) -> list[Skill]:
        """Return a list copy of the current snapshot."""
        return list(self._skills)

    async def get_by_id(self, skill_id: str) -> Skill | None:
        """Return the skill with ``skill_id``, or ``None``."""
        return self._find(skill_id)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    async def handle_create(self, event: CreateSkillEvent) -> str:
        """Create a skill and return its id.

        Raises
        ------
        DuplicateSkillIdError
            If the id factory returns an id that is already in the store.
        RecastPreconditionError
            If ``event.created_at`` is naive while the stored skills are
            timezone-aware, or the other way around.
        """
        async with self._lock:
            if self._skills:
                self._check_instant(event.created_at, self._skills[0])
            skill_id = self._id_factory()
            if self._find(skill_id) is not None:
                logger.warning("Id factory returned existing skill id %s.", skill_id)
                raise DuplicateSkillIdError(skill_id)
            skill = logic.create_skill(event, skill_id=skill_id)
            self._publish(self._save_or_update(self._skills, skill))
        logger.debug("Created skill %r (%s).", skill.name, skill.id)
        return skill.id

    async def handle_use(self, event: UseSkillEvent) -> None:
        """Spend one charge of the referenced skill.

        Raises
        ------
        SkillNotFoundError
            If the skill does not exist.
        OutOfChargeError
            If the skill has no charge left.
        RecastPreconditionError
            If ``event.used_at`` and the skill's instants disagree on
            timezone awareness.
        """
        async with self._lock:
            skill = self._require(event.skill_id)
            self._check_instant(event.used_at, skill)
            if not logic.has_charge(skill):
                logger.warning("Rejected use of skill %r: out of charge.", skill.name)
                raise OutOfChargeError(event.skill_id)
            used = logic.use(skill, event.used_at)
            self._publish(self._save_or_update(self._skills, used))
        logger.debug(
            "Used skill %r; %d/%d charges left.",
            used.name,
            used.casting_charge,
            used.casting_charge_limit,
        )

    async def handle_delete(self, event: DeleteSkillEvent) -> None:
        """Remove the referenced skill.  Unknown ids are ignored."""
        async with self._lock:
            remaining = tuple(s for s in self._skills if s.id != event.skill_id)
            if len(remaining) == len(self._skills):
                logger.debug("Delete of unknown skill %s ignored.", event.skill_id)
                return
            self._publish(remaining)
        logger.debug("Deleted skill %s.", event.skill_id)

    async def handle_add_charge(self, event: AddChargeEvent) -> None:
        """Add one charge to the referenced skill, capped at its limit.

        Raises
        ------
        SkillNotFoundError
            If the skill does not exist.
        """
        async with self._lock:
            skill = self._require(event.skill_id)
            self._publish(self._save_or_update(self._skills, logic.add_charge(skill)))

    async def handle_refresh(self, event: RefreshChargeEvent) -> list[str]:
        """Advance every skill to ``event.now``.

        Only skills whose charge actually changed are written back; the
        others keep their object identity.  Subscribers are notified once,
        and only if at least one skill changed.

        Returns
        -------
        list[str]
            Ids of the skills that gained charges.

        Raises
        ------
        RecastPreconditionError
            If ``event.now`` and the stored instants disagree on timezone
            awareness.  Nothing is refreshed in that case.
        """
        async with self._lock:
            if self._skills:
                self._check_instant(event.now, self._skills[0])
            snapshot = self._skills
            changed: list[str] = []
            for skill in self._skills:
                result = logic.refresh_casting_charge(skill, event.now)
                if result.changed:
                    snapshot = self._save_or_update(snapshot, result.skill)
                    changed.append(skill.id)
            if changed:
                self._publish(snapshot)
        if changed:
            logger.debug("Refresh at %s recharged %d skill(s).", event.now, len(changed))
        return changed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find(self, skill_id: str) -> Skill | None:
        for skill in self._skills:
            if skill.id == skill_id:
                return skill
        return None

    def _require(self, skill_id: str) -> Skill:
        skill = self._find(skill_id)
        if skill is None:
            logger.warning("Skill %s not found.", skill_id)
            raise SkillNotFoundError(skill_id)
        return skill

    @staticmethod
    def _check_instant(instant: datetime.datetime, skill: Skill) -> None:
        if _is_aware(instant) == _is_aware(skill.created_at):
            return
        got = "timezone-aware" if _is_aware(instant) else "naive"
        held = "naive" if got == "timezone-aware" else "timezone-aware"
        raise RecastPreconditionError(
            f"Got a {got} instant {instant.isoformat()} for a store holding "
            f"{held} instants; use one kind of clock throughout."
        )

    @staticmethod
    def _save_or_update(
        skills: tuple[Skill, ...], skill: Skill
    ) -> tuple[Skill, ...]:
        # An update keeps its slot so ties on created_at stay in insertion order.
        updated = [skill if s.id == skill.id else s for s in skills]
        if not any(s.id == skill.id for s in skills):
            updated.append(skill)
        updated.sort(key=lambda s: s.created_at)
        return tuple(updated)

    def _publish(self, snapshot: tuple[Skill, ...]) -> None:
        self._skills = snapshot
        for observer in list(self._observers):
            observer(snapshot)

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return any(s.id == skill_id for s in self._skills)

    def __repr__(self) -> str:
        return f"InMemorySkillStore(n_skills={len(self._skills)})"


__all__ = [
    "SkillObserver",
    "SkillReader",
    "SkillMutator",
    "InMemorySkillStore",
]
