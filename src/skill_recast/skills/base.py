"""Skill value object.

A *skill* is a named, reusable action with a bounded pool of charges.  Each
use spends one charge; the skill's :mod:`recast policy
<skill_recast.recast.policy>` decides when spent charges come back.

Design principles
-----------------
* Skills are immutable.  Every transition in :mod:`skill_recast.skills.logic`
  returns a new, fully re-validated :class:`Skill`, so the charge bounds
  hold for every value that exists.
* ``recasting_from`` is not the last-use instant.  It is the anchor for the
  *next* recast and only moves when a recast period completes or a use
  starts a fresh cooldown from a full pool.
"""
from __future__ import annotations

import datetime
import uuid
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)

from skill_recast.recast.policy import RecastPolicy

MAX_NAME_LENGTH: int = 100
MAX_CASTING_CHARGE: int = 1000


def _check_uuid(value: str) -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise ValueError(f"{value!r} is not a valid skill id.") from None
    return value


SkillId = Annotated[str, AfterValidator(_check_uuid)]
SkillName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_NAME_LENGTH),
]
CastingCharge = Annotated[int, Field(ge=0, le=MAX_CASTING_CHARGE)]
CastingChargeLimit = Annotated[int, Field(ge=1, le=MAX_CASTING_CHARGE)]


def new_skill_id() -> str:
    """Return a fresh random skill id."""
    return str(uuid.uuid4())


class Skill(BaseModel):
    """A skill and its current charge state.

    Attributes
    ----------
    id:
        Unique identifier (UUID string).  Assigned at creation, never reused.
    name:
        Display name, 1 to 100 characters after stripping.
    created_at:
        Creation instant.  The store orders skills by this field.
    last_used_at:
        Instant of the most recent use, ``None`` if never used.
    casting_charge:
        Charges currently available, within ``[0, casting_charge_limit]``.
    casting_charge_limit:
        Maximum number of charges the skill can hold.
    recast:
        The recast policy governing refills.
    recasting_from:
        Reference instant for the next recast computation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: SkillId
    name: SkillName
    created_at: datetime.datetime
    last_used_at: datetime.datetime | None = None
    casting_charge: CastingCharge
    casting_charge_limit: CastingChargeLimit
    recast: RecastPolicy
    recasting_from: datetime.datetime

    @model_validator(mode="after")
    def check_charge_within_limit(self) -> Skill:
        if self.casting_charge > self.casting_charge_limit:
            raise ValueError(
                f"casting_charge ({self.casting_charge}) exceeds "
                f"casting_charge_limit ({self.casting_charge_limit})."
            )
        return self

    def evolve(self, **changes: object) -> Skill:
        """Return a re-validated copy with ``changes`` applied."""
        data = dict(self)
        data.update(changes)
        return Skill.model_validate(data)

    def __repr__(self) -> str:
        return (
            f"Skill(name={self.name!r}, "
            f"charge={self.casting_charge}/{self.casting_charge_limit}, "
            f"recast={self.recast.recast_type!r})"
        )


__all__ = [
    "MAX_NAME_LENGTH",
    "MAX_CASTING_CHARGE",
    "SkillId",
    "SkillName",
    "CastingCharge",
    "CastingChargeLimit",
    "Skill",
    "new_skill_id",
]
