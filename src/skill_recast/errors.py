"""Exception hierarchy for skill-recast.

Two families of failure are distinguished:

* **Rejected operations** — :class:`SkillNotFoundError`,
  :class:`OutOfChargeError` and :class:`DuplicateSkillIdError`.  These are
  raised by the store when an event cannot be applied to the current
  state.  The state is left untouched and the caller decides whether (and
  when) to retry.
* **Programming errors** — :class:`RecastPreconditionError`.  Raised when a
  function is called outside its contract, e.g. computing a ready instant
  for a manual policy, or mixing naive and timezone-aware instants in one
  store.  These indicate a defect in the calling code and are never
  converted into a default value.

Every error carries a stable ``error_code`` string so callers can branch
on the kind of failure without inspecting the message.
"""
from __future__ import annotations


class SkillRecastError(Exception):
    """Base class for all skill-recast errors."""

    error_code: str = "SkillRecastError"


class SkillNotFoundError(SkillRecastError, KeyError):
    """Raised when an event references a skill id that is not in the store.

    Attributes
    ----------
    skill_id:
        The id that could not be resolved.
    """

    error_code = "SkillNotFoundError"

    def __init__(self, skill_id: str) -> None:
        self.skill_id = skill_id
        super().__init__(f"Skill {skill_id!r} was not found.")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class OutOfChargeError(SkillRecastError):
    """Raised when a skill with zero charges is used.

    Attributes
    ----------
    skill_id:
        The id of the exhausted skill.
    """

    error_code = "OutOfChargeError"

    def __init__(self, skill_id: str) -> None:
        self.skill_id = skill_id
        super().__init__(f"Skill {skill_id!r} has no charge left.")


class DuplicateSkillIdError(SkillRecastError, ValueError):
    """Raised when a new skill would reuse the id of an existing one.

    Attributes
    ----------
    skill_id:
        The id that is already taken.
    """

    error_code = "DuplicateSkillIdError"

    def __init__(self, skill_id: str) -> None:
        self.skill_id = skill_id
        super().__init__(f"Skill id {skill_id!r} is already in use.")


class RecastPreconditionError(SkillRecastError, RuntimeError):
    """Raised when a recast computation is requested outside its contract."""

    error_code = "RecastPreconditionError"


__all__ = [
    "SkillRecastError",
    "SkillNotFoundError",
    "OutOfChargeError",
    "DuplicateSkillIdError",
    "RecastPreconditionError",
]
