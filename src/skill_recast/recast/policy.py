"""Recast policies — when does a spent charge become available again?

A policy is one of four closed variants, discriminated by ``recast_type``:

* :class:`DurationRecast` — a fixed cooldown measured from the anchor.
* :class:`DailyRecast` — a daily time slot, optionally skipping days.
* :class:`WeeklyRecast` — a weekly slot on a given weekday, optionally
  skipping weeks.
* :class:`ManualRecast` — no automatic availability.

The first three are *time-based*: :func:`ready_at` can compute the instant
a charge returns from a reference instant.  Calling it on a manual policy
is a programming error and raises
:class:`~skill_recast.errors.RecastPreconditionError`.

Calendar arithmetic
-------------------
Daily and weekly policies roll over when the reference instant is already
at or past the slot on its own day.  With ``available_at=08:00`` and
``interval_days=0`` a reference of 07:00 yields 08:00 the same day, while
a reference of 09:00 (or exactly 08:00) yields 08:00 the next day.  This
guarantees that feeding a ready instant back in as the next reference
always moves forward.
"""
from __future__ import annotations

import datetime
from enum import IntEnum
from typing import Annotated, Literal, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

from skill_recast.errors import RecastPreconditionError


class DayOfWeek(IntEnum):
    """Weekday numbered like :meth:`datetime.date.weekday` (Monday is 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: object) -> DayOfWeek:
        """Accept a member, its integer value, or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown day of week {value!r}.") from None
        return cls(value)


def _coerce_day(value: object) -> object:
    if isinstance(value, str):
        return DayOfWeek.parse(value)
    return value


class _RecastBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DurationRecast(_RecastBase):
    """Charge returns a fixed ``recast_time`` after the anchor.

    Attributes
    ----------
    recast_time:
        Cooldown length.  Must be strictly positive.
    """

    recast_type: Literal["duration"] = "duration"
    recast_time: datetime.timedelta

    @field_validator("recast_time")
    @classmethod
    def check_positive(cls, value: datetime.timedelta) -> datetime.timedelta:
        if value <= datetime.timedelta(0):
            raise ValueError(f"recast_time must be positive, got {value}.")
        return value


def _naive_time(value: datetime.time) -> datetime.time:
    if value.tzinfo is not None:
        raise ValueError("available_at must be a naive time of day.")
    return value


NaiveTime = Annotated[datetime.time, AfterValidator(_naive_time)]


class DailyRecast(_RecastBase):
    """Charge returns at ``available_at`` every ``interval_days + 1`` days.

    Attributes
    ----------
    available_at:
        Local time of day at which the charge returns.
    interval_days:
        Number of whole days skipped before the slot.  ``0`` means the
        next occurrence of ``available_at``.
    """

    recast_type: Literal["daily"] = "daily"
    available_at: NaiveTime
    interval_days: int = Field(default=0, ge=0)


class WeeklyRecast(_RecastBase):
    """Charge returns on ``recast_day_of_week`` at ``available_at``.

    Attributes
    ----------
    recast_day_of_week:
        Weekday of the slot.  Accepts names (``"friday"``) or integers.
    available_at:
        Local time of day at which the charge returns.
    interval_weeks:
        Number of whole weeks skipped before the slot.
    """

    recast_type: Literal["weekly"] = "weekly"
    recast_day_of_week: Annotated[DayOfWeek, BeforeValidator(_coerce_day)]
    available_at: NaiveTime
    interval_weeks: int = Field(default=0, ge=0)


class ManualRecast(_RecastBase):
    """Charges change only through explicit add/use operations."""

    recast_type: Literal["manual"] = "manual"


TimeBasedRecast = Union[DurationRecast, DailyRecast, WeeklyRecast]

RecastPolicy = Annotated[
    Union[DurationRecast, DailyRecast, WeeklyRecast, ManualRecast],
    Field(discriminator="recast_type"),
]


def is_time_based(policy: RecastPolicy) -> bool:
    """True when the policy refills charges as time passes."""
    if isinstance(policy, (DurationRecast, DailyRecast, WeeklyRecast)):
        return True
    if isinstance(policy, ManualRecast):
        return False
    raise RecastPreconditionError(f"Unknown recast policy {policy!r}.")


def _at_slot(
    day: datetime.date, slot: datetime.time, reference: datetime.datetime
) -> datetime.datetime:
    return datetime.datetime.combine(day, slot, tzinfo=reference.tzinfo)


def ready_at(policy: RecastPolicy, reference: datetime.datetime) -> datetime.datetime:
    """Return the instant a charge becomes available, counting from ``reference``.

    Parameters
    ----------
    policy:
        A time-based recast policy.
    reference:
        The recasting-from anchor.

    Returns
    -------
    datetime.datetime
        The ready instant, in the same timezone (if any) as ``reference``.

    Raises
    ------
    RecastPreconditionError
        If ``policy`` is a :class:`ManualRecast` or not a recast policy.
    """
    if isinstance(policy, DurationRecast):
        return reference + policy.recast_time

    if isinstance(policy, DailyRecast):
        slot_passed = reference.time() >= policy.available_at
        days = policy.interval_days + (1 if slot_passed else 0)
        day = reference.date() + datetime.timedelta(days=days)
        return _at_slot(day, policy.available_at, reference)

    if isinstance(policy, WeeklyRecast):
        slot_passed = (
            reference.weekday() == policy.recast_day_of_week
            and reference.time() >= policy.available_at
        )
        weeks = policy.interval_weeks + (1 if slot_passed else 0)
        base = reference.date() + datetime.timedelta(weeks=weeks)
        offset = (policy.recast_day_of_week - base.weekday()) % 7
        day = base + datetime.timedelta(days=offset)
        return _at_slot(day, policy.available_at, reference)

    if isinstance(policy, ManualRecast):
        raise RecastPreconditionError(
            "A manual recast has no ready instant; check is_time_based() first."
        )
    raise RecastPreconditionError(f"Unknown recast policy {policy!r}.")


def until_ready(
    policy: RecastPolicy,
    reference: datetime.datetime,
    now: datetime.datetime,
) -> datetime.timedelta:
    """Time left from ``now`` until :func:`ready_at`.

    Negative or zero when the charge is already due.
    """
    return ready_at(policy, reference) - now


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
