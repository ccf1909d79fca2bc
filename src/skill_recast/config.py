"""Skill books — YAML files declaring settings and a starting set of skills.

A *skill book* bundles runtime settings with the skill definitions a
session starts from.  It is a seed file for building create events, not a
persistence format for store state: charges and anchors are never
written back.

Example file::

    settings:
      refresh_interval_ms: 500
      log_level: INFO
    skills:
      - name: Dash
        casting_charge_limit: 3
        recast:
          recast_type: duration
          recast_time: 30          # seconds, or "PT30S"
      - name: Daily quest
        recast:
          recast_type: daily
          available_at: "05:00"
      - name: Raid lockout
        initially_available: false
        recast:
          recast_type: weekly
          recast_day_of_week: tuesday
          available_at: "08:00"
"""
from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from skill_recast.clock import DEFAULT_REFRESH_INTERVAL_MS
from skill_recast.recast.policy import RecastPolicy
from skill_recast.skills.base import CastingChargeLimit, SkillName
from skill_recast.skills.events import CreateSkillEvent
from skill_recast.skills.store import SkillMutator

logger = logging.getLogger(__name__)


class RecastSettings(BaseModel):
    """Runtime settings.

    Attributes
    ----------
    refresh_interval_ms:
        Period of the charge refresh automation, 100 to 60000 ms.
    log_level:
        Log level applied by the CLI.
    """

    refresh_interval_ms: int = Field(default=DEFAULT_REFRESH_INTERVAL_MS, ge=100, le=60_000)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


class SkillDefinition(BaseModel):
    """Declarative description of one skill to create."""

    name: SkillName
    casting_charge_limit: CastingChargeLimit = 1
    recast: RecastPolicy
    initially_available: bool = True

    def to_event(self, created_at: datetime.datetime) -> CreateSkillEvent:
        """Build the create event for this definition at ``created_at``."""
        return CreateSkillEvent(
            name=self.name,
            casting_charge_limit=self.casting_charge_limit,
            recast=self.recast,
            initially_available=self.initially_available,
            created_at=created_at,
        )


class SkillBook(BaseModel):
    """Settings plus an ordered list of skill definitions."""

    settings: RecastSettings = Field(default_factory=RecastSettings)
    skills: list[SkillDefinition] = Field(default_factory=list)

    def find(self, name: str) -> SkillDefinition | None:
        """Return the first definition named ``name`` (case-insensitive)."""
        lowered = name.lower()
        for definition in self.skills:
            if definition.name.lower() == lowered:
                return definition
        return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> SkillBook:
        """Read a skill book from a YAML file.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        pydantic.ValidationError
            If the file content is not a valid skill book.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Skill book not found at {path}.")
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        book = cls.model_validate(data)
        logger.info("Loaded skill book %s with %d skill(s).", path, len(book.skills))
        return book

    def save(self, path: str | Path) -> Path:
        """Write this skill book to ``path`` as YAML and return the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        logger.info("Saved skill book to %s", path)
        return path


async def populate(
    mutator: SkillMutator,
    book: SkillBook,
    created_at: datetime.datetime,
) -> list[str]:
    """Create every skill of ``book`` in ``mutator``, in book order.

    All skills share the same ``created_at``; the store's stable ordering
    keeps them in book order.

    Returns
    -------
    list[str]
        The ids of the created skills.
    """
    ids: list[str] = []
    for definition in book.skills:
        ids.append(await mutator.handle_create(definition.to_event(created_at)))
    logger.debug("Populated store with %d skill(s).", len(ids))
    return ids


__all__ = [
    "RecastSettings",
    "SkillDefinition",
    "SkillBook",
    "populate",
]
