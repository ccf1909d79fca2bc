"""Unit tests for skill books and runtime settings.

Covers:
- config.py: RecastSettings bounds, SkillDefinition defaults and
  to_event, SkillBook.find / load / save, populate
"""
from __future__ import annotations

import datetime
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from skill_recast.config import RecastSettings, SkillBook, SkillDefinition, populate
from skill_recast.recast.policy import (
    DailyRecast,
    DayOfWeek,
    DurationRecast,
    ManualRecast,
    WeeklyRecast,
)
from skill_recast.skills.store import InMemorySkillStore

T0 = datetime.datetime(2024, 5, 13, 12, 0, 0)

_BOOK_YAML = """\
settings:
  refresh_interval_ms: 500
  log_level: INFO
skills:
  - name: Dash
    casting_charge_limit: 3
    recast:
      recast_type: duration
      recast_time: 30
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
  - name: Potion
    casting_charge_limit: 5
    recast:
      recast_type: manual
"""


@pytest.fixture()
def book_path(tmp_path: Path) -> Path:
    path = tmp_path / "skills.yaml"
    path.write_text(_BOOK_YAML, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# RecastSettings
# ---------------------------------------------------------------------------


class TestRecastSettings:
    def test_defaults(self) -> None:
        settings = RecastSettings()
        assert settings.refresh_interval_ms == 1000
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize("interval_ms", [99, 60_001])
    def test_interval_out_of_range(self, interval_ms: int) -> None:
        with pytest.raises(ValidationError):
            RecastSettings(refresh_interval_ms=interval_ms)

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            RecastSettings(log_level="LOUD")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# SkillDefinition
# ---------------------------------------------------------------------------


class TestSkillDefinition:
    def test_defaults(self) -> None:
        definition = SkillDefinition(name="Potion", recast=ManualRecast())
        assert definition.casting_charge_limit == 1
        assert definition.initially_available is True

    def test_to_event(self) -> None:
        definition = SkillDefinition(
            name="Dash",
            casting_charge_limit=2,
            recast=DurationRecast(recast_time=datetime.timedelta(seconds=5)),
            initially_available=False,
        )
        event = definition.to_event(T0)
        assert event.name == "Dash"
        assert event.casting_charge_limit == 2
        assert event.initially_available is False
        assert event.created_at == T0

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValidationError):
            SkillDefinition(name="Dash", casting_charge_limit=0, recast=ManualRecast())


# ---------------------------------------------------------------------------
# SkillBook
# ---------------------------------------------------------------------------


class TestSkillBookLoad:
    def test_load(self, book_path: Path) -> None:
        book = SkillBook.load(book_path)
        assert book.settings.refresh_interval_ms == 500
        assert book.settings.log_level == "INFO"
        assert [d.name for d in book.skills] == ["Dash", "Daily quest", "Raid lockout", "Potion"]

    def test_policies_parsed(self, book_path: Path) -> None:
        book = SkillBook.load(book_path)
        dash, daily, raid, potion = (d.recast for d in book.skills)
        assert isinstance(dash, DurationRecast)
        assert dash.recast_time == datetime.timedelta(seconds=30)
        assert isinstance(daily, DailyRecast)
        assert daily.available_at == datetime.time(5, 0)
        assert isinstance(raid, WeeklyRecast)
        assert raid.recast_day_of_week is DayOfWeek.TUESDAY
        assert isinstance(potion, ManualRecast)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SkillBook.load(tmp_path / "missing.yaml")

    def test_load_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        book = SkillBook.load(path)
        assert book.skills == []
        assert book.settings == RecastSettings()

    def test_load_invalid_policy(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "skills:\n  - name: Broken\n    recast:\n      recast_type: hourly\n",
            encoding="utf-8",
        )
        with pytest.raises(ValidationError):
            SkillBook.load(path)


class TestSkillBookSave:
    def test_save_and_reload(self, book_path: Path, tmp_path: Path) -> None:
        book = SkillBook.load(book_path)
        out = book.save(tmp_path / "nested" / "copy.yaml")
        assert out.exists()
        assert SkillBook.load(out) == book

    def test_saved_file_is_plain_yaml(self, book_path: Path, tmp_path: Path) -> None:
        out = SkillBook.load(book_path).save(tmp_path / "copy.yaml")
        data = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert list(data) == ["settings", "skills"]
        assert data["skills"][0]["recast"]["recast_type"] == "duration"


class TestSkillBookFind:
    def test_case_insensitive(self, book_path: Path) -> None:
        book = SkillBook.load(book_path)
        found = book.find("daily QUEST")
        assert found is not None
        assert found.name == "Daily quest"

    def test_missing(self, book_path: Path) -> None:
        assert SkillBook.load(book_path).find("Fireball") is None


# ---------------------------------------------------------------------------
# populate
# ---------------------------------------------------------------------------


class TestPopulate:
    async def test_creates_in_book_order(self, book_path: Path) -> None:
        book = SkillBook.load(book_path)
        store = InMemorySkillStore()
        ids = await populate(store, book, T0)
        assert len(ids) == 4
        assert [s.id for s in store.skills()] == ids
        assert [s.name for s in store.skills()] == [d.name for d in book.skills]

    async def test_initial_charges(self, book_path: Path) -> None:
        store = InMemorySkillStore()
        await populate(store, SkillBook.load(book_path), T0)
        charges = {s.name: s.casting_charge for s in store.skills()}
        assert charges == {"Dash": 1, "Daily quest": 1, "Raid lockout": 0, "Potion": 1}
        assert all(s.created_at == T0 for s in store.skills())

    async def test_empty_book(self) -> None:
        store = InMemorySkillStore()
        assert await populate(store, SkillBook(), T0) == []
        assert len(store) == 0
