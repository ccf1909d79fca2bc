"""CLI entry point for skill-recast.

Invoked as::

    skill-recast [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m skill_recast.cli.main

Available commands
------------------
* ``version``   — show detailed version information
* ``ready-at``  — compute when a recast policy makes a charge available
* ``simulate``  — replay uses and refreshes over a skill book on a simulated clock
"""
from __future__ import annotations

import asyncio
import datetime
import logging
import sys
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from skill_recast.config import SkillBook

console = Console()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_instant(value: str | None, default: datetime.datetime) -> datetime.datetime:
    if value is None:
        return default
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not an ISO-8601 date-time.") from exc


def _format_delta(delta: datetime.timedelta) -> str:
    total = int(delta.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    prefix = f"{days}d " if days else ""
    return f"{sign}{prefix}{hours:02d}:{minutes:02d}:{seconds:02d}"


def _parse_use(value: str) -> tuple[str, float]:
    name, sep, offset = value.rpartition("@")
    if not sep or not name:
        raise click.BadParameter(f"{value!r} must look like NAME@SECONDS.")
    try:
        return name, float(offset)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r}: {offset!r} is not a number.") from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="skill-recast")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set the log level.",
    show_default=True,
)
def cli(log_level: str) -> None:
    """Track skill charges and recast (cooldown) timers."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s — %(message)s",
    )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from skill_recast import __version__

    console.print(f"[bold]skill-recast[/bold] v{__version__}")
    console.print(f"Python {sys.version}")


# ---------------------------------------------------------------------------
# ready-at
# ---------------------------------------------------------------------------


@cli.command(name="ready-at")
@click.option(
    "--type",
    "recast_type",
    required=True,
    type=click.Choice(["duration", "daily", "weekly", "manual"], case_sensitive=False),
    help="Recast policy type.",
)
@click.option("--seconds", default=None, type=float, help="Recast time (duration policy).")
@click.option("--at", "available_at", default=None, help="Slot time HH:MM (daily/weekly).")
@click.option("--interval", default=0, show_default=True, type=int, help="Days or weeks skipped.")
@click.option("--day", default=None, help="Weekday name (weekly policy).")
@click.option("--from", "reference", default=None, help="Reference instant (ISO-8601). Defaults to now.")
@click.option("--now", "now", default=None, help="Current instant (ISO-8601). Defaults to now.")
def ready_at_command(
    recast_type: str,
    seconds: float | None,
    available_at: str | None,
    interval: int,
    day: str | None,
    reference: str | None,
    now: str | None,
) -> None:
    """Compute when a charge becomes available under a recast policy."""
    from skill_recast.convenience import (
        daily_recast,
        duration_recast,
        manual_recast,
        weekly_recast,
    )
    from skill_recast.errors import RecastPreconditionError
    from skill_recast.recast.policy import ready_at, until_ready

    current = datetime.datetime.now().replace(microsecond=0)
    reference_at = _parse_instant(reference, current)
    now_at = _parse_instant(now, current)

    recast_type = recast_type.lower()
    try:
        if recast_type == "duration":
            if seconds is None:
                raise click.UsageError("--seconds is required for a duration policy.")
            policy = duration_recast(seconds=seconds)
        elif recast_type == "daily":
            if available_at is None:
                raise click.UsageError("--at is required for a daily policy.")
            policy = daily_recast(available_at, interval_days=interval)
        elif recast_type == "weekly":
            if available_at is None or day is None:
                raise click.UsageError("--at and --day are required for a weekly policy.")
            policy = weekly_recast(day, available_at, interval_weeks=interval)
        else:
            policy = manual_recast()
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid recast policy:[/red] {exc}")
        raise SystemExit(1) from exc

    try:
        ready = ready_at(policy, reference_at)
    except RecastPreconditionError as exc:
        console.print(f"[red]No ready instant:[/red] {exc}")
        raise SystemExit(1) from exc

    remaining = until_ready(policy, reference_at, now_at)
    table = Table(title="Recast", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Policy", recast_type)
    table.add_row("Reference", reference_at.isoformat())
    table.add_row("Ready at", ready.isoformat())
    table.add_row("Remaining", _format_delta(remaining) if remaining > datetime.timedelta(0) else "ready")
    console.print(table)


# ---------------------------------------------------------------------------
# simulate
# ---------------------------------------------------------------------------


@cli.command(name="simulate")
@click.argument("book_path", type=click.Path(exists=True))
@click.option("--start", default=None, help="Simulation start (ISO-8601). Defaults to now.")
@click.option(
    "--duration",
    default=3600.0,
    show_default=True,
    type=float,
    help="Simulated seconds to run.",
)
@click.option(
    "--tick",
    default=60.0,
    show_default=True,
    type=float,
    help="Simulated seconds between refreshes.",
)
@click.option(
    "--use",
    "uses",
    multiple=True,
    help="Use a skill: NAME@SECONDS after start. Repeatable.",
)
def simulate_command(
    book_path: str,
    start: str | None,
    duration: float,
    tick: float,
    uses: tuple[str, ...],
) -> None:
    """Replay uses and periodic refreshes for the skills in BOOK_PATH.

    Time is simulated: the command does not sleep.  Each ``--use`` is
    applied at its offset after a refresh at that same instant, so charges
    that came back by then are available.
    """
    from skill_recast.config import SkillBook

    if tick <= 0 or duration < 0:
        raise click.BadParameter("--tick must be > 0 and --duration >= 0.")

    try:
        book = SkillBook.load(book_path)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Error loading skill book:[/red] {exc}")
        raise SystemExit(1) from exc

    planned = [_parse_use(u) for u in uses]
    for name, _ in planned:
        if book.find(name) is None:
            console.print(f"[red]Unknown skill in --use:[/red] {name!r}")
            raise SystemExit(1)

    start_at = _parse_instant(start, datetime.datetime.now().replace(microsecond=0))
    console.print(
        f"[bold cyan]simulate[/bold cyan] — book={book_path!r}, "
        f"start={start_at.isoformat()}, duration={duration}s, tick={tick}s"
    )
    asyncio.run(_simulate(book, start_at, duration, tick, planned))


async def _simulate(
    book: SkillBook,
    start_at: datetime.datetime,
    duration: float,
    tick: float,
    planned: list[tuple[str, float]],
) -> None:
    from skill_recast.clock import ManualClock, RefreshChargeAutomation
    from skill_recast.config import populate
    from skill_recast.errors import OutOfChargeError
    from skill_recast.skills import logic
    from skill_recast.skills.events import UseSkillEvent
    from skill_recast.skills.store import InMemorySkillStore

    clock = ManualClock(start_at)
    store = InMemorySkillStore()
    automation = RefreshChargeAutomation(store, clock=clock)
    ids = await populate(store, book, start_at)
    ids_by_name = {d.name.lower(): skill_id for d, skill_id in zip(book.skills, ids)}

    offsets: set[float] = {o for _, o in planned if 0 <= o <= duration}
    steps = int(duration // tick)
    offsets.update(i * tick for i in range(steps + 1))
    offsets.add(duration)

    log = Table(title="Uses", show_header=True)
    log.add_column("Time", style="bold")
    log.add_column("Skill")
    log.add_column("Result")

    for offset in sorted(offsets):
        clock.set(start_at + datetime.timedelta(seconds=offset))
        await automation.tick()
        for name, use_offset in planned:
            if use_offset != offset:
                continue
            event = UseSkillEvent(skill_id=ids_by_name[name.lower()], used_at=clock())
            try:
                await store.handle_use(event)
            except OutOfChargeError:
                log.add_row(clock().isoformat(), name, "[red]out of charge[/red]")
            else:
                log.add_row(clock().isoformat(), name, "[green]used[/green]")

    if planned:
        console.print(log)

    table = Table(title=f"Skills at {clock().isoformat()}", show_header=True)
    table.add_column("Skill", style="bold")
    table.add_column("Charges")
    table.add_column("Recast")
    table.add_column("Next recast")
    for skill in store.skills():
        next_at = logic.recast_at(skill)
        table.add_row(
            skill.name,
            f"{skill.casting_charge}/{skill.casting_charge_limit}",
            skill.recast.recast_type,
            next_at.isoformat() if next_at is not None else "—",
        )
    console.print(table)
    logger.info("Simulation finished after %d refresh(es).", automation.refresh_count)


if __name__ == "__main__":
    cli()
