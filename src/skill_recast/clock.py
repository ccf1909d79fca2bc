"""Clock sources and the periodic charge-refresh automation.

The store never reads the time on its own.  A *clock* is any zero-argument
callable returning the current :class:`datetime.datetime`:

* :class:`SystemClock` — wall-clock time.
* :class:`ManualClock` — a clock you move by hand, for tests and
  simulations.

:class:`RefreshChargeAutomation` is a repeating :mod:`asyncio` task that
reads a clock every ``interval_ms`` and hands a
:class:`~skill_recast.skills.events.RefreshChargeEvent` to a
:class:`~skill_recast.skills.store.SkillMutator`.  The interval only
affects how quickly refills become visible, never how many charges are
credited.  Stopping the automation cancels the task; each refresh is
atomic, so there is nothing to unwind.
"""
from __future__ import annotations

import asyncio
import datetime
import logging
from types import TracebackType
from typing import Protocol

from skill_recast.skills.events import RefreshChargeEvent
from skill_recast.skills.store import SkillMutator

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS: int = 1000


class CurrentDateTime(Protocol):
    """A source of "now"."""

    def __call__(self) -> datetime.datetime:
        ...


class SystemClock:
    """Wall-clock time.

    Parameters
    ----------
    tz:
        Timezone for the returned instants.  ``None`` (default) returns
        naive local time.
    """

    def __init__(self, tz: datetime.tzinfo | None = None) -> None:
        self._tz = tz

    def __call__(self) -> datetime.datetime:
        return datetime.datetime.now(self._tz)

    def __repr__(self) -> str:
        return f"SystemClock(tz={self._tz!r})"


class ManualClock:
    """A clock that only moves when told to.

    Parameters
    ----------
    start:
        Initial instant.
    """

    def __init__(self, start: datetime.datetime) -> None:
        self._now = start

    def __call__(self) -> datetime.datetime:
        return self._now

    @property
    def now(self) -> datetime.datetime:
        return self._now

    def set(self, instant: datetime.datetime) -> None:
        """Jump to ``instant``.  Moving backwards is allowed."""
        self._now = instant

    def advance(self, delta: datetime.timedelta) -> datetime.datetime:
        """Move forward by ``delta`` and return the new instant."""
        self._now = self._now + delta
        return self._now

    def __repr__(self) -> str:
        return f"ManualClock(now={self._now.isoformat()!r})"


class RefreshChargeAutomation:
    """Periodically refresh every skill's charges from a clock.

    Parameters
    ----------
    mutator:
        The store to refresh.
    clock:
        Source of the current instant.  Defaults to :class:`SystemClock`.
    interval_ms:
        Period between refreshes in milliseconds.  Must be positive.

    Example
    -------
    ::

        store = InMemorySkillStore()
        async with RefreshChargeAutomation(store, interval_ms=250):
            ...  # charges refill in the background
    """

    def __init__(
        self,
        mutator: SkillMutator,
        clock: CurrentDateTime | None = None,
        interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}.")
        self._mutator = mutator
        self._clock: CurrentDateTime = clock or SystemClock()
        self._interval_ms = interval_ms
        self._task: asyncio.Task[None] | None = None
        self._refresh_count: int = 0

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_running(self) -> bool:
        """True while the repeating task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def refresh_count(self) -> int:
        """Number of refresh events dispatched so far."""
        return self._refresh_count

    async def tick(self) -> list[str]:
        """Dispatch one refresh event for the clock's current instant.

        Returns
        -------
        list[str]
            Ids of the skills that gained charges.
        """
        event = RefreshChargeEvent(now=self._clock())
        self._refresh_count += 1
        return await self._mutator.handle_refresh(event)

    def start(self) -> None:
        """Start the repeating task on the running event loop.

        The first refresh happens immediately.

        Raises
        ------
        RuntimeError
            If the automation is already running.
        """
        if self.is_running:
            raise RuntimeError("RefreshChargeAutomation is already running.")
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Charge refresh automation started (every %d ms).", self._interval_ms)

    async def stop(self) -> None:
        """Cancel the repeating task and wait for it to finish.

        If the loop had already died from an error, that error is re-raised
        here.  Cancelling the coroutine that calls ``stop()`` propagates as
        usual; the automation then stays registered and ``stop()`` can be
        awaited again.
        """
        task = self._task
        if task is None:
            return
        task.cancel()
        # wait() does not forward our own cancellation into the task.
        await asyncio.wait([task])
        self._task = None
        if not task.cancelled():
            task.result()
        logger.info(
            "Charge refresh automation stopped after %d refresh(es).",
            self._refresh_count,
        )

    async def _run(self) -> None:
        interval = self._interval_ms / 1000.0
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception("Charge refresh failed; stopping automation.")
                raise
            await asyncio.sleep(interval)

    async def __aenter__(self) -> RefreshChargeAutomation:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    def __repr__(self) -> str:
        return (
            f"RefreshChargeAutomation(interval_ms={self._interval_ms}, "
            f"running={self.is_running}, refreshes={self._refresh_count})"
        )


__all__ = [
    "DEFAULT_REFRESH_INTERVAL_MS",
    "CurrentDateTime",
    "SystemClock",
    "ManualClock",
    "RefreshChargeAutomation",
]
