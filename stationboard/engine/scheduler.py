"""Polling cadence, manual refresh and countdown for the live board."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import NamedTuple

from ..errors import StationBoardError, TransportError
from ..models.match import BoardCycle, RawSnapshot
from ..utils.logging import log
from .cycle import build_cycle

FetchFn = Callable[[], Awaitable[RawSnapshot]]


class SchedulerStatus(NamedTuple):
    seconds_to_refresh: int
    in_flight: bool
    last_error: str | None
    last_success: float | None


class RefreshScheduler:
    """Owns the fetch loop and publishes one BoardCycle per successful fetch.

    Three tasks run while started: the poll cadence, a one-second countdown
    and a one-second clock for elapsed timers. Only one fetch is ever in
    flight; a trigger during a fetch is ignored. A failed fetch leaves the
    last published cycle in place.
    """

    def __init__(
        self,
        fetch: FetchFn,
        on_cycle: Callable[[BoardCycle], None] | None = None,
        on_status: Callable[[SchedulerStatus], None] | None = None,
        on_clock: Callable[[float], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        poll_interval: float = 30.0,
        countdown_seconds: int = 30,
        fetch_deadline: float = 20.0,
        clock_interval: float = 1.0,
    ):
        self._fetch: FetchFn = fetch
        self.on_cycle = on_cycle
        self.on_status = on_status
        self.on_clock = on_clock
        self.on_error = on_error
        self.poll_interval: float = poll_interval
        self.countdown_seconds: int = countdown_seconds
        self.fetch_deadline: float = fetch_deadline
        self.clock_interval: float = clock_interval

        self._cycle: BoardCycle | None = None
        self._countdown: int = countdown_seconds
        self._in_flight: bool = False
        self._last_error: str | None = None
        self._last_success: float | None = None
        self._fetch_task: asyncio.Task | None = None
        self._tasks: list[asyncio.Task] = []
        self._stopped: bool = False

    @property
    def cycle(self) -> BoardCycle | None:
        """The most recently published cycle"""
        return self._cycle

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def running(self) -> bool:
        return bool(self._tasks) and not self._stopped

    @property
    def status(self) -> SchedulerStatus:
        return SchedulerStatus(
            seconds_to_refresh=self._countdown,
            in_flight=self._in_flight,
            last_error=self._last_error,
            last_success=self._last_success,
        )

    def start(self) -> None:
        """Start the background tasks and kick off the first fetch"""
        if self._tasks or self._stopped:
            return
        loop = asyncio.get_running_loop()
        self._tasks = [
            loop.create_task(self._cadence_loop(), name="stationboard-cadence"),
            loop.create_task(self._countdown_loop(), name="stationboard-countdown"),
            loop.create_task(self._clock_loop(), name="stationboard-clock"),
        ]
        log(f"⏱️  Scheduler started (poll every {self.poll_interval}s)")
        self.trigger()

    def trigger(self) -> bool:
        """Start a fetch unless one is already running. Returns True if started."""
        if self._stopped:
            return False
        if self._in_flight:
            log("⏭️  Refresh already in flight, ignoring trigger", logging.DEBUG)
            return False

        self._in_flight = True
        self._countdown = self.countdown_seconds
        self._notify_status()
        self._fetch_task = asyncio.get_running_loop().create_task(self._run_fetch())
        self._fetch_task.add_done_callback(self._fetch_done)
        return True

    async def refresh(self) -> BoardCycle | None:
        """Run one cycle inline. Returns the new cycle, or None if nothing was published."""
        if self._stopped or self._in_flight:
            return None
        self._in_flight = True
        self._notify_status()
        return await self._run_fetch()

    def tick_countdown(self) -> int:
        if self._countdown > 0:
            self._countdown -= 1
        self._notify_status()
        return self._countdown

    async def stop(self) -> None:
        """Cancel every timer and any in-flight fetch; nothing fires afterwards"""
        self._stopped = True
        tasks = list(self._tasks)
        if self._fetch_task is not None and not self._fetch_task.done():
            tasks.append(self._fetch_task)
        self._tasks = []
        self._fetch_task = None

        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight = False
        log("🛑 Scheduler stopped")

    async def _run_fetch(self) -> BoardCycle | None:
        log("🔄 Fetching bracket snapshot...")
        cycle = None
        try:
            raw = await asyncio.wait_for(self._fetch(), timeout=self.fetch_deadline)
            cycle = build_cycle(raw)
        except asyncio.TimeoutError:
            self._record_error(
                TransportError(f"Fetch exceeded {self.fetch_deadline}s deadline")
            )
        except StationBoardError as e:
            self._record_error(e)
        finally:
            self._in_flight = False
            self._countdown = self.countdown_seconds

        if cycle is not None and not self._stopped:
            self._publish(cycle)
        self._notify_status()
        return cycle

    def _fetch_done(self, task: asyncio.Task) -> None:
        # Triggered fetches are never awaited, so unexpected failures land here
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        log(f"💥 Unexpected error during refresh: {error!r}", logging.ERROR)
        self._record_error(error)
        self._notify_status()

    def _publish(self, cycle: BoardCycle) -> None:
        if self._cycle is not None and self._cycle.matches and not cycle.matches:
            log("⚠️  Fetch returned no active sets - clearing the board")
        self._cycle = cycle
        self._last_error = None
        self._last_success = cycle.fetched_at
        log(
            f"✅ Cycle published: {len(cycle.called)} called, "
            f"{len(cycle.playing)} playing, {len(cycle.upcoming)} upcoming"
        )
        if self.on_cycle:
            self.on_cycle(cycle)

    def _record_error(self, error: Exception) -> None:
        self._last_error = f"{type(error).__name__}: {error}"
        log(f"❌ Refresh failed, keeping last board: {self._last_error}", logging.ERROR)
        if self.on_error and not self._stopped:
            self.on_error(error)

    def _notify_status(self) -> None:
        if self.on_status and not self._stopped:
            self.on_status(self.status)

    async def _cadence_loop(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            self.trigger()

    async def _countdown_loop(self) -> None:
        while True:
            await asyncio.sleep(1.0)
            self.tick_countdown()

    async def _clock_loop(self) -> None:
        while True:
            await asyncio.sleep(self.clock_interval)
            if self.on_clock:
                self.on_clock(time.time())
