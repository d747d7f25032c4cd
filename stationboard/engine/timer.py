"""Live mm:ss durations for displayed sets."""

import time
from collections.abc import Iterable

from ..models.match import DisplayMatch

ZERO = "00:00"


def format_elapsed(started_at: int | float | None, now: float | None = None) -> str:
    """Elapsed time since ``started_at`` (epoch seconds) as mm:ss.

    Sets that have not started, or whose start is in the future, read 00:00.
    Minutes keep counting past 59.
    """
    if not started_at:
        return ZERO
    if now is None:
        now = time.time()

    diff = int(now - started_at)
    if diff < 0:
        return ZERO

    minutes, seconds = divmod(diff, 60)
    return f"{minutes:02d}:{seconds:02d}"


class ElapsedTimer:
    """Clock for one displayed set"""

    def __init__(self, match_id: str, started_at: int | None):
        self.match_id: str = match_id
        self.started_at: int | None = started_at

    def render(self, now: float | None = None) -> str:
        return format_elapsed(self.started_at, now)


class ElapsedTimers:
    """One ElapsedTimer per displayed set, following the displayed set list"""

    def __init__(self) -> None:
        self._timers: dict[str, ElapsedTimer] = {}

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._timers

    def sync(self, matches: Iterable[DisplayMatch]) -> None:
        """Create timers for new sets, drop timers for sets no longer shown"""
        current: dict[str, ElapsedTimer] = {}
        for match in matches:
            timer = self._timers.get(match.id)
            if timer is None:
                timer = ElapsedTimer(match.id, match.started_at)
            else:
                timer.started_at = match.started_at
            current[match.id] = timer
        self._timers = current

    def render_all(self, now: float | None = None) -> dict[str, str]:
        if now is None:
            now = time.time()
        return {match_id: timer.render(now) for match_id, timer in self._timers.items()}

    def clear(self) -> None:
        self._timers = {}
