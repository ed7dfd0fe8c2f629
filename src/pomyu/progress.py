from __future__ import annotations

"""Elapsed-time estimation from an unreliable tick source.

Each delivered tick produces two candidates:
 - accumulation: previous elapsed + the nominal tick length
 - wall clock: now - start of the current run segment

The larger one wins. Late or dropped ticks are covered by the wall clock; a
clock that jumps backward is covered by accumulation, so elapsed never
decreases.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from .models import TimerSession

TimeProvider = Callable[[], datetime]


def _whole_millis(delta: timedelta) -> timedelta:
    if delta <= timedelta(0):
        return timedelta(0)
    return timedelta(milliseconds=delta // timedelta(milliseconds=1))


def advance(session: TimerSession, nominal_tick_ms: int, now: datetime) -> TimerSession:
    by_accumulation = session.elapsed + timedelta(milliseconds=nominal_tick_ms)
    by_wall_clock = _whole_millis(now - session.run_started_at)
    session.elapsed = max(by_accumulation, by_wall_clock)
    session.tick_count += 1
    return session


class ProgressTracker:
    """Binds :func:`advance` to a clock so callers only pass the session."""

    def __init__(self, time_provider: Optional[TimeProvider] = None) -> None:
        self._time_provider: TimeProvider = time_provider or datetime.now

    def now(self) -> datetime:
        return self._time_provider()

    def new_session(self) -> TimerSession:
        return TimerSession(run_started_at=self.now())

    def restart_run(self, session: TimerSession) -> TimerSession:
        # Elapsed carries over; the paused gap is never credited.
        session.run_started_at = self.now()
        session.tick_count = 0
        return session

    def advance(self, session: TimerSession, nominal_tick_ms: int) -> TimerSession:
        return advance(session, nominal_tick_ms, self.now())


__all__ = ["ProgressTracker", "advance", "TimeProvider"]
