from __future__ import annotations

"""Timer service driving the period cycle.

Design:
 - State machine: idle -> running -> paused -> running ... -> idle.
 - Finish moves on to the next period (wrapping); Reset keeps the index.
 - A fresh QTimer is created per run segment and cancelled on every exit from
   running. Each segment carries a generation number so a callback from a
   cancelled segment is dropped.
 - Each tick advances the elapsed estimate and asks the notification gate
   whether an overdue boundary was crossed.
 - Emits Qt signals for UI binding and the notification sink.
"""

import logging
from datetime import timedelta
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .models import DEFAULT_PERIOD_SECONDS, DEFAULT_TICK_MS, NotificationEvent, TimerSession
from .notification_gate import NotificationGate
from .period_store import PeriodStore
from .progress import ProgressTracker, TimeProvider

_log = logging.getLogger(__name__)


def _to_millis(delta: timedelta) -> int:
    return delta // timedelta(milliseconds=1)


class TimerService(QObject):
    tick = pyqtSignal("qint64")  # elapsed milliseconds
    state_changed = pyqtSignal(str)
    period_changed = pyqtSignal(int)  # current period index
    notification = pyqtSignal(object)  # NotificationEvent
    session_cleared = pyqtSignal()

    def __init__(
        self,
        store: PeriodStore,
        time_provider: Optional[TimeProvider] = None,
        tick_interval_ms: int = DEFAULT_TICK_MS,
    ) -> None:
        super().__init__()
        self._store = store
        self._tracker = ProgressTracker(time_provider)
        self._gate = NotificationGate()
        self._tick_interval_ms = max(1, int(tick_interval_ms))

        self._timer: Optional[QTimer] = None
        self._generation = 0

        self._state: str = "idle"
        self._session: Optional[TimerSession] = None
        self._current_period = 0

    # --- Properties -----------------------------------------------------
    @property
    def state(self) -> str:
        return self._state

    def _set_state(self, new_state: str) -> None:
        if new_state != self._state:
            _log.info("timer %s -> %s", self._state, new_state)
            self._state = new_state
            self.state_changed.emit(new_state)

    @property
    def session(self) -> Optional[TimerSession]:
        return self._session

    @property
    def elapsed(self) -> Optional[timedelta]:
        return self._session.elapsed if self._session else None

    @property
    def current_period(self) -> int:
        return self._current_period

    @property
    def tick_interval_ms(self) -> int:
        return self._tick_interval_ms

    @property
    def is_ticking(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def current_period_length(self) -> timedelta:
        period = self._store.get(self._current_period)
        if period is None:
            return timedelta(seconds=DEFAULT_PERIOD_SECONDS)
        return period.duration

    def current_period_name(self) -> Optional[str]:
        period = self._store.get(self._current_period)
        return period.name if period else None

    def primary_action(self) -> str:
        """Label of the action the centre button should trigger."""
        if self._session is None:
            return "Start"
        if self._state == "running":
            if self._session.elapsed >= self.current_period_length():
                return "Finish"
            return "Pause"
        return "Resume"

    # --- Public API -----------------------------------------------------
    def start(self) -> bool:
        if self._state != "idle":
            return False
        self._session = self._tracker.new_session()
        self._start_ticking()
        self._set_state("running")
        self.tick.emit(0)
        return True

    def pause(self) -> bool:
        if self._state != "running":
            return False
        self._cancel_ticking()
        self._set_state("paused")
        return True

    def resume(self) -> bool:
        if self._state != "paused" or self._session is None:
            return False
        self._tracker.restart_run(self._session)
        self._start_ticking()
        self._set_state("running")
        return True

    def finish(self) -> bool:
        self._clear_session()
        # Skips forward even if this period was never started
        self._current_period = (self._current_period + 1) % max(1, len(self._store))
        _log.info("period advanced", extra={"_json_period": self._current_period})
        self.period_changed.emit(self._current_period)
        self._set_state("idle")
        return True

    def reset(self) -> bool:
        self._clear_session()
        self._set_state("idle")
        return True

    def handle_tick(self, nominal_tick_ms: Optional[int] = None) -> Optional[NotificationEvent]:
        if self._state != "running" or self._session is None:
            return None
        if nominal_tick_ms is None:
            nominal_tick_ms = self._tick_interval_ms
        before = self._session.elapsed
        self._tracker.advance(self._session, nominal_tick_ms)
        after = self._session.elapsed
        _log.debug("tick %d: elapsed %s", self._session.tick_count, after)
        self.tick.emit(_to_millis(after))

        event = self._gate.check(
            self.current_period_length().total_seconds(),
            before,
            after,
            self.current_period_name(),
        )
        if event is not None:
            _log.info("notify: %s", event.body, extra={"_json_period": self._current_period})
            self.notification.emit(event)
        return event

    # --- Internal -------------------------------------------------------
    def _start_ticking(self) -> None:
        self._cancel_ticking()
        generation = self._generation
        timer = QTimer(self)
        timer.setInterval(self._tick_interval_ms)
        timer.timeout.connect(lambda: self._on_timeout(generation))
        timer.start()
        self._timer = timer

    def _cancel_ticking(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None

    def _on_timeout(self, generation: int) -> None:
        if generation != self._generation:
            _log.debug("dropping tick from cancelled run %d", generation)
            return
        self.handle_tick(self._tick_interval_ms)

    def _clear_session(self) -> None:
        self._cancel_ticking()
        had_session = self._session is not None
        self._session = None
        if had_session:
            self.session_cleared.emit()


__all__ = ["TimerService", "DEFAULT_TICK_MS"]
