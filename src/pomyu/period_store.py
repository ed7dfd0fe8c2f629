from __future__ import annotations

"""PeriodStore keeps the editable period cycle and persists every edit."""

import logging
from typing import List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .database_manager import DatabaseManager
from .models import MAX_DURATION_SECONDS, Period, default_periods
from .repositories import PersistenceError, PeriodsNotFound, load_periods, save_periods

_log = logging.getLogger(__name__)


class PeriodStore(QObject):
    changed = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, db: DatabaseManager, periods: Optional[List[Period]] = None):
        super().__init__()
        self._db = db
        self._periods: List[Period] = periods if periods is not None else default_periods()

    # --- Persistence ----------------------------------------------------
    def load(self) -> bool:
        """Replace the current periods with the stored ones; keep them on failure."""
        try:
            self._periods = load_periods(self._db)
        except PeriodsNotFound as e:
            _log.warning("Could not load periods: %s", e)
            return False
        except PersistenceError:
            _log.error("Could not load periods", exc_info=True)
            return False
        _log.info("periods loaded", extra={"_json_count": len(self._periods)})
        self.changed.emit()
        return True

    def save(self) -> bool:
        try:
            save_periods(self._db, self._periods)
        except PersistenceError:
            _log.error("Could not save periods", exc_info=True)
            return False
        return True

    # --- Access ---------------------------------------------------------
    def periods(self) -> List[Period]:
        return list(self._periods)

    def get(self, index: int) -> Period | None:
        if 0 <= index < len(self._periods):
            return self._periods[index]
        return None

    def __len__(self) -> int:
        return len(self._periods)

    # --- Edits ----------------------------------------------------------
    def _in_range(self, seconds: int) -> bool:
        if seconds > MAX_DURATION_SECONDS:
            self.error.emit(f"Period cannot be longer than {MAX_DURATION_SECONDS // 60} minutes")
            return False
        return True

    def update_name(self, index: int, name: str) -> bool:
        period = self.get(index)
        if period is not None:
            period.name = name
            self.changed.emit()
        return self.save()

    def update_minutes(self, index: int, minutes: int) -> bool:
        if minutes < 0:
            self.error.emit("Minutes must not be negative")
            return False
        period = self.get(index)
        if period is not None:
            seconds = period.duration_seconds % 60 + minutes * 60
            if not self._in_range(seconds):
                return False
            period.duration_seconds = seconds
            self.changed.emit()
        return self.save()

    def update_seconds(self, index: int, seconds: int) -> bool:
        if seconds < 0:
            self.error.emit("Seconds must not be negative")
            return False
        period = self.get(index)
        if period is not None:
            # Round down to the whole minute first
            total = 60 * (period.duration_seconds // 60) + seconds
            if not self._in_range(total):
                return False
            period.duration_seconds = total
            self.changed.emit()
        return self.save()


__all__ = ["PeriodStore"]
