from __future__ import annotations

"""Timer page: elapsed clock, progress bar, controls and the period editor."""

from datetime import timedelta
from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QProgressBar,
    QSpinBox,
)

from .period_store import PeriodStore
from .timer_service import TimerService
from .toast import show_toast

CURRENT_ROW_STYLE = "background: #dbeafe; border-radius: 4px;"


def format_duration(elapsed: Optional[timedelta]) -> str:
    """``MM:SS``; minutes are not wrapped at 60."""
    if elapsed is None:
        return "00:00"
    seconds = max(0, int(elapsed.total_seconds()))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class PeriodRow(QWidget):
    def __init__(self, index: int, store: PeriodStore):
        super().__init__()
        self._index = index
        self._store = store
        self.name_edit = QLineEdit()
        self.minutes_spin = QSpinBox()
        self.minutes_spin.setRange(0, 999)
        self.minutes_spin.setSuffix(" min")
        self.seconds_spin = QSpinBox()
        self.seconds_spin.setRange(0, 60)
        self.seconds_spin.setSuffix(" s")

        layout = QHBoxLayout(self)
        layout.addWidget(self.name_edit, 2)
        layout.addWidget(self.minutes_spin)
        layout.addWidget(self.seconds_spin)

        self.refresh()
        self.name_edit.textEdited.connect(self._on_name)
        self.minutes_spin.valueChanged.connect(self._on_minutes)
        self.seconds_spin.valueChanged.connect(self._on_seconds)

    def refresh(self) -> None:
        period = self._store.get(self._index)
        if period is None:
            return
        for w in (self.name_edit, self.minutes_spin, self.seconds_spin):
            w.blockSignals(True)
        if self.name_edit.text() != period.name:
            self.name_edit.setText(period.name)
        self.minutes_spin.setValue(period.duration_seconds // 60)
        self.seconds_spin.setValue(period.duration_seconds % 60)
        for w in (self.name_edit, self.minutes_spin, self.seconds_spin):
            w.blockSignals(False)

    def set_current(self, current: bool) -> None:
        self.setStyleSheet(CURRENT_ROW_STYLE if current else "")

    def _on_name(self, text: str) -> None:
        self._store.update_name(self._index, text)

    def _on_minutes(self, value: int) -> None:
        self._store.update_minutes(self._index, value)

    def _on_seconds(self, value: int) -> None:
        self._store.update_seconds(self._index, value)


class TimerPage(QWidget):
    def __init__(self, timer_service: TimerService, store: PeriodStore):  # noqa: D401
        super().__init__()
        self._timer_service = timer_service
        self._store = store

        self.time_label = QLabel(format_duration(None))
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.time_label.font()
        font.setPointSize(36)
        self.time_label.setFont(font)

        self.progress = QProgressBar()
        self.progress.setTextVisible(False)

        self.btn_reset = QPushButton("Reset")
        self.btn_primary = QPushButton("Start")
        self.btn_skip = QPushButton("Skip")

        btn_row = QHBoxLayout()
        btn_row.addWidget(self.btn_reset)
        btn_row.addWidget(self.btn_primary)
        btn_row.addWidget(self.btn_skip)

        self.rows: List[PeriodRow] = []
        periods_grid = QGridLayout()
        for i in range(len(store)):
            row = PeriodRow(i, store)
            self.rows.append(row)
            periods_grid.addWidget(row, i, 0)

        layout = QVBoxLayout(self)
        layout.addWidget(self.time_label)
        layout.addWidget(self.progress)
        layout.addLayout(btn_row)
        layout.addLayout(periods_grid)
        layout.addStretch(1)

        # Wire signals
        self.btn_reset.clicked.connect(self._timer_service.reset)
        self.btn_primary.clicked.connect(self._on_primary)
        self.btn_skip.clicked.connect(self._timer_service.finish)
        self._timer_service.tick.connect(self._on_tick)
        self._timer_service.state_changed.connect(self._on_state_changed)
        self._timer_service.period_changed.connect(self._on_period_changed)
        self._timer_service.session_cleared.connect(self.refresh)
        self._store.changed.connect(self._on_periods_changed)
        self._store.error.connect(self._on_store_error)

        self.refresh()

    # --- Rendering ------------------------------------------------------
    def refresh(self) -> None:
        elapsed = self._timer_service.elapsed
        self.time_label.setText(format_duration(elapsed))
        length_ms = int(self._timer_service.current_period_length().total_seconds() * 1000)
        self.progress.setRange(0, max(1, length_ms))
        elapsed_ms = int(elapsed.total_seconds() * 1000) if elapsed is not None else 0
        self.progress.setValue(min(elapsed_ms, self.progress.maximum()))
        self.btn_primary.setText(self._timer_service.primary_action())
        self.btn_reset.setEnabled(self._timer_service.session is not None)
        for i, row in enumerate(self.rows):
            row.set_current(i == self._timer_service.current_period)

    # --- Button handlers ------------------------------------------------
    def _on_primary(self) -> None:
        action = self._timer_service.primary_action()
        if action == "Start":
            self._timer_service.start()
        elif action == "Pause":
            self._timer_service.pause()
        elif action == "Resume":
            self._timer_service.resume()
        else:
            self._timer_service.finish()

    # --- Service callbacks ----------------------------------------------
    def _on_tick(self, _elapsed_ms: int) -> None:
        self.refresh()

    def _on_state_changed(self, _state: str) -> None:
        self.refresh()

    def _on_period_changed(self, _index: int) -> None:
        self.refresh()

    def _on_periods_changed(self) -> None:
        for row in self.rows:
            row.refresh()
        self.refresh()

    def _on_store_error(self, message: str) -> None:  # pragma: no cover UI
        show_toast(self, message)


__all__ = ["TimerPage", "PeriodRow", "format_duration"]
