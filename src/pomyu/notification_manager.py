from __future__ import annotations

"""Notification sink for "period is over" events.

 - Shows a system tray balloon when a tray is available, otherwise an
   in-window toast.
 - Plays a best-effort audio cue.
 - Every failure is logged and swallowed; timer correctness never depends on
   a notification being shown.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon, QWidget

from .models import NotificationEvent
from .toast import show_toast

_log = logging.getLogger(__name__)

BALLOON_TIMEOUT_MS = 5000


class NotificationManager(QObject):
    def __init__(self, parent: Optional[QWidget] = None, *, sound_enabled: bool = True) -> None:
        super().__init__(parent)
        self._parent_widget = parent
        self._sound_enabled = sound_enabled
        self._tray: Optional[QSystemTrayIcon] = None
        self._permission_checked = False
        self.dispatched: int = 0

    # --- Public API ----------------------------------------------------
    def dispatch(self, event: NotificationEvent) -> None:
        _log.info("notification", extra={"_json_title": event.title, "_json_body": event.body})
        self._ensure_permission()
        try:
            self._show(event)
        except Exception:
            _log.warning("Could not show notification", exc_info=True)
        if self._sound_enabled:
            try:
                self._play_sound()
            except Exception:
                _log.warning("Could not play notification sound", exc_info=True)
        self.dispatched += 1

    # --- Internal ------------------------------------------------------
    def _ensure_permission(self) -> None:
        # Desktop has no permission prompt; availability of a tray is the gate.
        if self._permission_checked:
            return
        self._permission_checked = True
        try:
            if QSystemTrayIcon.isSystemTrayAvailable():
                self._tray = QSystemTrayIcon(QIcon(), self)
                self._tray.setToolTip("Pomyu")
                self._tray.setVisible(True)
            else:
                _log.warning("System tray unavailable; falling back to in-window toasts")
        except Exception:
            _log.warning("Could not get notification permissions", exc_info=True)
            self._tray = None

    def _show(self, event: NotificationEvent) -> None:
        if self._tray is not None and QSystemTrayIcon.supportsMessages():
            self._tray.showMessage(
                event.title, event.body, QSystemTrayIcon.MessageIcon.Information, BALLOON_TIMEOUT_MS
            )
            return
        if self._parent_widget is not None:
            show_toast(self._parent_widget, f"{event.title} {event.body}")
            return
        _log.warning("No surface to show notification: %s", event.body)

    def _play_sound(self) -> None:
        if QApplication.instance() is None:
            _log.warning("No application instance; skipping notification sound")
            return
        QApplication.beep()


__all__ = ["NotificationManager"]
