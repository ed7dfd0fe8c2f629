from __future__ import annotations

"""Toast overlay for in-window notifications and edit errors."""

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import QLabel, QWidget


class Toast(QLabel):
    def __init__(self, parent: QWidget, message: str, timeout_ms: int = 4000):
        super().__init__(parent)
        self.setText(message)
        self.setStyleSheet(
            """
            background: rgba(30,30,30,0.9);
            color: #fff; padding: 8px 14px; border-radius: 6px;
            """
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjustSize()
        self.move(max(0, int((parent.width() - self.width()) / 2)), 24)
        self.show()
        QTimer.singleShot(timeout_ms, self.close)


def show_toast(parent: QWidget, message: str, timeout_ms: int = 4000) -> Toast:
    return Toast(parent, message, timeout_ms)

__all__ = ["Toast", "show_toast"]
