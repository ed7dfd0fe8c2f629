from __future__ import annotations

import sys
import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtWidgets import QApplication, QMainWindow

from .config import AppConfig
from .database_manager import DBConfig, DatabaseManager
from .logging_setup import configure_logging
from .notification_manager import NotificationManager
from .period_store import PeriodStore
from .timer_page import TimerPage
from .timer_service import TimerService


APP_NAME = "Pomyu"


@dataclass(slots=True)
class AppState:
    config: AppConfig
    db: DatabaseManager
    period_store: PeriodStore
    timer_service: TimerService


def get_app_state(config: Optional[AppConfig] = None) -> AppState:
    config = config or AppConfig.from_env()
    config.data_dir.mkdir(parents=True, exist_ok=True)
    # Logging first
    configure_logging(config.data_dir, config.log_level)
    db = DatabaseManager(DBConfig(path=config.db_path))
    db.init_db()
    store = PeriodStore(db)
    store.load()  # keeps the built-in defaults on failure
    timer_service = TimerService(store, tick_interval_ms=config.tick_interval_ms)
    logging.getLogger(__name__).info(
        "app_state_created",
        extra={"_json_data_dir": str(config.data_dir), "_json_periods": len(store)},
    )
    return AppState(config=config, db=db, period_store=store, timer_service=timer_service)


class MainWindow(QMainWindow):
    def __init__(self, state: AppState) -> None:  # noqa: D401
        super().__init__()
        self.state = state
        self.setWindowTitle(APP_NAME)
        self.resize(480, 520)

        self.timer_page = TimerPage(state.timer_service, state.period_store)
        self.setCentralWidget(self.timer_page)

        self.notification_manager = NotificationManager(self, sound_enabled=state.config.sound_enabled)
        state.timer_service.notification.connect(self.notification_manager.dispatch)

    def closeEvent(self, event) -> None:  # pragma: no cover UI
        self.state.timer_service.reset()
        self.state.db.close()
        super().closeEvent(event)


def run(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv
    app = QApplication(argv)
    state = get_app_state()
    window = MainWindow(state)
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
