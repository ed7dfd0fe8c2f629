from __future__ import annotations

"""Environment-driven application configuration."""

import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path

from .models import DEFAULT_TICK_MS

DB_FILENAME = "pomyu.sqlite"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    override = os.getenv("POMYU_DATA_DIR", "").strip()
    if override:
        return Path(override)
    if platform.system().lower() == "windows":
        appdata = os.getenv("APPDATA", "").strip()
        if appdata:
            return Path(appdata) / "pomyu"
    return Path.home() / ".pomyu"


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper() or "INFO")
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path
    tick_interval_ms: int
    log_level: int
    sound_enabled: bool

    @property
    def db_path(self) -> Path:
        return self.data_dir / DB_FILENAME

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            data_dir=_default_data_dir(),
            tick_interval_ms=max(1, _env_int("POMYU_TICK_MS", DEFAULT_TICK_MS)),
            log_level=_log_level(os.getenv("POMYU_LOG_LEVEL", "INFO")),
            sound_enabled=_env_bool("POMYU_SOUND", True),
        )


__all__ = ["AppConfig"]
