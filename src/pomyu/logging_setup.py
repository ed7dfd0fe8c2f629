from __future__ import annotations

"""Logging for pomyu: a rotating JSON-lines file plus a short console line.

Only the ``pomyu`` logger tree is configured, so handlers owned by the host
(test runners, embedding apps) are left alone. Structured fields ride on
``extra={"_json_<name>": value}`` and land as top-level JSON keys.
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict

LOGGER_NAME = "pomyu"
LOG_DIR_NAME = "logs"
LOG_FILE_BASENAME = "pomyu.log"
LOG_MAX_BYTES = 512_000
LOG_BACKUPS = 5
_EXTRA_PREFIX = "_json_"
_HANDLER_TAG = "_pomyu_handler"


def _component(logger_name: str) -> str:
    # "pomyu.timer_service" -> "timer_service"
    prefix = LOGGER_NAME + "."
    return logger_name[len(prefix):] if logger_name.startswith(prefix) else logger_name


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "component": _component(record.name),
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith(_EXTRA_PREFIX):
                payload[key[len(_EXTRA_PREFIX):]] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<7} {_component(record.name)}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(base_dir: Path, level: int = logging.INFO, *, console: bool = True) -> Path:
    log_dir = base_dir / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / LOG_FILE_BASENAME

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Replace only handlers installed by an earlier call
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    file_handler.setFormatter(JsonFormatter())
    handlers: list[logging.Handler] = [file_handler]
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(ConsoleFormatter())
        handlers.append(stream_handler)
    for handler in handlers:
        setattr(handler, _HANDLER_TAG, True)
        logger.addHandler(handler)

    logger.info("logging initialised", extra={"_json_phase": "startup", "_json_logfile": str(logfile)})
    return logfile


__all__ = ["configure_logging", "JsonFormatter", "ConsoleFormatter", "LOGGER_NAME"]
