from __future__ import annotations

"""Repository helpers over the ``settings`` key/value table."""

import json
import sqlite3
from typing import Sequence

from .database_manager import DatabaseManager
from .models import Period

PERIODS_KEY = "pomyu_periods"


class PersistenceError(Exception):
    pass


class PeriodsNotFound(PersistenceError):
    pass


# --- Settings ---------------------------------------------------------------

def get_setting(db: DatabaseManager, key: str) -> str | None:
    row = db.query_one("SELECT value FROM settings WHERE key=?", (key,))
    return row["value"] if row else None


def set_setting(db: DatabaseManager, key: str, value: str) -> None:
    conn = db.connect()
    with conn:
        conn.execute(
            "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )


# --- Periods ----------------------------------------------------------------

def save_periods(db: DatabaseManager, periods: Sequence[Period]) -> None:
    try:
        content = json.dumps([p.to_dict() for p in periods])
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Error serializing periods: {e}") from e
    try:
        set_setting(db, PERIODS_KEY, content)
    except sqlite3.Error as e:
        raise PersistenceError(f"Error writing {PERIODS_KEY}: {e}") from e


def load_periods(db: DatabaseManager) -> list[Period]:
    try:
        content = get_setting(db, PERIODS_KEY)
    except sqlite3.Error as e:
        raise PersistenceError(f"Error reading {PERIODS_KEY}: {e}") from e
    if content is None:
        raise PeriodsNotFound(f"{PERIODS_KEY} not found")
    try:
        raw = json.loads(content)
        if not isinstance(raw, list):
            raise ValueError(f"expected a list, got {type(raw).__name__}")
        return [Period.from_dict(item) for item in raw]
    except (ValueError, KeyError, TypeError, OverflowError) as e:
        raise PersistenceError(f"Error parsing {PERIODS_KEY}: {e}") from e


__all__ = [
    "PERIODS_KEY",
    "PersistenceError",
    "PeriodsNotFound",
    "get_setting",
    "set_setting",
    "save_periods",
    "load_periods",
]
