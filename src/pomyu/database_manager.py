from __future__ import annotations

"""SQLite file backing the ``settings`` key/value table.

Pomyu stores a single document (the period list) in this table, so the
schema is created in place with ``CREATE TABLE IF NOT EXISTS`` and
``init_db`` is safe to call on every start.
"""

from dataclasses import dataclass
from pathlib import Path
import sqlite3
from typing import Iterable

SETTINGS_DDL = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


@dataclass(slots=True)
class DBConfig:
    path: Path
    timeout: float = 2.0  # seconds to wait on a locked file


class DatabaseManager:
    def __init__(self, config: DBConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            self.config.path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.config.path, timeout=self.config.timeout)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def init_db(self) -> None:
        conn = self.connect()
        with conn:
            conn.execute(SETTINGS_DDL)

    def query_one(self, sql: str, params: Iterable | None = None) -> sqlite3.Row | None:
        return self.connect().execute(sql, params or []).fetchone()


__all__ = ["DBConfig", "DatabaseManager"]
