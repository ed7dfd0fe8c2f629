from __future__ import annotations

"""Dataclass models for periods, timer sessions and notification events."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta


DEFAULT_PERIOD_SECONDS = 25 * 60
DEFAULT_PERIOD_NAME = "Work"
DEFAULT_TICK_MS = 1000
# Largest duration the period editor can show (999 min + 60 s)
MAX_DURATION_SECONDS = 999 * 60 + 60


@dataclass(slots=True)
class Period:
    name: str
    duration_seconds: int  # >= 0

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.duration_seconds)

    def to_dict(self) -> dict:
        return {"name": self.name, "duration_seconds": int(self.duration_seconds)}

    @classmethod
    def from_dict(cls, data: dict) -> "Period":
        seconds = data["duration_seconds"]
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise TypeError(f"duration_seconds must be an integer, got {seconds!r}")
        if not 0 <= seconds <= MAX_DURATION_SECONDS:
            raise ValueError(f"duration out of range: {seconds}")
        return cls(name=str(data["name"]), duration_seconds=seconds)


@dataclass(slots=True)
class TimerSession:
    run_started_at: datetime
    elapsed: timedelta = field(default_factory=timedelta)
    tick_count: int = 0  # ticks since the current run segment began


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    title: str
    body: str


def default_periods() -> list[Period]:
    return [
        Period("Focus", 25 * 60),
        Period("Small break", 5 * 60),
        Period("Focus", 25 * 60),
        Period("Full break", 15 * 60),
    ]


__all__ = [
    "Period",
    "TimerSession",
    "NotificationEvent",
    "default_periods",
    "DEFAULT_PERIOD_SECONDS",
    "DEFAULT_PERIOD_NAME",
    "DEFAULT_TICK_MS",
    "MAX_DURATION_SECONDS",
]
