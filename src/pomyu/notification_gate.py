from __future__ import annotations

"""Edge-triggered "period is over" notifications.

Once a period runs past its target length, a boundary is crossed every
``NOTIFY_PERIOD_MINUTES`` of overdue time. The gate compares the boundary index
before and after an elapsed update and fires only on a strict increase, so no
"last notified" bookkeeping is needed and irregular tick spacing is harmless.
"""

import math
from datetime import timedelta
from typing import Optional

from .models import DEFAULT_PERIOD_NAME, NotificationEvent

NOTIFY_PERIOD_MINUTES = 5.0
NOTIFICATION_TITLE = "Done!"


def minutes_left(period_length_seconds: float, elapsed: timedelta) -> float:
    return (period_length_seconds - elapsed.total_seconds()) / 60.0


def boundary_index(minutes_left_value: float) -> float:
    """Overdue boundaries passed so far; ``-inf`` while the period is not over."""
    if minutes_left_value > 0:
        return -math.inf
    return math.floor(-minutes_left_value / NOTIFY_PERIOD_MINUTES)


def build_message(period_name: Optional[str], crossed_index: int) -> str:
    name = period_name if period_name is not None else DEFAULT_PERIOD_NAME
    overdue_minutes = crossed_index * NOTIFY_PERIOD_MINUTES
    if overdue_minutes >= 1:
        return f"{name} has been over for {int(overdue_minutes)} minutes"
    return f"{name} is over"


class NotificationGate:
    def check(
        self,
        period_length_seconds: float,
        elapsed_before: timedelta,
        elapsed_after: timedelta,
        period_name: Optional[str] = None,
    ) -> Optional[NotificationEvent]:
        left_after = minutes_left(period_length_seconds, elapsed_after)
        if left_after > 0:
            return None
        after = boundary_index(left_after)
        before = boundary_index(minutes_left(period_length_seconds, elapsed_before))
        if after <= before:
            return None
        return NotificationEvent(
            title=NOTIFICATION_TITLE,
            body=build_message(period_name, int(after)),
        )


__all__ = [
    "NotificationGate",
    "NOTIFY_PERIOD_MINUTES",
    "NOTIFICATION_TITLE",
    "minutes_left",
    "boundary_index",
    "build_message",
]
