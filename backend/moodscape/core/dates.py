"""Day key helpers.

A day key is the epoch timestamp in milliseconds of local midnight for the
calendar day an entry belongs to.
"""

from __future__ import annotations

from datetime import date, datetime, time

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def start_of_day(moment: datetime | None = None) -> int:
    """Return the day key for the local calendar day containing ``moment`` (default: now)."""
    if moment is None:
        moment = datetime.now()
    elif moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return day_key_for(moment.date())


def day_key_for(day: date) -> int:
    """Day key for a calendar date, using local midnight."""
    midnight = datetime.combine(day, time.min)
    return int(midnight.timestamp() * 1000)


def to_local_datetime(day_key: int) -> datetime:
    return datetime.fromtimestamp(day_key / 1000)


def day_of_week_index(day_key: int) -> int:
    """0 = Sunday .. 6 = Saturday."""
    # isoweekday: Monday=1 .. Sunday=7
    return to_local_datetime(day_key).isoweekday() % 7
