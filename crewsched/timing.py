"""Clock times of a single service day, measured in minutes."""

from __future__ import annotations

from dataclasses import dataclass, replace

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR


@dataclass
class DateTime:
    """A time of day with its value in minutes since midnight."""

    day: int = 0
    hour: int = 0
    minute: int = 0
    hours2minutes: int = 0

    @classmethod
    def from_hour_minute(cls, hour: int, minute: int) -> "DateTime":
        """Build a time, carrying surplus minutes into the hour and wrapping at 24h."""
        while minute >= MINUTES_PER_HOUR:
            hour = 1 if hour == HOURS_PER_DAY else hour + 1
            minute -= MINUTES_PER_HOUR
        hour %= HOURS_PER_DAY
        return cls(
            day=0,
            hour=hour,
            minute=minute,
            hours2minutes=hour * MINUTES_PER_HOUR + minute,
        )

    def precedes(self, other: "DateTime") -> bool:
        """True when this time is not later than ``other``."""
        return self.hours2minutes <= other.hours2minutes

    def copy(self) -> "DateTime":
        return replace(self)

    def __str__(self) -> str:
        return f"{self.day}d:{self.hour}h:{self.minute}m ({self.hours2minutes})"


def verify_to_add_day(start_time: int, end_time: int) -> int:
    """Shift ``start_time`` into the next day when it lies before ``end_time``."""
    if start_time < end_time:
        return start_time + MINUTES_PER_DAY
    return start_time