"""Bus trips to be covered by crew duties, and day/night time accounting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from crewsched.timing import MINUTES_PER_DAY, DateTime

NIGHT_START = 22 * 60
MORNING_END = 5 * 60
NIGHT_FACTOR = 60 / 52.5


@dataclass
class Task:
    """A single trip: where and when it runs and which duty it belongs to."""

    bus_line: str = "N"
    origin: str = "N"
    destination: str = "N"
    t_out: int = 0
    m_out: int = 0
    duration: int = 0
    bus_number: int = 0
    finish_h: int = 0
    finish_m: int = 0
    start_time: DateTime = field(default_factory=DateTime)
    end_time: DateTime = field(default_factory=DateTime)
    key: int = -1
    journey_key: int = -1

    def copy(self) -> "Task":
        """Deep copy, with independent start and end times."""
        return Task(
            bus_line=self.bus_line,
            origin=self.origin,
            destination=self.destination,
            t_out=self.t_out,
            m_out=self.m_out,
            duration=self.duration,
            bus_number=self.bus_number,
            finish_h=self.finish_h,
            finish_m=self.finish_m,
            start_time=self.start_time.copy(),
            end_time=self.end_time.copy(),
            key=self.key,
            journey_key=self.journey_key,
        )

    def same_as(self, other: "Task") -> bool:
        """Tasks are the same trip when their keys match."""
        return self.key == other.key

    def describe(self, journey_key: int, duration: int) -> str:
        """Human-readable line for console listings."""
        return (
            f"{self.key} {self.bus_line} {self.origin} {self.destination} "
            f"{self.start_time} 0d:0h:{self.duration}m {self.end_time} "
            f"{duration} {journey_key}"
        )

    def report_line(self, journey_key: int, duration: int) -> str:
        """Compact line used when writing a schedule to a file."""
        st, et = self.start_time, self.end_time
        line = self.bus_line[0] if self.bus_line else ""
        return (
            f"{self.key} {line} {self.origin} {self.destination} "
            f"{st.day}:{st.hour}:{st.minute} 0d:00{self.duration} "
            f"{et.day}:{et.hour}:{et.minute} {duration} {journey_key}"
        )


def len_transformation(start: int, end: int, length: int) -> tuple[float, float]:
    """Split ``length`` minutes between ``start`` and ``end`` into (day, night).

    Night minutes are weighted by the night-time factor.
    """
    st = float(int(math.fmod(start, MINUTES_PER_DAY)))
    et = float(int(math.fmod(end, MINUTES_PER_DAY)))
    len_day = float(length)
    len_night = 0.0

    if st >= NIGHT_START and et >= NIGHT_START:
        len_night, len_day = len_day * NIGHT_FACTOR, 0.0
    elif st >= NIGHT_START and et <= MORNING_END:
        len_night, len_day = len_day * NIGHT_FACTOR, 0.0
    elif st <= MORNING_END and et <= MORNING_END:
        len_night, len_day = len_day * NIGHT_FACTOR, 0.0
    elif st <= NIGHT_START and et >= NIGHT_START:
        len_day = NIGHT_START - st
        len_night = (et - NIGHT_START) * NIGHT_FACTOR
    elif st <= MORNING_END and et >= MORNING_END:
        len_night = (MORNING_END - st) * NIGHT_FACTOR
        len_day = et - MORNING_END
    return len_day, len_night


def _raw_gap(current: Task, following: Task) -> int:
    if current.end_time.day == 0 and following.start_time.day == 1:
        return (following.start_time.hours2minutes + MINUTES_PER_DAY) - current.end_time.hours2minutes
    return following.start_time.hours2minutes - current.end_time.hours2minutes


def gap_day_night(current: Task, following: Task) -> tuple[float, float]:
    """Idle time between two tasks, split into (day, night)."""
    diff = _raw_gap(current, following)
    return len_transformation(
        current.end_time.hours2minutes, following.start_time.hours2minutes, diff
    )


def gap(current: Task, following: Task, real: bool) -> int:
    """Minutes between two tasks; when ``real`` is false, night minutes are weighted."""
    diff = _raw_gap(current, following)
    if not real:
        day, night = len_transformation(
            current.end_time.hours2minutes, following.start_time.hours2minutes, diff
        )
        diff = int(day + night)
    return diff