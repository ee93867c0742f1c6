"""Reading problem instances: a header, a task count and one trip per line."""

from __future__ import annotations

import re
from bisect import bisect_left
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from crewsched.task import Task
from crewsched.timing import DateTime

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Hours past midnight written as a continuation of the previous day.
_LATE_HOURS = {25: 1, 26: 2, 27: 3, 28: 4, 29: 5, 30: 6}


@dataclass
class Instance:
    """Tasks of an instance ordered by start time, plus an independent copy."""

    number_tasks: int
    tasks: list[Task] = field(default_factory=list)
    task_vector: list[Task] = field(default_factory=list)


def _to_int(text: str, width: int) -> int:
    """Integer at the start of the first ``width`` characters, 0 if none."""
    match = _LEADING_INT.match(text[:width])
    return int(match.group(1)) if match else 0


def parse_task_line(line: str) -> Task:
    """Turn one line ``line,origin,destination,hour,minute,duration,bus`` into a task."""
    fields = [part.replace('"', "") for part in line.rstrip("\r\n").split(",")]
    fields += [""] * (7 - len(fields))

    bus_line, origin, destination, hour_s, minute_s, duration_s, bus_s = fields[:7]

    hour = _to_int(hour_s, 2)
    hour = _LATE_HOURS.get(hour, hour)
    minute = _to_int(minute_s, 2)
    duration = _to_int(duration_s, 3)
    bus = _to_int(bus_s, 3)

    finish_h, finish_m = (hour, minute + duration) if duration_s else (0, 0)

    return Task(
        bus_line=bus_line or "N",
        origin=origin[-1] if origin else "N",
        destination=destination[-1] if destination else "N",
        t_out=hour,
        m_out=minute,
        duration=duration,
        bus_number=bus,
        finish_h=finish_h,
        finish_m=finish_m,
        start_time=DateTime.from_hour_minute(hour, minute),
        end_time=DateTime.from_hour_minute(finish_h, finish_m),
    )


def parse_instance(lines: Iterable[str]) -> Instance:
    """Parse instance lines; the second line holds the task count.

    Tasks are keyed in reading order and kept sorted by start time, a task
    being placed before any already read that starts at the same time or later.
    """
    number_tasks = 0
    tasks: list[Task] = []
    starts: list[int] = []
    key = 0

    for n_line, line in enumerate(lines):
        if n_line == 1:
            number_tasks = _to_int(line, len(line))
        if 2 <= n_line <= number_tasks + 1:
            task = parse_task_line(line)
            task.key = key
            key += 1
            position = bisect_left(starts, task.start_time.hours2minutes)
            starts.insert(position, task.start_time.hours2minutes)
            tasks.insert(position, task)

    return Instance(
        number_tasks=number_tasks,
        tasks=tasks,
        task_vector=[task.copy() for task in tasks],
    )


def read_instance(path: str | Path) -> Instance:
    """Read an instance file."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_instance(handle)