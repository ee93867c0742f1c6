"""Crew duties (journeys): ordered task sequences and their evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field

from crewsched.layers import verify_viability
from crewsched.task import Task, gap, gap_day_night, len_transformation

NIGHT_FACTOR = 1.2
MAX_CONT = 360
MIN_BREAK = 90
MAX_BREAK = 300
MAX_JOURNEY = 780
MIN_HEXT = 440
MAX_HEXT = 560
HEXT_FACTOR = 1.5
MAX_INF = 9999999


@dataclass(frozen=True)
class TimeBreakdown:
    """Driving and idle minutes of a journey, night minutes already weighted."""

    driving_day: float = 0.0
    driving_night: float = 0.0
    idle_day: float = 0.0
    idle_night: float = 0.0
    total: float = 0.0
    idle: float = 0.0

    @property
    def weighted(self) -> float:
        """Paid time with night minutes carrying the night factor."""
        return (
            self.driving_day
            + self.driving_night * NIGHT_FACTOR
            + self.idle_day
            + self.idle_night * NIGHT_FACTOR
        )


def extra_hour(total: float) -> int:
    """Overtime penalty for ``total`` worked minutes."""
    return int((int(total) - MIN_HEXT) * HEXT_FACTOR)


@dataclass
class Journey:
    """A driver's duty: tasks in order plus the flags found while evaluating it."""

    tasks: list[Task] = field(default_factory=list)
    key: int = -1
    break_time: float = 0.0
    max_break: bool = False
    min_break: int = 0
    change_line: int = 0
    continuum: int = 0
    max_journey: bool = False
    hext1: bool = False
    hext2: bool = False
    cost_value: float = -1.0
    obj_value: float = -1.0
    duration: int = 0
    real_duration: int = 0

    def reset(self) -> None:
        """Clear the evaluation flags and counters."""
        self.min_break = 0
        self.max_break = False
        self.break_time = 0.0
        self.change_line = 0
        self.continuum = 0
        self.max_journey = False
        self.hext1 = False
        self.hext2 = False
        self.duration = 0

    def copy(self) -> "Journey":
        """Deep copy, tasks included."""
        return Journey(
            tasks=[task.copy() for task in self.tasks],
            key=self.key,
            break_time=self.break_time,
            max_break=self.max_break,
            min_break=self.min_break,
            change_line=self.change_line,
            continuum=self.continuum,
            max_journey=self.max_journey,
            hext1=self.hext1,
            hext2=self.hext2,
            cost_value=self.cost_value,
            obj_value=self.obj_value,
            duration=self.duration,
            real_duration=self.real_duration,
        )

    def driving_and_idle_time(self) -> TimeBreakdown:
        """Walk the tasks, updating break and continuity flags, and total the times."""
        self.reset()
        if not self.tasks:
            return TimeBreakdown()

        first = self.tasks[0]
        driving_day, driving_night = len_transformation(
            first.start_time.hours2minutes, first.end_time.hours2minutes, first.duration
        )
        total = driving_day + driving_night
        continuum_time = total
        idle_day = idle_night = idle_time = 0.0

        for current, following in zip(self.tasks, self.tasks[1:]):
            d_day, d_night = len_transformation(
                following.start_time.hours2minutes,
                following.end_time.hours2minutes,
                following.duration,
            )
            driving_day += d_day
            driving_night += d_night

            gap_day, gap_night = gap_day_night(current, following)
            idle = gap_day + gap_night
            real_gap = gap(current, following, True)
            if real_gap >= MIN_BREAK:
                self.min_break += 1
                continuum_time = 0.0
                idle = 0.0
                self.break_time += real_gap
                if real_gap > MAX_BREAK:
                    self.max_break = True
            elif 0.0 <= idle < MIN_BREAK:
                idle_day += gap_day
                idle_night += gap_night
                idle_time += idle_day + idle_night
                continuum_time += d_day + d_night + idle
            if continuum_time > MAX_CONT:
                self.continuum += 1
            if current.bus_line[:1] != following.bus_line[:1]:
                self.change_line += 1
            total += d_day + d_night + idle

        return TimeBreakdown(
            driving_day=driving_day,
            driving_night=driving_night,
            idle_day=idle_day,
            idle_night=idle_night,
            total=total,
            idle=idle_time,
        )

    def _penalised(self, times: TimeBreakdown) -> float:
        value = times.weighted
        if times.total > MAX_HEXT:
            self.hext2 = True
            value += MAX_INF
        elif times.total > MIN_HEXT:
            self.hext1 = True
            value += extra_hour(times.total)
        if times.total + self.break_time > MAX_JOURNEY:
            self.max_journey = True
            value += MAX_INF
        if self.continuum != 0:
            value += MAX_INF
        if self.max_break:
            value += MAX_INF
        return value

    def matrix_cost(self) -> float:
        """Objective used while building the constructive cost matrix (no minimum)."""
        return self._penalised(self.driving_and_idle_time())

    def cost(self) -> float:
        """Paid cost: weighted time plus overtime, at least a normal day."""
        times = self.driving_and_idle_time()
        value = times.weighted
        self.real_duration = int(value)
        if times.total > MIN_HEXT:
            value += extra_hour(times.total)
        return max(value, MIN_HEXT)

    def objective(self) -> float:
        """Cost with large penalties for every violated labour rule."""
        return max(self._penalised(self.driving_and_idle_time()), MIN_HEXT)

    def feasible(self) -> bool:
        """True when the last evaluation found no rule violation."""
        return (
            not self.hext2
            and not self.max_journey
            and self.continuum == 0
            and not self.max_break
        )

    def describe(self) -> str:
        """One line per task, tagged with the journey key and real duration."""
        if not self.tasks:
            return "Empty journey\n"
        return "".join(
            task.describe(self.key, self.real_duration) + "\n" for task in self.tasks
        )


def combined_objective(first: Journey, second: Journey | None) -> int:
    """Objective of ``first`` followed by ``second``, or of both kept apart.

    With no ``second`` this is the stored objective of ``first``. The
    evaluation flags of ``first`` are left as the evaluation set them.
    """
    if second is None:
        return int(first.obj_value)
    if not second.tasks:
        raise ValueError("second journey has no tasks")
    if verify_viability(first.tasks, second.tasks[0]):
        saved = first.tasks
        first.tasks = saved + second.tasks
        try:
            return int(first.objective())
        finally:
            first.tasks = saved
    return int(int(first.objective()) + second.objective())


def join_journeys(first: Journey, second: Journey) -> bool:
    """Append the tasks of ``second`` to ``first`` when the link is viable."""
    if not second.tasks:
        raise ValueError("second journey has no tasks")
    if verify_viability(first.tasks, second.tasks[0]):
        first.tasks.extend(second.tasks)
        return True
    return False