"""Cutting a schedule at clock times into partial schedules."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from crewsched.journey import Journey
from crewsched.solution import SearchContext, Solution


@dataclass
class CutResult:
    """Pieces of a cut schedule.

    In a positional cut, entry ``i`` of each part holds the piece of journey
    ``i`` or ``None``; in a compact cut the parts hold only the pieces.
    """

    first: list[Journey | None]
    second: list[Journey | None]
    third: list[Journey | None] | None = None

    @staticmethod
    def _count(part: Sequence[Journey | None] | None) -> int:
        return 0 if part is None else sum(1 for j in part if j is not None)

    @property
    def first_count(self) -> int:
        return self._count(self.first)

    @property
    def second_count(self) -> int:
        return self._count(self.second)

    @property
    def third_count(self) -> int:
        return self._count(self.third)


def generate_cut_places(context: SearchContext) -> list[int]:
    """Start times of evenly spaced tasks, one cut place per layer."""
    if context.layers_size <= 0:
        raise ValueError("no layers to derive cut places from")
    if not context.task_vector:
        raise ValueError("no tasks to derive cut places from")
    step = context.number_tasks // context.layers_size
    last = len(context.task_vector) - 1
    return [
        context.task_vector[min(step * i, last)].start_time.hours2minutes
        for i in range(1, context.layers_size + 1)
    ]


def generate_shake_cut_place(
    context: SearchContext, rng: random.Random, two_slices: bool
) -> int:
    """Random cut time between the first start and the last end of the schedule."""
    start = context.min_start_time
    end = context.min_end_time - 60 if two_slices else context.min_end_time
    if end < start:
        raise ValueError("no room for a cut place")
    return rng.randint(start, end)


def count_cut_parts(solution: Solution, k: int) -> tuple[int, int]:
    """Number of journeys with tasks starting up to ``k`` and after ``k``."""
    before = sum(
        1
        for journey in solution.journeys
        if any(t.start_time.hours2minutes <= k for t in journey.tasks)
    )
    after = sum(
        1
        for journey in solution.journeys
        if any(t.start_time.hours2minutes > k for t in journey.tasks)
    )
    return before, after


def _piece(part: list[Journey | None], index: int) -> Journey:
    if part[index] is None:
        part[index] = Journey(key=index)
    return part[index]


def _evaluate(*parts: Sequence[Journey | None] | None) -> None:
    for part in parts:
        for journey in part or ():
            if journey is not None:
                journey.obj_value = journey.objective()


def cut(journeys: Sequence[Journey], k: int) -> CutResult:
    """Split each journey at ``k``: tasks starting up to ``k`` and the rest."""
    first: list[Journey | None] = [None] * len(journeys)
    second: list[Journey | None] = [None] * len(journeys)
    for i, journey in enumerate(journeys):
        for task in journey.tasks:
            part = first if task.start_time.hours2minutes <= k else second
            _piece(part, i).tasks.append(task.copy())
    _evaluate(first, second)
    return CutResult(first=first, second=second)


def cut_compact(journeys: Sequence[Journey], k: int) -> CutResult:
    """Like :func:`cut`, but the pieces are packed and keyed by their position."""
    first: list[Journey | None] = []
    second: list[Journey | None] = []
    for journey in journeys:
        before = [t.copy() for t in journey.tasks if t.start_time.hours2minutes <= k]
        after = [t.copy() for t in journey.tasks if t.start_time.hours2minutes > k]
        if before:
            first.append(Journey(tasks=before, key=len(first)))
        if after:
            second.append(Journey(tasks=after, key=len(second)))
    _evaluate(first, second)
    return CutResult(first=first, second=second)


def cut_two_places(journeys: Sequence[Journey], k1: int, k2: int) -> CutResult:
    """Split each journey into tasks up to ``k1``, before ``k2`` and from ``k2`` on."""
    size = len(journeys)
    first: list[Journey | None] = [None] * size
    second: list[Journey | None] = [None] * size
    third: list[Journey | None] = [None] * size
    for i, journey in enumerate(journeys):
        for task in journey.tasks:
            start = task.start_time.hours2minutes
            if start <= k1:
                part = first
            elif start < k2:
                part = second
            else:
                part = third
            _piece(part, i).tasks.append(task.copy())
    _evaluate(first, second, third)
    return CutResult(first=first, second=second, third=third)