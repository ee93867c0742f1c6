"""Perturbation of a schedule by cutting it at random times and recombining the pieces."""

from __future__ import annotations

import random
from collections.abc import Sequence

from crewsched.cut import cut_compact, generate_shake_cut_place
from crewsched.journey import Journey, join_journeys
from crewsched.layers import verify_viability
from crewsched.solution import SearchContext, Solution

SMALL_SHAKE = 0.15
LARGE_SHAKE = 0.30
SECOND_SLICE_OFFSET = 60


def recombine_journeys(
    first: Sequence[Journey], second: Sequence[Journey]
) -> tuple[list[Journey], float, bool]:
    """Append to each head piece the first unused tail piece that can follow it.

    Returns the resulting journeys, the summed objective of the journeys that
    were joined or carried over from ``second``, and whether any join happened.
    Head pieces are modified in place.
    """
    journeys = list(first)
    used = [False] * len(second)
    objective = 0.0
    recombined = False

    for i, head in enumerate(first):
        for j, tail in enumerate(second):
            if not used[j] and join_journeys(head, tail):
                head.key = i
                head.obj_value = head.objective()
                objective += head.obj_value
                used[j] = True
                recombined = True
                break

    for j, tail in enumerate(second):
        if not used[j]:
            tail.key = j
            tail.obj_value = tail.objective()
            objective += tail.obj_value
            journeys.append(tail)

    return journeys, objective, recombined


def recombine_feasible_journeys(
    first: Sequence[Journey], second: Sequence[Journey]
) -> tuple[list[Journey], float, bool]:
    """Like :func:`recombine_journeys`, but a join is kept only if it is feasible."""
    journeys = list(first)
    used = [False] * len(second)
    objective = 0.0
    recombined = False

    for i, head in enumerate(first):
        for j, tail in enumerate(second):
            if used[j] or not verify_viability(head.tasks, tail.tasks[0]):
                continue
            kept = len(head.tasks)
            head.tasks.extend(tail.tasks)
            value = head.objective()
            if head.feasible():
                head.key = i
                head.obj_value = value
                objective += value
                used[j] = True
                recombined = True
                break
            del head.tasks[kept:]

    for j, tail in enumerate(second):
        if not used[j]:
            tail.key = j
            tail.obj_value = tail.objective()
            objective += tail.obj_value
            journeys.append(tail)

    return journeys, objective, recombined


def shake_one_slice(
    solution: Solution, p: float, context: SearchContext, rng: random.Random
) -> list[Journey]:
    """Cut at one random time and recombine until ``p`` recombinations happened.

    The objectives of recombined journeys are added to ``solution.f_obj``.
    """
    recombinations = 0
    while recombinations < p:
        place = generate_shake_cut_place(context, rng, False)
        pieces = cut_compact(solution.journeys, place)
        solution.journeys, objective, recombined = recombine_journeys(
            pieces.first, pieces.second
        )
        solution.f_obj += objective
        if recombined:
            recombinations += 1
    return solution.journeys


def shake_two_slices(
    solution: Solution, p: float, context: SearchContext, rng: random.Random
) -> list[Journey]:
    """Cut at a random time and an hour later, recombining after each cut."""
    recombinations = 0
    while recombinations < p:
        place = generate_shake_cut_place(context, rng, True)
        for k in (place, place + SECOND_SLICE_OFFSET):
            pieces = cut_compact(solution.journeys, k)
            solution.journeys, objective, recombined = recombine_journeys(
                pieces.first, pieces.second
            )
            solution.f_obj += objective
            if recombined:
                recombinations += 1
    return solution.journeys


def shake(
    solution: Solution, k: int, context: SearchContext, rng: random.Random
) -> Solution:
    """Perturb ``solution`` in place with neighbourhood ``k`` (1 to 4) and return it.

    Other values of ``k`` leave the journeys untouched.
    """
    solution.f_cost = 0.0
    solution.f_obj = 0.0
    size = len(solution.journeys)

    if k == 1:
        shake_two_slices(solution, size * SMALL_SHAKE, context, rng)
    elif k == 2:
        shake_one_slice(solution, size * SMALL_SHAKE, context, rng)
    elif k == 3:
        shake_one_slice(solution, size * LARGE_SHAKE, context, rng)
    elif k == 4:
        shake_two_slices(solution, size * LARGE_SHAKE, context, rng)

    solution.f_cost = 0.0
    solution.duration = 0.0
    return solution