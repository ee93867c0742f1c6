"""Cut-and-recombine (PCR) neighbourhoods solved as assignment problems."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from crewsched.assignment import AssignmentResult, solve_assignment
from crewsched.cut import CutResult, cut, generate_cut_places
from crewsched.journey import MAX_INF, Journey, combined_objective, join_journeys
from crewsched.solution import SearchContext, Solution
from crewsched.task import Task


def improves(current: float, candidate: float) -> bool:
    """True when ``candidate`` is strictly better (lower) than ``current``."""
    return candidate < current


def find_infeasible_links(solution: Solution) -> list[tuple[int, Task, Task]]:
    """Consecutive tasks that neither meet in place nor follow in time.

    Each entry is the journey key and the two offending tasks.
    """
    links = []
    for journey in solution.journeys:
        for current, following in zip(journey.tasks, journey.tasks[1:]):
            if current.destination != following.origin and not current.end_time.precedes(
                following.start_time
            ):
                links.append((journey.key, current, following))
    return links


def _at(part: Sequence[Journey | None], index: int) -> Journey | None:
    return part[index] if index < len(part) else None


def build_pcr_cost_matrix(
    first: Sequence[Journey | None], second: Sequence[Journey | None], size: int
) -> list[list[int]]:
    """Cost of pairing head piece ``i`` with tail piece ``j``, for a square ``size``."""
    matrix = []
    for i in range(size):
        head = _at(first, i)
        row = []
        for j in range(size):
            tail = _at(second, j)
            if head is not None and tail is not None:
                row.append(combined_objective(head, tail))
            elif head is not None:
                row.append(combined_objective(head, None))
            elif tail is not None:
                row.append(combined_objective(tail, None))
            else:
                row.append(MAX_INF)
        matrix.append(row)
    return matrix


def generate_new_solution(
    columns: Sequence[int],
    first: Sequence[Journey | None],
    second: Sequence[Journey | None],
    matrix: Sequence[Sequence[int]],
) -> Solution:
    """Rebuild a schedule from an assignment of tail pieces to head pieces.

    The pieces are consumed: heads receive the tasks of the tails joined to them.
    """
    journeys: list[Journey | None] = list(first)
    f_obj = 0.0

    def append(tail: Journey) -> None:
        tail.key = len(journeys)
        journeys.append(tail)

    for i, column in enumerate(columns):
        head = _at(first, i)
        tail = _at(second, column)
        cost = matrix[i][column]
        if head is not None and tail is not None:
            if join_journeys(head, tail):
                head.key = i
                head.obj_value = float(cost)
            else:
                append(tail)
            f_obj += cost
        elif tail is not None:
            append(tail)
            f_obj += cost
        elif head is not None:
            f_obj += cost

    return Solution(journeys=[j for j in journeys if j is not None], f_obj=f_obj)


def _assignment_bound(matrix: Sequence[Sequence[int]]) -> int:
    largest = max((max(row) for row in matrix if row), default=0)
    return max(MAX_INF, largest + 1)


def _solve_cut(solution: Solution, k: int) -> tuple[CutResult, list[list[int]], AssignmentResult]:
    pieces = cut(solution.journeys, k)
    matrix = build_pcr_cost_matrix(pieces.first, pieces.second, len(solution.journeys))
    return pieces, matrix, solve_assignment(matrix, _assignment_bound(matrix))


def _neighbour(solution: Solution, k: int, reference: float) -> Solution | None:
    """Best recombination at cut ``k`` if it beats ``reference``."""
    pieces, matrix, result = _solve_cut(solution, k)
    if not improves(reference, result.total):
        return None
    return generate_new_solution(result.columns, pieces.first, pieces.second, matrix)


def _first_improvement(solution: Solution, places: Iterable[int]) -> Solution:
    for k in places:
        candidate = _neighbour(solution, k, solution.f_obj)
        if candidate is not None:
            candidate.calculate_cost()
            return candidate
    return solution


def _best_improvement(solution: Solution, places: Iterable[int]) -> Solution:
    best = solution.copy()
    for k in places:
        candidate = _neighbour(solution, k, best.f_obj)
        if candidate is not None:
            best = candidate
    best.calculate_cost()
    return best


def _continuous_improvement(solution: Solution, places: Iterable[int]) -> Solution:
    current = solution
    for k in places:
        candidate = _neighbour(current, k, current.f_obj)
        if candidate is not None:
            current = candidate
    current.calculate_cost()
    return current


def pcr_first_improvement_forward(solution: Solution, context: SearchContext) -> Solution:
    """Try the earliest cut place only; return the improved schedule or the input."""
    return _first_improvement(solution, generate_cut_places(context)[:1])


def pcr_first_improvement_backward(solution: Solution, context: SearchContext) -> Solution:
    """Try cut places from the latest; return the first improvement or the input."""
    return _first_improvement(solution, reversed(generate_cut_places(context)))


def pcr_best_improvement_forward(solution: Solution, context: SearchContext) -> Solution:
    """Best recombination over all cut places of the input, earliest first."""
    return _best_improvement(solution, generate_cut_places(context))


def pcr_best_improvement_backward(solution: Solution, context: SearchContext) -> Solution:
    """Best recombination over all cut places of the input, latest first."""
    return _best_improvement(solution, reversed(generate_cut_places(context)))


def pcr_continuous_improvement_forward(solution: Solution, context: SearchContext) -> Solution:
    """Apply every improving recombination in turn, earliest cut first."""
    return _continuous_improvement(solution, generate_cut_places(context))


def pcr_continuous_improvement_backward(solution: Solution, context: SearchContext) -> Solution:
    """Apply every improving recombination in turn, latest cut first."""
    return _continuous_improvement(solution, reversed(generate_cut_places(context)))