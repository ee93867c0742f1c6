"""Whole schedules: sets of journeys, their evaluation and the initial construction."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from crewsched.assignment import solve_assignment
from crewsched.journey import MAX_INF, Journey
from crewsched.layers import verify_viability
from crewsched.task import Task, len_transformation
from crewsched.timing import verify_to_add_day

INF = 9999999
NEW_JOURNEY_COST = 440


@dataclass
class SearchContext:
    """State shared by the construction and the neighbourhood operators."""

    task_vector: list[Task] = field(default_factory=list)
    number_tasks: int = 0
    layers_size: int = 0
    min_start_time: int = 0
    min_end_time: int = 0


@dataclass
class Solution:
    """A schedule: journeys plus objective, cost and total duration."""

    journeys: list[Journey] = field(default_factory=list)
    f_obj: float = 0.0
    f_cost: float = 0.0
    duration: float = 0.0

    def copy(self) -> "Solution":
        """Deep copy of the schedule."""
        return Solution(
            journeys=[journey.copy() for journey in self.journeys],
            f_obj=self.f_obj,
            f_cost=self.f_cost,
            duration=self.duration,
        )

    def equals(self, other: "Solution") -> bool:
        """True when both schedules hold the same tasks in the same journeys."""
        if len(self.journeys) != len(other.journeys):
            return False
        for mine, theirs in zip(self.journeys, other.journeys):
            if len(mine.tasks) != len(theirs.tasks):
                return False
            if not all(a.same_as(b) for a, b in zip(mine.tasks, theirs.tasks)):
                return False
        return True

    def calculate_objective(self) -> None:
        """Recompute every journey objective and their total."""
        self.f_obj = 0.0
        for journey in self.journeys:
            journey.obj_value = journey.objective()
            self.f_obj += journey.obj_value

    def calculate_cost(self) -> None:
        """Recompute every journey cost and their total."""
        self.f_cost = 0.0
        for journey in self.journeys:
            journey.cost_value = journey.cost()
            self.f_cost += journey.cost_value

    def calculate_cost_and_objective(self) -> None:
        """Evaluate every journey, adding to the running totals."""
        for journey in self.journeys:
            journey.cost_value = journey.cost()
            journey.obj_value = journey.objective()
            self.f_cost += journey.cost_value
            self.f_obj += journey.obj_value

    def calculate_duration(self) -> None:
        """Compute each journey's duration, adding to the running total."""
        for journey in self.journeys:
            journey.duration = calculate_duration(journey)
            self.duration += journey.duration

    def describe(self) -> str:
        """Listing of every task of every journey."""
        if not self.journeys:
            return "Empty solution\n"
        return "".join(journey.describe() for journey in self.journeys)

    def to_dot(self) -> str:
        """Graphviz description linking each journey to its chain of tasks."""
        lines = ["graph g {\nranksep=0.2;\noverlap=scale;\n"]
        for journey in self.journeys:
            if not journey.tasks:
                raise ValueError(f"journey {journey.key} has no tasks")
            first = journey.tasks[0]
            lines.append(
                f'"J{journey.key}" -- "{first.key} ({first.start_time.hours2minutes}-'
                f'{first.end_time.hours2minutes}) ({first.origin}-{first.destination})"'
                " [style=dotted];\n"
            )
            for current, following in zip(journey.tasks, journey.tasks[1:]):
                st = current.start_time.hours2minutes
                et = current.end_time.hours2minutes
                lines.append(
                    f'"{current.key} ({st}-{et}) ({current.origin}-{current.destination})"'
                    f' -- "{following.key} ({st}-{et}) '
                    f'({following.origin}-{following.destination})"'
                    " [weight=1.2, len=0.5];\n"
                )
        lines.append("}")
        return "".join(lines)


def insertion_cost(journey: Journey, task: Task) -> float:
    """Matrix cost of ``journey`` with ``task`` appended when it is unassigned."""
    candidate = journey.copy()
    if task.journey_key == -1:
        candidate.tasks.append(task.copy())
    return candidate.matrix_cost()


def build_cost_matrix(journeys: Sequence[Journey], layer: Sequence[Task]) -> list[list[int]]:
    """Square cost matrix assigning the tasks of a layer to journeys or new journeys."""
    len_jor = len(journeys)
    len_layer = len(layer)
    n = len_jor + len_layer
    matrix: list[list[int]] = []

    for jor in range(n):
        row = [MAX_INF] * n
        for t in range(n):
            if jor < len_jor and t < len_layer:
                journey = journeys[jor]
                task = layer[t]
                if verify_viability(journey.tasks, task):
                    row[t] = int(insertion_cost(journey, task))
            elif jor < len_jor:
                journey = journeys[jor]
                if journey.feasible():
                    row[t] = int(journey.matrix_cost())
            elif t < len_layer:
                source_index = jor - len_jor
                source = matrix[source_index] if source_index < jor else row
                if source[t] >= MAX_INF:
                    row[t] = NEW_JOURNEY_COST
            else:
                row[t] = 0
        matrix.append(row)
    return matrix


def transform_assignment(
    columns: Sequence[int],
    layer: Sequence[Task],
    journeys: Sequence[Journey],
    context: SearchContext,
) -> list[Journey]:
    """Apply an assignment of layer tasks to journeys, opening journeys as needed."""
    result = [journey.copy() for journey in journeys]

    for i, column in enumerate(columns):
        if column >= len(layer):
            continue
        original = layer[column]
        if original.end_time.hours2minutes > context.min_end_time:
            context.min_end_time = original.end_time.hours2minutes

        task = original.copy()
        if i < len(result) and verify_viability(result[i].tasks, task):
            target = result[i]
        else:
            target = Journey(key=len(result))
            result.append(target)
        target.tasks.append(task)
        task.journey_key = target.key
    return result


def calculate_duration(journey: Journey) -> int:
    """Minutes from the start of the first task to the end of the last."""
    tasks = journey.tasks
    if not tasks:
        raise ValueError("journey has no tasks")

    first = tasks[0]
    first_day, first_night = len_transformation(
        first.start_time.hours2minutes, first.end_time.hours2minutes, first.duration
    )
    if len(tasks) == 1:
        return int(first_day + first_night)

    total = 0.0
    for previous, current in reversed(list(zip(tasks, tasks[1:]))):
        day, night = len_transformation(
            current.start_time.hours2minutes,
            current.end_time.hours2minutes,
            current.duration,
        )
        total += day + night
        shifted = verify_to_add_day(
            current.start_time.hours2minutes, previous.end_time.hours2minutes
        )
        total += float(shifted - previous.end_time.hours2minutes)
    total += int(first_day + first_night)
    return int(total)


def initial_solution(layers: Sequence[Sequence[Task]], context: SearchContext) -> Solution:
    """Build a schedule by solving one assignment problem per layer."""
    if not layers or not layers[0]:
        raise ValueError("at least one non-empty layer is required")

    context.layers_size = len(layers)
    context.min_start_time = layers[0][0].start_time.hours2minutes

    solution = Solution()
    for layer in layers:
        matrix = build_cost_matrix(solution.journeys, layer)
        assignment = solve_assignment(matrix, INF)
        solution.journeys = transform_assignment(
            assignment.columns, layer, solution.journeys, context
        )

    solution.calculate_cost_and_objective()
    solution.calculate_duration()
    return solution