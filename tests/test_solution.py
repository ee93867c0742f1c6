import pytest

from crewsched.journey import MAX_INF, Journey
from crewsched.layers import generate_layers, verify_viability
from crewsched.solution import (
    NEW_JOURNEY_COST,
    SearchContext,
    Solution,
    build_cost_matrix,
    calculate_duration,
    initial_solution,
    insertion_cost,
    transform_assignment,
)
from crewsched.task import Task
from crewsched.timing import DateTime


def _task(key, hour, minute, duration, origin="T", destination="T"):
    return Task(
        bus_line="A",
        origin=origin,
        destination=destination,
        duration=duration,
        start_time=DateTime.from_hour_minute(hour, minute),
        end_time=DateTime.from_hour_minute(hour, minute + duration),
        key=key,
    )


def _solution():
    j1 = Journey(tasks=[_task(0, 6, 0, 40), _task(1, 7, 0, 30)], key=0)
    j2 = Journey(tasks=[_task(2, 8, 0, 20)], key=1)
    return Solution(journeys=[j1, j2])


def test_duration_single_task_is_its_length():
    journey = Journey(tasks=[_task(0, 6, 0, 40)])
    assert calculate_duration(journey) == 40


def test_duration_spans_first_start_to_last_end():
    tasks = [_task(0, 6, 0, 40), _task(1, 7, 0, 30), _task(2, 8, 0, 15)]
    journey = Journey(tasks=tasks)
    expected = tasks[-1].end_time.hours2minutes - tasks[0].start_time.hours2minutes
    assert calculate_duration(journey) == expected


def test_duration_of_empty_journey_raises():
    with pytest.raises(ValueError):
        calculate_duration(Journey())


def test_copy_is_deep_and_equal():
    solution = _solution()
    clone = solution.copy()
    assert clone.equals(solution)
    clone.journeys[0].tasks.pop()
    assert len(solution.journeys[0].tasks) == 2
    assert not clone.equals(solution)


def test_equals_detects_different_tasks():
    first = _solution()
    second = _solution()
    second.journeys[1].tasks[0].key = 99
    assert not first.equals(second)


def test_equals_detects_different_journey_counts():
    first = _solution()
    second = _solution()
    second.journeys.pop()
    assert not first.equals(second)


def test_objective_is_sum_of_journey_objectives():
    solution = _solution()
    solution.calculate_objective()
    assert solution.f_obj == pytest.approx(sum(j.obj_value for j in solution.journeys))
    solution.calculate_objective()
    assert solution.f_obj == pytest.approx(sum(j.obj_value for j in solution.journeys))


def test_cost_is_sum_of_journey_costs():
    solution = _solution()
    solution.calculate_cost()
    assert solution.f_cost == pytest.approx(sum(j.cost_value for j in solution.journeys))


def test_cost_and_objective_accumulate():
    solution = _solution()
    solution.calculate_cost_and_objective()
    once_obj, once_cost = solution.f_obj, solution.f_cost
    solution.calculate_cost_and_objective()
    assert solution.f_obj == pytest.approx(2 * once_obj)
    assert solution.f_cost == pytest.approx(2 * once_cost)


def test_solution_duration_sums_journeys():
    solution = _solution()
    solution.calculate_duration()
    assert solution.duration == sum(j.duration for j in solution.journeys)


def test_describe_empty_and_filled():
    assert Solution().describe() == "Empty solution\n"
    text = _solution().describe()
    assert len(text.splitlines()) == 3


def test_to_dot_structure():
    dot = _solution().to_dot()
    assert dot.startswith("graph g {\nranksep=0.2;\noverlap=scale;\n")
    assert dot.endswith("}")
    assert '"J0" -- ' in dot
    assert '"J1" -- ' in dot
    assert dot.count("[weight=1.2, len=0.5]") == 1


def test_insertion_cost_appends_unassigned_task():
    journey = Journey(tasks=[_task(0, 6, 0, 40)])
    task = _task(1, 7, 0, 30)
    expected = Journey(tasks=[_task(0, 6, 0, 40), _task(1, 7, 0, 30)]).matrix_cost()
    assert insertion_cost(journey, task) == pytest.approx(expected)
    assert len(journey.tasks) == 1


def test_insertion_cost_ignores_assigned_task():
    journey = Journey(tasks=[_task(0, 6, 0, 40)])
    task = _task(1, 7, 0, 30)
    task.journey_key = 3
    assert insertion_cost(journey, task) == pytest.approx(journey.copy().matrix_cost())


def test_cost_matrix_without_journeys_opens_new_ones():
    layer = [_task(0, 6, 0, 40), _task(1, 6, 10, 40)]
    matrix = build_cost_matrix([], layer)
    assert matrix == [[NEW_JOURNEY_COST] * 2, [NEW_JOURNEY_COST] * 2]


def test_cost_matrix_with_viable_link():
    journey = Journey(tasks=[_task(0, 6, 0, 40)])
    task = _task(1, 7, 0, 30)
    matrix = build_cost_matrix([journey], [task])
    assert matrix[0][0] == int(insertion_cost(journey, task))
    assert matrix[0][1] == int(journey.copy().matrix_cost())
    assert matrix[1][0] == MAX_INF
    assert matrix[1][1] == 0


def test_cost_matrix_with_unviable_link():
    journey = Journey(tasks=[_task(0, 7, 0, 30)])
    task = _task(1, 6, 0, 40)
    matrix = build_cost_matrix([journey], [task])
    assert matrix[0][0] == MAX_INF
    assert matrix[1][0] == NEW_JOURNEY_COST


def test_transform_assignment_opens_journeys():
    layer = [_task(0, 6, 0, 40), _task(1, 6, 10, 50)]
    context = SearchContext()
    journeys = transform_assignment([1, 0], layer, [], context)
    assert [j.key for j in journeys] == [0, 1]
    assert [j.tasks[0].key for j in journeys] == [1, 0]
    assert all(j.tasks[0].journey_key == j.key for j in journeys)
    assert context.min_end_time == layer[1].end_time.hours2minutes
    assert layer[0].journey_key == -1


def test_transform_assignment_extends_existing_journey():
    existing = Journey(tasks=[_task(0, 6, 0, 40)], key=0)
    layer = [_task(1, 7, 0, 30)]
    journeys = transform_assignment([0, 1], layer, [existing], SearchContext())
    assert len(journeys) == 1
    assert [t.key for t in journeys[0].tasks] == [0, 1]
    assert len(existing.tasks) == 1


def test_initial_solution_covers_every_task():
    tasks = [_task(0, 6, 0, 40), _task(1, 6, 10, 40), _task(2, 7, 0, 30)]
    layers = generate_layers(tasks)
    context = SearchContext()
    solution = initial_solution(layers, context)

    keys = sorted(t.key for j in solution.journeys for t in j.tasks)
    assert keys == [0, 1, 2]
    for journey in solution.journeys:
        for index in range(1, len(journey.tasks)):
            assert verify_viability(journey.tasks[:index], journey.tasks[index])
    assert solution.f_obj == pytest.approx(sum(j.obj_value for j in solution.journeys))
    assert context.min_start_time == tasks[0].start_time.hours2minutes
    assert context.min_end_time == tasks[2].end_time.hours2minutes
    assert context.layers_size == len(layers)


def test_initial_solution_needs_layers():
    with pytest.raises(ValueError):
        initial_solution([], SearchContext())