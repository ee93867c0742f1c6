import pytest

from crewsched.layers import (
    MAX_LAYERS,
    can_follow,
    describe_layers,
    generate_layers,
    generate_sequential_layers,
    verify_viability,
)
from crewsched.task import Task
from crewsched.timing import DateTime


def _task(key, origin, destination, start, end):
    return Task(
        origin=origin,
        destination=destination,
        start_time=DateTime(hours2minutes=start),
        end_time=DateTime(hours2minutes=end),
        duration=end - start,
        key=key,
    )


def _sample():
    return [
        _task(0, "A", "B", 360, 400),
        _task(1, "A", "C", 370, 410),
        _task(2, "B", "A", 420, 450),
    ]


def _keys(layers):
    return [[t.key for t in layer] for layer in layers]


def test_verify_viability_true():
    first, _, third = _sample()
    assert verify_viability([first], third) is True


def test_verify_viability_wrong_place():
    _, second, third = _sample()
    assert verify_viability([second], third) is False


def test_verify_viability_too_early():
    first, _, third = _sample()
    assert verify_viability([third], first) is False


def test_verify_viability_empty_raises():
    with pytest.raises(ValueError):
        verify_viability([], _sample()[0])


def test_can_follow_checks_any_task():
    first, second, third = _sample()
    assert can_follow([second, first], third) is True
    assert can_follow([second], third) is False
    assert can_follow([], third) is False


def test_generate_layers_groups_overlapping_tasks():
    assert _keys(generate_layers(_sample())) == [[0, 1], [2]]


def test_generate_layers_keeps_every_task_and_copies():
    tasks = _sample()
    layers = generate_layers(tasks)
    flat = [t for layer in layers for t in layer]
    assert sorted(t.key for t in flat) == [t.key for t in tasks]
    assert all(all(t is not original for original in tasks) for t in flat)
    assert len(tasks) == 3


def test_generate_layers_empty():
    assert generate_layers([]) == []


def test_generate_layers_limit():
    chain = [_task(i, "A", "A", i, i) for i in range(MAX_LAYERS + 1)]
    with pytest.raises(ValueError):
        generate_layers(chain)


def test_generate_sequential_layers_chain_tasks():
    assert _keys(generate_sequential_layers(_sample())) == [[0, 2], [1]]


def test_generate_sequential_layers_each_layer_is_chained():
    tasks = _sample() + [_task(3, "C", "A", 430, 460), _task(4, "A", "B", 470, 480)]
    for layer in generate_sequential_layers(tasks):
        for earlier_index, later in enumerate(layer[1:]):
            assert can_follow(layer[: earlier_index + 1], later)


def test_generate_sequential_layers_empty():
    assert generate_sequential_layers([]) == [[]]


def test_describe_layers():
    layers = generate_layers(_sample())
    text = describe_layers(layers)
    expected = (
        f"C0\n{layers[0][0].start_time}\n{layers[0][-1].start_time}\n"
        f"C1\n{layers[1][0].start_time}\n{layers[1][-1].start_time}\n"
    )
    assert text == expected


def test_describe_layers_empty_layer_raises():
    with pytest.raises(ValueError):
        describe_layers([[]])