"""Constructive phase: grouping time-ordered tasks into layers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from crewsched.task import Task

MAX_LAYERS = 1000


def verify_viability(tasks: Sequence[Task], task: Task) -> bool:
    """True when ``task`` can be appended after the last of ``tasks``."""
    if not tasks:
        raise ValueError("cannot check viability against an empty task sequence")
    last = tasks[-1]
    return last.destination == task.origin and last.end_time.precedes(task.start_time)


def can_follow(layer: Iterable[Task], task: Task) -> bool:
    """True when ``task`` can follow some task of ``layer``."""
    return any(
        previous.destination == task.origin
        and previous.end_time.precedes(task.start_time)
        for previous in layer
    )


def generate_layers(tasks: Iterable[Task]) -> list[list[Task]]:
    """Split start-ordered tasks into layers of mutually overlapping tasks.

    Each task goes into the layer after the latest one containing a task it
    can follow; the input tasks are copied, not consumed.
    """
    layers: list[list[Task]] = []
    for original in tasks:
        task = original.copy()
        i = len(layers)
        while i > 0 and not can_follow(layers[i - 1], task):
            i -= 1
        if i == len(layers):
            if len(layers) >= MAX_LAYERS:
                raise ValueError(f"more than {MAX_LAYERS} layers")
            layers.append([])
        layers[i].append(task)
    return layers


def generate_sequential_layers(tasks: Iterable[Task]) -> list[list[Task]]:
    """Split start-ordered tasks into layers whose tasks can run in sequence."""
    layers: list[list[Task]] = [[]]
    for original in tasks:
        task = original.copy()
        i = len(layers)
        if i == 1 and not layers[0]:
            layers[0].append(task)
            continue
        while i > 0 and not can_follow(layers[i - 1], task):
            i -= 1
        if i == 0:
            if len(layers) >= MAX_LAYERS:
                raise ValueError(f"more than {MAX_LAYERS} layers")
            layers.append([task])
        else:
            layers[i - 1].append(task)
    return layers


def describe_layers(layers: Sequence[Sequence[Task]]) -> str:
    """Start times of the first and last task of every layer."""
    parts = []
    for index, layer in enumerate(layers):
        if not layer:
            raise ValueError(f"layer {index} is empty")
        parts.append(f"C{index}\n{layer[0].start_time}\n{layer[-1].start_time}\n")
    return "".join(parts)