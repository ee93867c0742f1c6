# crewsched

A library for building and improving bus crew schedules. The library splits
a set of timed trips (tasks) into layers and assigns the layers to driver
journeys by solving linear assignment problems. It can then perturb the
resulting schedule and improve it with cut-and-recombine (PCR) operators.
Journeys are evaluated against labour rules: overtime, maximum duty length,
continuous driving, and minimum and maximum breaks. Night minutes are weighted.

The library is written in pure Python and has no runtime dependencies.

## Installation

```
pip install .
```

To install the test dependencies, use `pip install .[test]`.

## Modules

- `crewsched.timing`: provides `DateTime`, a minute-of-day time. It also has
  `DateTime.from_hour_minute`, `precedes` and `verify_to_add_day`.
- `crewsched.task`: provides `Task`. Its functions split time into day and
  night parts: `len_transformation`, `gap_day_night` and `gap`.
- `crewsched.assignment`: provides `solve_assignment(matrix, inf)`, a
  Hungarian-method solver for square min-sum problems. It returns an
  `AssignmentResult` with `columns`, `dual_cost` and `total`.
- `crewsched.instance`: provides `read_instance`, `parse_instance` and
  `parse_task_line`, which read an instance into an `Instance`. An
  `Instance` has `number_tasks`, `tasks` sorted by start time, and an
  independent copy called `task_vector`.
- `crewsched.layers`: provides `generate_layers`,
  `generate_sequential_layers`, `verify_viability`, `can_follow` and
  `describe_layers`.
- `crewsched.journey`: provides `Journey` and `TimeBreakdown`.
  - `Journey` has the methods `cost()`, `objective()`, `matrix_cost()` and
    `feasible()`.
  - The module also has `combined_objective`, `join_journeys` and
    `extra_hour`.
- `crewsched.solution`: provides `Solution`, `SearchContext`,
  `initial_solution`, `build_cost_matrix`, `transform_assignment`,
  `insertion_cost` and `calculate_duration`.
  - `Solution.describe()` returns a text listing.
  - `Solution.to_dot()` returns a Graphviz graph as a string.
- `crewsched.cut`: provides `generate_cut_places` and
  `generate_shake_cut_place`. Its `cut`, `cut_compact` and `cut_two_places`
  functions return a `CutResult`. It also has `count_cut_parts`.
- `crewsched.shake`: provides `shake(solution, k, context, rng)` for
  neighbourhoods 1 to 4. It also has `shake_one_slice`, `shake_two_slices`,
  `recombine_journeys` and `recombine_feasible_journeys`.
- `crewsched.pcr`: provides the PCR operators
  `pcr_{first,best,continuous}_improvement_{forward,backward}`. It also has
  `build_pcr_cost_matrix`, `generate_new_solution`, `improves` and
  `find_infeasible_links`.

## Example

```python
import random

from crewsched.instance import read_instance
from crewsched.layers import generate_layers
from crewsched.pcr import pcr_continuous_improvement_backward
from crewsched.shake import shake
from crewsched.solution import SearchContext, initial_solution

instance = read_instance("instance.csv")
context = SearchContext(
    task_vector=instance.task_vector,
    number_tasks=instance.number_tasks,
)
layers = generate_layers(instance.tasks)
solution = initial_solution(layers, context)
print(solution.f_obj, solution.f_cost, solution.duration)

improved = pcr_continuous_improvement_backward(solution, context)
print(improved.describe())

perturbed = shake(improved.copy(), 2, context, random.Random(1))
```

`initial_solution` fills in the context's `layers_size`, `min_start_time`
and `min_end_time`. The cut and shake functions rely on these values.

## Instance format

An instance file has three parts:

1. A header line.
2. The number of tasks, on the second line.
3. One comma-separated line per task, with these fields:
   - bus line
   - origin
   - destination
   - departure hour
   - departure minute
   - duration
   - bus number

Hours 25 to 30 are read as 1 to 6.

## What the package does not do

- There is no command-line program.
- There is no complete search driver. The package has no VNS loop, no
  variable-neighbourhood descent and no k-swap operators, so repeated
  shaking and improvement is left to the caller.
- The package does not write schedules or logs to files. `describe()` and
  `to_dot()` return strings.