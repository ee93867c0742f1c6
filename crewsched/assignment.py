"""Linear min-sum assignment problem solved with the Hungarian method, O(n^3)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass
class AssignmentResult:
    """Optimal assignment of rows to columns.

    ``columns[i]`` is the column given to row ``i``; ``dual_cost`` is the cost
    from the dual variables and ``total`` the sum of the chosen matrix entries.
    """

    columns: list[int]
    dual_cost: int
    total: float


def _initial_solution(
    n: int,
    a: Sequence[Sequence[int]],
    inf: int,
) -> tuple[list[int], list[int], list[int], list[int], list[int], int]:
    """Find the initial dual and partial primal solutions."""
    f = [-1] * n
    fb = [-1] * n
    u = [0] * n
    v = [0] * n
    p = [0] * n
    assigned = 0

    # Phase 1: scan the columns to initialise v.
    r = 0
    for j in range(n):
        smallest = inf
        for i in range(n):
            ia = a[i][j]
            if ia < smallest or (ia == smallest and f[i] < 0):
                smallest = ia
                r = i
        v[j] = smallest
        if f[r] < 0:
            assigned += 1
            fb[j] = r
            f[r] = j
            u[r] = 0
            p[r] = j + 1

    # Phase 2: scan the unassigned rows to update u.
    j = n
    for i in range(n):
        if f[i] >= 0:
            continue
        smallest = inf
        for k in range(n):
            ia = a[i][k] - v[k]
            if ia < smallest or (
                ia == smallest and fb[k] < 0 and j < n and fb[j] >= 0
            ):
                smallest = ia
                j = k
        if j >= n:
            raise ValueError("every cost in a row reaches the infinity bound")

        u[i] = smallest
        jmin = j
        if fb[j] >= 0:
            skip = False
            j = jmin
            while j < n and not skip:
                if a[i][j] - v[j] <= smallest:
                    r = fb[j]
                    kk = p[r]
                    if kk < n:
                        k = kk
                        while k < n and not skip:
                            if fb[k] < 0 and a[r][k] - u[r] - v[k] == 0:
                                f[r] = k
                                fb[k] = r
                                p[r] = k + 1
                                assigned += 1
                                f[i] = j
                                fb[j] = i
                                p[i] = j + 1
                                skip = True
                            k += 1
                        if not skip:
                            p[r] = n
                j += 1
        else:
            assigned += 1
            f[i] = j
            fb[j] = i
            p[i] = j + 1

    return f, fb, u, v, p, assigned


def _augmenting_path(
    n: int,
    a: Sequence[Sequence[int]],
    u: list[int],
    v: list[int],
    fb: list[int],
    rc: list[int],
    inf: int,
    start_row: int,
) -> int:
    """Find an augmenting path from an unassigned row, updating the duals.

    Returns the unassigned column the path ends at; ``rc`` records the row
    preceding each column on the path.
    """
    labelled_rows = [start_row]
    pi = [0] * n
    for k in range(n):
        pi[k] = a[start_row][k] - u[start_row] - v[k]
        rc[k] = start_row
    unlabelled = list(range(n))

    scan_last_row = False
    while True:
        if scan_last_row:
            r = labelled_rows[-1]
            for j in unlabelled:
                ia = a[r][j] - u[r] - v[j]
                if ia < pi[j]:
                    pi[j] = ia
                    rc[j] = r

        while True:
            zero_at = next(
                (pos for pos, col in enumerate(unlabelled) if pi[col] == 0), None
            )
            if zero_at is not None:
                break
            step = min([inf, *(pi[col] for col in unlabelled)])
            for r in labelled_rows:
                u[r] += step
            for j in range(n):
                if pi[j] == 0:
                    v[j] -= step
                else:
                    pi[j] -= step

        j = unlabelled[zero_at]
        if fb[j] < 0:
            return j
        labelled_rows.append(fb[j])
        unlabelled[zero_at] = unlabelled[-1]
        unlabelled.pop()
        scan_last_row = True


def _augment(f: list[int], fb: list[int], rc: list[int], j: int) -> None:
    """Assign column ``j`` by flipping the path recorded in ``rc``."""
    while True:
        i = rc[j]
        fb[j] = i
        previous = f[i]
        f[i] = j
        j = previous
        if j < 0:
            break


def solve_assignment(matrix: Sequence[Sequence[int]], inf: int) -> AssignmentResult:
    """Solve the square min-sum assignment problem for ``matrix``.

    ``inf`` must be a large integer, strictly greater than the largest
    assignment cost.
    """
    n = len(matrix)
    if any(len(row) != n for row in matrix):
        raise ValueError("cost matrix must be square")

    f, fb, u, v, _, assigned = _initial_solution(n, matrix, inf)

    if assigned != n:
        rc = [0] * n
        for i in range(n):
            if f[i] < 0:
                j = _augmenting_path(n, matrix, u, v, fb, rc, inf, i)
                _augment(f, fb, rc, j)

    dual_cost = sum(u) + sum(v)
    total = float(sum(matrix[i][col] for i, col in enumerate(f)))
    return AssignmentResult(columns=f, dual_cost=dual_cost, total=total)