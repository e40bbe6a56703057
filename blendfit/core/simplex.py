#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/core/simplex.py

import math
from typing import Callable, List, Optional, Sequence, Tuple, Union

from . import config as c
from blendfit.shared.clamping import clamp

Bounds = Sequence[Tuple[float, float]]


def _safe_value(value: float) -> float:
    """NaN objective values rank as the worst possible point."""
    if value != value:
        return math.inf
    return value


def clamp_to_bounds(point: Sequence[float], bounds: Bounds) -> List[float]:
    return [clamp(v, lo, hi) for v, (lo, hi) in zip(point, bounds)]


def _initial_simplex(
    initial: Sequence[float], bounds: Bounds, step: Union[float, Sequence[float]]
) -> List[List[float]]:
    n = len(initial)
    steps = list(step) if isinstance(step, (list, tuple)) else [step] * n
    if len(steps) != n:
        raise ValueError(f"step has {len(steps)} entries for {n} dimensions")

    vertices = [list(initial)]
    for i in range(n):
        vertex = list(initial)
        lo, hi = bounds[i]
        moved = vertex[i] + steps[i]
        if moved < lo or moved > hi:
            # Stepping out of the box would flatten the simplex onto the bound
            moved = vertex[i] - steps[i]
        vertex[i] = moved
        vertices.append(vertex)
    return vertices


def nelder_mead(
    objective: Callable[[List[float]], float],
    initial: Sequence[float],
    bounds: Bounds,
    max_iterations: int = c.NM_DEFAULT_ITERATIONS,
    tolerance: float = c.NM_DEFAULT_TOLERANCE,
    step: Union[float, Sequence[float]] = c.NM_DEFAULT_STEP,
    constrain: Optional[Callable[[List[float]], List[float]]] = None,
) -> Tuple[List[float], float]:
    """
    Minimize `objective` over the box `bounds` with the Nelder-Mead simplex method.

    Every vertex is clamped into `bounds` (and passed through `constrain`, when
    given) before it is evaluated, so the objective never sees an out-of-range
    point. Returns the best vertex found and its objective value.
    """
    n = len(initial)
    if n == 0:
        raise ValueError("initial point must have at least one dimension")
    if len(bounds) != n:
        raise ValueError(f"bounds has {len(bounds)} entries for {n} dimensions")

    def prepare(point: Sequence[float]) -> List[float]:
        point = clamp_to_bounds(point, bounds)
        if constrain is not None:
            point = list(constrain(point))
        return point

    def evaluate(point: List[float]) -> float:
        return _safe_value(objective(list(point)))

    simplex = [prepare(v) for v in _initial_simplex(prepare(initial), bounds, step)]
    values = [evaluate(v) for v in simplex]

    for _ in range(max_iterations):
        order = sorted(range(n + 1), key=lambda i: values[i])
        simplex = [simplex[i] for i in order]
        values = [values[i] for i in order]

        if values[n] - values[0] < tolerance:
            break

        centroid = [sum(simplex[i][j] for i in range(n)) / n for j in range(n)]
        worst = simplex[n]

        reflected = prepare(
            [cj + c.NM_ALPHA * (cj - wj) for cj, wj in zip(centroid, worst)]
        )
        reflected_value = evaluate(reflected)

        if values[0] <= reflected_value < values[n - 1]:
            simplex[n], values[n] = reflected, reflected_value
            continue

        if reflected_value < values[0]:
            expanded = prepare(
                [cj + c.NM_GAMMA * (rj - cj) for cj, rj in zip(centroid, reflected)]
            )
            expanded_value = evaluate(expanded)
            if expanded_value < reflected_value:
                simplex[n], values[n] = expanded, expanded_value
            else:
                simplex[n], values[n] = reflected, reflected_value
            continue

        contracted = prepare(
            [cj + c.NM_RHO * (wj - cj) for cj, wj in zip(centroid, worst)]
        )
        contracted_value = evaluate(contracted)
        if contracted_value < values[n]:
            simplex[n], values[n] = contracted, contracted_value
            continue

        best = simplex[0]
        for i in range(1, n + 1):
            simplex[i] = prepare(
                [bj + c.NM_SIGMA * (vj - bj) for bj, vj in zip(best, simplex[i])]
            )
            values[i] = evaluate(simplex[i])

    best_index = min(range(n + 1), key=lambda i: values[i])
    return list(simplex[best_index]), values[best_index]
