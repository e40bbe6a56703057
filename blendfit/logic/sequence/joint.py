#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/joint.py

import random
from typing import List, Optional, Sequence, Tuple

from blendfit.core import config as c
from blendfit.core.simplex import clamp_to_bounds, nelder_mead
from .steps import (
    build_steps,
    compute_sequence_error,
    flatten_steps,
    neutral_params,
    sequence_layout,
    sequence_total_error,
    step_errors,
)

Bounds = Sequence[Tuple[float, float]]


def sequence_objective(prepared: Sequence[dict], mode_sequence: Sequence[str], min_opacity: float, max_opacity: float):
    def objective(flat: Sequence[float]) -> float:
        steps = build_steps(mode_sequence, flat, min_opacity, max_opacity)
        return sequence_total_error(prepared, steps)
    return objective


def perturb(solution: Sequence[float], radius: float, bounds: Bounds, rng=None) -> List[float]:
    """Uniform offset in [-radius, radius] per dimension, clamped into bounds."""
    rng = rng or random
    moved = [v + (rng.random() - 0.5) * 2 * radius for v in solution]
    return clamp_to_bounds(moved, bounds)


def random_point(bounds: Bounds, rng=None) -> List[float]:
    rng = rng or random
    return [lo + rng.random() * (hi - lo) for lo, hi in bounds]


def refine_with_hops(
    objective, initial: Sequence[float], bounds: Bounds, basin_hops: int, rng=None
) -> Tuple[List[float], float]:
    """One restart: a full simplex run, then basin hops that only keep improvements."""
    solution, value = nelder_mead(
        objective, initial, bounds,
        max_iterations=c.JOINT_MAX_ITERATIONS,
        tolerance=c.JOINT_TOLERANCE,
        step=c.JOINT_STEP,
    )
    for hop in range(basin_hops):
        radius = c.HOP_BASE_RADIUS + c.HOP_RADIUS_GROWTH * hop
        start = perturb(solution, radius, bounds, rng)
        hop_solution, hop_value = nelder_mead(
            objective, start, bounds,
            max_iterations=c.HOP_MAX_ITERATIONS,
            tolerance=c.HOP_TOLERANCE,
            step=c.HOP_STEP,
        )
        if hop_value < value:
            solution, value = hop_solution, hop_value
    return solution, value


def _restart_point(
    restart: int,
    mode_sequence: Sequence[str],
    initial_blends,
    bounds: Bounds,
    max_opacity: float,
    rng,
) -> List[float]:
    has_guess = initial_blends is not None and len(initial_blends) == len(mode_sequence)
    neutral_index = 1 if has_guess else 0
    if has_guess and restart == 0:
        return clamp_to_bounds(flatten_steps(mode_sequence, initial_blends, max_opacity), bounds)
    if restart == neutral_index:
        neutral = [neutral_params(m) for m in mode_sequence]
        return clamp_to_bounds(flatten_steps(mode_sequence, neutral, max_opacity), bounds)
    return random_point(bounds, rng)


def joint_optimize_sequence(
    prepared: Sequence[dict],
    mode_sequence: Sequence[str],
    initial_blends: Optional[Sequence[Sequence[float]]] = None,
    num_restarts: int = 5,
    basin_hops: int = 2,
    min_opacity: float = c.DEFAULT_MIN_OPACITY / 100,
    max_opacity: float = c.DEFAULT_MAX_OPACITY / 100,
    rng=None,
) -> Optional[dict]:
    """
    Jointly refine every step's parameters and opacity for a fixed mode
    sequence. Restart 0 starts from the greedy guess, the next from neutral
    parameters, the rest from random points; each restart is followed by
    basin hopping. Returns a SequenceResult-shaped dict, or None without pairs.
    """
    if not prepared or not mode_sequence:
        return None

    bounds = sequence_layout(mode_sequence, min_opacity, max_opacity)
    objective = sequence_objective(prepared, mode_sequence, min_opacity, max_opacity)

    best, best_value = None, float("inf")
    for restart in range(max(1, num_restarts)):
        initial = _restart_point(restart, mode_sequence, initial_blends, bounds, max_opacity, rng)
        solution, value = refine_with_hops(objective, initial, bounds, basin_hops, rng)
        if best is None or value < best_value:
            best, best_value = solution, value

    steps = build_steps(mode_sequence, best, min_opacity, max_opacity)
    for step, error in zip(steps, step_errors(prepared, steps)):
        step["step_error"] = error

    return {
        "steps": steps,
        "mode_sequence": list(mode_sequence),
        **compute_sequence_error(prepared, steps),
    }
