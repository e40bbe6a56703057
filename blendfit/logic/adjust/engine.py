#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/adjust/engine.py

from typing import Callable, Iterable, List, Optional, Sequence

from blendfit.core import config as c
from blendfit.core import conversions as conv
from blendfit.core.pairs import classify_quality, color_error, prepare_pairs, summarize_errors
from blendfit.core.simplex import nelder_mead
from .filters import apply_hsl_adjustment, apply_levels_adjustment, constrain_levels, levels_to_dict

HSL_BOUNDS = (c.HSL_HUE_RANGE, c.HSL_SAT_RANGE, c.HSL_LIGHT_RANGE)
LEVELS_BOUNDS = (
    (0.0, c.LEVELS_INPUT_BLACK_MAX),
    (c.LEVELS_MIN_INPUT_GAP, c.RGB_MAX),
    (c.LEVELS_GAMMA_MIN, c.LEVELS_GAMMA_MAX),
    (0.0, c.RGB_MAX),
    (0.0, c.RGB_MAX),
)


def _round_rgb(rgb: Sequence[float]):
    return tuple(int(round(v)) for v in rgb)


def _adjust_objective(prepared: Sequence[dict], transform: Callable):
    def objective(params: Sequence[float]) -> float:
        total = 0.0
        for pair in prepared:
            if pair["weight"] == 0:
                continue
            rgb = _round_rgb(transform(pair["source_rgb"], params))
            total += pair["weight"] * color_error(rgb, pair["target_lab"])
        return total
    return objective


def _evaluate_adjustment(prepared: Sequence[dict], transform: Callable, params) -> dict:
    per_pair = []
    errors = []
    for pair in prepared:
        rgb = _round_rgb(transform(pair["source_rgb"], params))
        error = color_error(rgb, pair["target_lab"])
        errors.append(error)
        per_pair.append({
            "source": pair["source"],
            "target": pair["target"],
            "weight": pair["weight"],
            "achieved": conv.rgb_to_hex(*rgb),
            "achieved_rgb": rgb,
            "error": error,
        })
    summary = summarize_errors(prepared, errors)
    return {
        **summary,
        "per_pair_results": per_pair,
        "quality": classify_quality(summary["avg_error"]),
    }


def _hsl_transform(rgb, params):
    return apply_hsl_adjustment(rgb, *params)


def _multi_start(objective, starts, bounds, max_iterations, tolerance, step, constrain=None) -> List[float]:
    best, best_value = None, float("inf")
    for start in starts:
        solution, value = nelder_mead(
            objective, start, bounds,
            max_iterations=max_iterations,
            tolerance=tolerance,
            step=step,
            constrain=constrain,
        )
        if best is None or value < best_value:
            best, best_value = solution, value
    return best


def optimize_hsl_prepared(prepared: Sequence[dict], starts=c.HSL_STARTING_POINTS) -> Optional[dict]:
    if not prepared:
        return None
    best = _multi_start(
        _adjust_objective(prepared, _hsl_transform),
        starts,
        HSL_BOUNDS,
        c.HSL_MAX_ITERATIONS,
        c.HSL_TOLERANCE,
        c.HSL_STEPS,
    )
    hue, sat, light = (round(v, 1) for v in best)
    result = _evaluate_adjustment(prepared, _hsl_transform, (hue, sat, light))
    return {
        "mode": c.HSL_MODE_NAME,
        "hue": hue,
        "saturation": sat,
        "lightness": light,
        **result,
    }


def optimize_hsl(pairs: Iterable[dict]) -> Optional[dict]:
    """Best Hue/Saturation layer for the pairs, or None without valid pairs."""
    return optimize_hsl_prepared(prepare_pairs(pairs))


def round_levels(params: Sequence[float]) -> List[float]:
    in_black, in_white, gamma, out_black, out_white = params
    rounded = [
        float(round(in_black)),
        float(round(in_white)),
        round(gamma, 2),
        float(round(out_black)),
        float(round(out_white)),
    ]
    return constrain_levels(rounded)


def optimize_levels_prepared(prepared: Sequence[dict], starts=c.LEVELS_STARTING_POINTS) -> Optional[dict]:
    if not prepared:
        return None
    best = _multi_start(
        _adjust_objective(prepared, apply_levels_adjustment),
        starts,
        LEVELS_BOUNDS,
        c.LEVELS_MAX_ITERATIONS,
        c.LEVELS_TOLERANCE,
        c.LEVELS_STEPS,
        constrain=constrain_levels,
    )
    final = round_levels(best)
    result = _evaluate_adjustment(prepared, apply_levels_adjustment, final)
    return {
        "mode": c.LEVELS_MODE_NAME,
        "params": levels_to_dict(final),
        **result,
    }


def optimize_levels(pairs: Iterable[dict]) -> Optional[dict]:
    """Best Levels layer for the pairs, or None without valid pairs."""
    return optimize_levels_prepared(prepare_pairs(pairs))
