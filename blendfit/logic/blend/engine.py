#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/blend/engine.py

from typing import Iterable, List, Optional, Sequence, Tuple

from blendfit.core import config as c
from blendfit.core import conversions as conv
from blendfit.core.blend_modes import (
    BLEND_MODES,
    BlendMode,
    apply_blend,
    get_blend_mode,
    invert_channel,
)
from blendfit.core.pairs import (
    classify_quality,
    color_error,
    prepare_pairs,
    summarize_errors,
)
from blendfit.core.simplex import nelder_mead
from blendfit.shared.clamping import _clamp01

UNIT_BOUNDS = ((0.0, 1.0),) * c.BLEND_PARAM_COUNT


def _resolve_mode(mode) -> BlendMode:
    return mode if isinstance(mode, BlendMode) else get_blend_mode(mode)


def compute_initial_guess(mode: BlendMode, prepared: Sequence[dict]) -> Tuple[float, float, float]:
    """Weighted average of per-pair analytic inverses, or mid-gray when none solve."""
    solved: List[Tuple[Tuple[float, float, float], float]] = []
    for pair in prepared:
        channels = []
        for s, t in zip(pair["source_norm"], pair["target_norm"]):
            b = invert_channel(mode, s, t)
            if b is None:
                break
            channels.append(b)
        else:
            solved.append((tuple(channels), pair["weight"]))

    if not solved:
        return c.NEUTRAL_BLEND

    weight_sum = sum(w for _, w in solved)
    if weight_sum > 0:
        return tuple(
            sum(blend[i] * w for blend, w in solved) / weight_sum
            for i in range(c.BLEND_PARAM_COUNT)
        )
    return tuple(
        sum(blend[i] for blend, _ in solved) / len(solved)
        for i in range(c.BLEND_PARAM_COUNT)
    )


def blend_pair_rgb(mode: BlendMode, source_norm: Sequence[float], blend: Sequence[float]) -> Tuple[int, int, int]:
    return conv.norm_to_rgb(*apply_blend(mode, source_norm, blend))


def blend_objective(mode: BlendMode, prepared: Sequence[dict]):
    """Total weighted CIEDE2000 of the 8-bit blended sources against their targets."""
    def objective(blend: Sequence[float]) -> float:
        total = 0.0
        for pair in prepared:
            if pair["weight"] == 0:
                continue
            rgb = blend_pair_rgb(mode, pair["source_norm"], blend)
            total += pair["weight"] * color_error(rgb, pair["target_lab"])
        return total
    return objective


def evaluate_blend(mode: BlendMode, prepared: Sequence[dict], blend: Sequence[float]) -> dict:
    """Score a blend color against every pair and build the result dict."""
    blend = tuple(_clamp01(v) for v in blend)
    per_pair = []
    errors = []
    for pair in prepared:
        rgb = blend_pair_rgb(mode, pair["source_norm"], blend)
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
    blend_rgb = conv.norm_to_rgb(*blend)
    return {
        "mode": mode.name,
        "blend": blend,
        "blend_hex": conv.rgb_to_hex(*blend_rgb),
        "blend_rgb": blend_rgb,
        **summary,
        "per_pair_results": per_pair,
        "quality": classify_quality(summary["avg_error"]),
    }


def optimize_prepared(mode: BlendMode, prepared: Sequence[dict]) -> Optional[dict]:
    if not prepared:
        return None
    initial = compute_initial_guess(mode, prepared)
    blend, _ = nelder_mead(
        blend_objective(mode, prepared),
        initial,
        UNIT_BOUNDS,
        max_iterations=c.BLEND_MAX_ITERATIONS,
        tolerance=c.BLEND_TOLERANCE,
        step=c.BLEND_STEP,
    )
    return evaluate_blend(mode, prepared, blend)


def optimize_blend(mode, pairs: Iterable[dict]) -> Optional[dict]:
    """
    Find the solid blend color that best maps every source onto its target
    under `mode`. Returns None when no pair survives validation.
    """
    return optimize_prepared(_resolve_mode(mode), prepare_pairs(pairs))


def optimize_all_modes(pairs: Iterable[dict], modes: Optional[Iterable] = None) -> List[dict]:
    """Optimize every requested mode and rank the results by average error."""
    prepared = prepare_pairs(pairs)
    if not prepared:
        return []
    catalog = BLEND_MODES if modes is None else [_resolve_mode(m) for m in modes]
    results = [optimize_prepared(mode, prepared) for mode in catalog]
    results = [r for r in results if r is not None]
    results.sort(key=lambda r: r["avg_error"])
    return results
