#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/steps.py

from typing import List, Sequence, Tuple

from blendfit.core import config as c
from blendfit.core import conversions as conv
from blendfit.core.blend_modes import BLEND_MODES, apply_blend, get_blend_mode
from blendfit.core.pairs import color_error, summarize_errors, total_weight
from blendfit.logic.adjust.filters import (
    apply_hsl_adjustment,
    apply_levels_adjustment,
    decode_hsl_params,
    decode_levels_params,
    levels_to_dict,
)
from blendfit.shared.clamping import _clamp01, clamp

PSEUDO_MODES = (c.HSL_MODE_NAME, c.LEVELS_MODE_NAME)


def step_param_count(mode_name: str) -> int:
    if mode_name == c.LEVELS_MODE_NAME:
        return c.LEVELS_PARAM_COUNT
    if mode_name == c.HSL_MODE_NAME:
        return c.HSL_PARAM_COUNT
    return c.BLEND_PARAM_COUNT


def neutral_params(mode_name: str) -> Tuple[float, ...]:
    """Parameters that sit in the middle of each step's space."""
    if mode_name == c.LEVELS_MODE_NAME:
        return c.LEVELS_NEUTRAL_PARAMS
    return (c.HALF,) * step_param_count(mode_name)


def available_modes(allow_hsl: bool = False, allow_levels: bool = False) -> List[str]:
    names = [m.name for m in BLEND_MODES]
    if allow_hsl:
        names.append(c.HSL_MODE_NAME)
    if allow_levels:
        names.append(c.LEVELS_MODE_NAME)
    return names


_BLEND_BY_NAME = {m.name: m for m in BLEND_MODES}


def _forward(mode_name: str, color: Sequence[float], params: Sequence[float]) -> Tuple[float, float, float]:
    if mode_name in PSEUDO_MODES:
        rgb = conv.norm_to_rgb(*color)
        if mode_name == c.HSL_MODE_NAME:
            out = apply_hsl_adjustment(rgb, *decode_hsl_params(params))
        else:
            out = apply_levels_adjustment(rgb, decode_levels_params(params))
        return conv.rgb_to_norm(*out)
    mode = _BLEND_BY_NAME.get(mode_name)
    if mode is None:
        mode = get_blend_mode(mode_name)
    return apply_blend(mode, color, params)


def apply_step(
    mode_name: str, color: Sequence[float], params: Sequence[float], opacity: float = c.UNIT
) -> Tuple[float, float, float]:
    """Composite one step over a normalized color at the given opacity."""
    opacity = _clamp01(opacity)
    blended = _forward(mode_name, color, params)
    return tuple(
        _clamp01(opacity * out + (c.UNIT - opacity) * cur)
        for out, cur in zip(blended, color)
    )


def apply_sequence(color: Sequence[float], steps: Sequence[dict]) -> Tuple[float, float, float]:
    current = tuple(color)
    for step in steps:
        current = apply_step(step["mode_name"], current, step["blend"], step["opacity"])
    return current


def sequence_total_error(prepared: Sequence[dict], steps: Sequence[dict]) -> float:
    """Weighted total CIEDE2000 of the sequence output, used as the search objective."""
    total = 0.0
    for pair in prepared:
        if pair["weight"] == 0:
            continue
        rgb = conv.norm_to_rgb(*apply_sequence(pair["source_norm"], steps))
        total += pair["weight"] * color_error(rgb, pair["target_lab"])
    return total


def _intermediate_label(color: Sequence[float], opacity: float) -> str:
    hex_code = conv.norm_to_hex(tuple(color))
    if opacity < c.UNIT:
        return f"{hex_code} @ {round(opacity * 100)}%"
    return hex_code


def compute_sequence_error(prepared: Sequence[dict], steps: Sequence[dict]) -> dict:
    """Per-pair results (with intermediate colors) and aggregate errors of a sequence."""
    per_pair = []
    errors = []
    for pair in prepared:
        current = pair["source_norm"]
        intermediates = []
        for step in steps:
            current = apply_step(step["mode_name"], current, step["blend"], step["opacity"])
            intermediates.append(_intermediate_label(current, step["opacity"]))
        rgb = conv.norm_to_rgb(*current)
        error = color_error(rgb, pair["target_lab"])
        errors.append(error)
        per_pair.append({
            "source": pair["source"],
            "target": pair["target"],
            "weight": pair["weight"],
            "achieved": conv.rgb_to_hex(*rgb),
            "achieved_rgb": rgb,
            "intermediates": intermediates,
            "error": error,
        })
    return {**summarize_errors(prepared, errors), "per_pair_results": per_pair}


def step_errors(prepared: Sequence[dict], steps: Sequence[dict]) -> List[float]:
    """Weighted average error after each step of the sequence."""
    weight_sum = total_weight(prepared)
    colors = [pair["source_norm"] for pair in prepared]
    out = []
    for step in steps:
        colors = [
            apply_step(step["mode_name"], col, step["blend"], step["opacity"])
            for col in colors
        ]
        total = sum(
            pair["weight"] * color_error(conv.norm_to_rgb(*col), pair["target_lab"])
            for pair, col in zip(prepared, colors)
        )
        out.append(total / weight_sum if weight_sum > 0 else 0.0)
    return out


# ==========================================
# Flattened parameter vectors
# ==========================================

def sequence_layout(
    mode_sequence: Sequence[str], min_opacity: float, max_opacity: float
) -> List[Tuple[float, float]]:
    """Per-dimension bounds of a flattened sequence: each step's params then its opacity."""
    bounds = []
    for mode_name in mode_sequence:
        bounds.extend([(0.0, 1.0)] * step_param_count(mode_name))
        bounds.append((min_opacity, max_opacity))
    return bounds


def flatten_steps(
    mode_sequence: Sequence[str], blends: Sequence[Sequence[float]], opacity: float
) -> List[float]:
    flat = []
    for mode_name, blend in zip(mode_sequence, blends):
        count = step_param_count(mode_name)
        flat.extend(list(blend)[:count])
        flat.append(opacity)
    return flat


def build_steps(
    mode_sequence: Sequence[str],
    flat: Sequence[float],
    min_opacity: float,
    max_opacity: float,
) -> List[dict]:
    """Unflatten a parameter vector into step dicts with display fields."""
    steps = []
    index = 0
    for mode_name in mode_sequence:
        count = step_param_count(mode_name)
        blend = tuple(_clamp01(v) for v in flat[index:index + count])
        opacity = clamp(flat[index + count], min_opacity, max_opacity)
        index += count + 1
        steps.append(describe_step(mode_name, blend, opacity))
    return steps


def describe_step(mode_name: str, blend: Sequence[float], opacity: float) -> dict:
    step = {"mode_name": mode_name, "blend": tuple(blend), "opacity": opacity}
    if mode_name == c.HSL_MODE_NAME:
        hue, sat, light = decode_hsl_params(blend)
        step["hsl_values"] = {"h": round(hue), "s": round(sat), "l": round(light)}
    elif mode_name == c.LEVELS_MODE_NAME:
        values = decode_levels_params(blend)
        values = [round(v) for v in values[:2]] + [round(values[2], 2)] + [round(v) for v in values[3:]]
        step["levels_values"] = levels_to_dict(values)
    else:
        step["blend_hex"] = conv.norm_to_hex(tuple(blend))
    return step


def step_signature(step: dict) -> str:
    """Identity of a step for de-duplicating solutions: mode plus rounded parameters."""
    if "hsl_values" in step:
        v = step["hsl_values"]
        return f"{step['mode_name']}:{v['h']},{v['s']},{v['l']}"
    if "levels_values" in step:
        v = step["levels_values"]
        return f"{step['mode_name']}:" + ",".join(str(v[k]) for k in sorted(v))
    return f"{step['mode_name']}:{step.get('blend_hex', '')}"
