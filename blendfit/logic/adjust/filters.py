#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/adjust/filters.py

from typing import List, Mapping, Sequence, Tuple

from blendfit.core import config as c
from blendfit.core import conversions as conv
from blendfit.shared.clamping import _clamp01, _clamp255, clamp

LEVELS_KEYS = ("input_black", "input_white", "gamma", "output_black", "output_white")


def _saturation_multiplier(sat_adj: float) -> float:
    if sat_adj < 0:
        return c.UNIT + sat_adj / c.PERCENT_TO_FACTOR
    if sat_adj >= c.PERCENT_TO_FACTOR:
        return c.HSL_FULL_SAT_MULTIPLIER
    return c.UNIT / (c.UNIT - sat_adj / c.PERCENT_TO_FACTOR)


def apply_hsl_adjustment(
    rgb: Sequence[float], hue_shift: float, sat_adj: float, light_adj: float
) -> Tuple[float, float, float]:
    """
    Apply a Hue/Saturation layer to an 8-bit color.

    Hue rotates in HSL space; saturation spreads the channels around their
    (max+min)/2 gray point; lightness fades linearly to black or white.
    """
    h, s, l = conv.rgb_to_hsl(*(float(round(v)) for v in rgb))
    h = (h + hue_shift) % c.HUE_MAX

    r, g, b = (float(round(v)) for v in conv.hsl_to_rgb(h, s, l))

    gray = (max(r, g, b) + min(r, g, b)) / c.DIV_2
    spread = _saturation_multiplier(sat_adj)
    r = gray + (r - gray) * spread
    g = gray + (g - gray) * spread
    b = gray + (b - gray) * spread

    light = light_adj / c.PERCENT_TO_FACTOR
    if light_adj < 0:
        factor = c.UNIT + light
        r, g, b = r * factor, g * factor, b * factor
    else:
        r = r + (c.RGB_MAX - r) * light
        g = g + (c.RGB_MAX - g) * light
        b = b + (c.RGB_MAX - b) * light

    return _clamp255(r), _clamp255(g), _clamp255(b)


def constrain_levels(params: Sequence[float]) -> List[float]:
    """Clamp Levels parameters, keeping input white at least two above input black."""
    in_black, in_white, gamma, out_black, out_white = params
    in_black = clamp(in_black, 0.0, c.LEVELS_INPUT_BLACK_MAX)
    in_white = clamp(in_white, in_black + c.LEVELS_MIN_INPUT_GAP, c.RGB_MAX)
    gamma = clamp(gamma, c.LEVELS_GAMMA_MIN, c.LEVELS_GAMMA_MAX)
    out_black = clamp(out_black, 0.0, c.RGB_MAX)
    out_white = clamp(out_white, 0.0, c.RGB_MAX)
    return [in_black, in_white, gamma, out_black, out_white]


def levels_to_dict(params: Sequence[float]) -> dict:
    return dict(zip(LEVELS_KEYS, params))


def levels_from_dict(params: Mapping[str, float]) -> List[float]:
    return [params[key] for key in LEVELS_KEYS]


def apply_levels_adjustment(rgb: Sequence[float], params) -> Tuple[float, float, float]:
    """
    Apply a Levels layer to an 8-bit color. `params` is either a dict keyed by
    LEVELS_KEYS or a 5-sequence in the same order. Gamma above 1 brightens
    midtones.
    """
    if isinstance(params, Mapping):
        params = levels_from_dict(params)
    in_black, in_white, gamma, out_black, out_white = constrain_levels(params)

    span = in_white - in_black
    out = []
    for v in rgb:
        x = _clamp01((v - in_black) / span)
        x = x ** (c.UNIT / gamma)
        out.append(_clamp255(out_black + x * (out_white - out_black)))
    return tuple(out)


# ==========================================
# Normalized parameter decoding (for sequence steps)
# ==========================================

def decode_hsl_params(params: Sequence[float]) -> Tuple[float, float, float]:
    """Map [0, 1] step params to (hue, saturation, lightness) adjustments."""
    p_h, p_s, p_l = (_clamp01(p) for p in params[:c.HSL_PARAM_COUNT])
    hue = p_h * (c.HSL_HUE_RANGE[1] - c.HSL_HUE_RANGE[0]) + c.HSL_HUE_RANGE[0]
    sat = p_s * (c.HSL_SAT_RANGE[1] - c.HSL_SAT_RANGE[0]) + c.HSL_SAT_RANGE[0]
    light = p_l * (c.HSL_LIGHT_RANGE[1] - c.HSL_LIGHT_RANGE[0]) + c.HSL_LIGHT_RANGE[0]
    return hue, sat, light


def decode_levels_params(params: Sequence[float]) -> List[float]:
    """Map [0, 1] step params to ordered Levels values."""
    p_ib, p_iw, p_g, p_ob, p_ow = (_clamp01(p) for p in params[:c.LEVELS_PARAM_COUNT])
    return constrain_levels([
        p_ib * c.RGB_MAX,
        p_iw * c.RGB_MAX,
        p_g * c.LEVELS_GAMMA_SPAN + c.LEVELS_GAMMA_MIN,
        p_ob * c.RGB_MAX,
        p_ow * c.RGB_MAX,
    ])
