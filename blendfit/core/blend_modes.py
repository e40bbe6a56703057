#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/core/blend_modes.py

import math
import re
from typing import Callable, NamedTuple, Optional, Sequence, Tuple

from . import config as c
from blendfit.shared.clamping import _clamp01


class BlendMode(NamedTuple):
    name: str
    forward: Callable[[float, float], float]
    inverse: Callable[[float, float], Optional[float]]
    equation: str


# ==========================================
# Forward channel functions (s = source, b = blend)
# ==========================================

def _normal(s: float, b: float) -> float:
    return b


def _multiply(s: float, b: float) -> float:
    return s * b


def _screen(s: float, b: float) -> float:
    return c.UNIT - (c.UNIT - s) * (c.UNIT - b)


def _subtract(s: float, b: float) -> float:
    return s - b


def _divide(s: float, b: float) -> float:
    if b == 0:
        return 0.0 if s == 0 else c.UNIT
    return s / b


def _difference(s: float, b: float) -> float:
    return abs(s - b)


def _overlay(s: float, b: float) -> float:
    if s < c.HALF:
        return c.DIV_2 * s * b
    return c.UNIT - c.DIV_2 * (c.UNIT - s) * (c.UNIT - b)


def _hard_light(s: float, b: float) -> float:
    if b < c.HALF:
        return c.DIV_2 * s * b
    return c.UNIT - c.DIV_2 * (c.UNIT - s) * (c.UNIT - b)


def _soft_light(s: float, b: float) -> float:
    # Pegtop formulation, continuous in b
    return (c.UNIT - c.DIV_2 * b) * s * s + c.DIV_2 * b * s


def _color_burn(s: float, b: float) -> float:
    if b == 0:
        return 0.0
    return c.UNIT - (c.UNIT - s) / b


def _linear_burn(s: float, b: float) -> float:
    return s + b - c.UNIT


def _color_dodge(s: float, b: float) -> float:
    if b == 1:
        return c.UNIT
    return s / (c.UNIT - b)


def _linear_dodge(s: float, b: float) -> float:
    return s + b


def _vivid_light(s: float, b: float) -> float:
    if b < c.HALF:
        if b <= 0:
            return 0.0
        return c.UNIT - (c.UNIT - s) / (c.DIV_2 * b)
    if b >= 1:
        return c.UNIT
    return s / (c.DIV_2 * (c.UNIT - b))


def _linear_light(s: float, b: float) -> float:
    return s + c.DIV_2 * b - c.UNIT


def _pin_light(s: float, b: float) -> float:
    if b < c.HALF:
        return min(s, c.DIV_2 * b)
    return max(s, c.DIV_2 * b - c.UNIT)


def _hard_mix(s: float, b: float) -> float:
    return 0.0 if _vivid_light(s, b) < c.HALF else c.UNIT


# ==========================================
# Inverse channel functions (s = source, t = target) -> blend or None
# ==========================================

def _finite(v: Optional[float]) -> bool:
    return v is not None and math.isfinite(v)


def _pick_branch(*branches: Tuple[Optional[float], bool]) -> Optional[float]:
    """
    Choose among (value, consistent) branch candidates, ordered low branch first.
    The first self-consistent branch wins; otherwise the low branch is used when
    it is finite, and None when it is not.
    """
    for value, consistent in branches:
        if _finite(value) and consistent:
            return value
    low = branches[0][0]
    return low if _finite(low) else None


def _inv_normal(s: float, t: float) -> Optional[float]:
    return t


def _inv_multiply(s: float, t: float) -> Optional[float]:
    if s == 0:
        return c.HALF if t == 0 else None
    return t / s


def _inv_screen(s: float, t: float) -> Optional[float]:
    if s == 1:
        return c.HALF if t == 1 else None
    return c.UNIT - (c.UNIT - t) / (c.UNIT - s)


def _inv_subtract(s: float, t: float) -> Optional[float]:
    return s - t


def _inv_divide(s: float, t: float) -> Optional[float]:
    # A black source stays black under every blend value
    if s == 0:
        return c.HALF if t == 0 else None
    if t == 0:
        return None
    return s / t


def _inv_difference(s: float, t: float) -> Optional[float]:
    # |s - b| = t has roots s - t and s + t; the darker one first
    if s >= t:
        return s - t
    return s + t


def _inv_overlay(s: float, t: float) -> Optional[float]:
    # Overlay branches on the source, which is known
    if s < c.HALF:
        if s == 0:
            return c.HALF if t == 0 else None
        return t / (c.DIV_2 * s)
    if s == 1:
        return c.HALF if t == 1 else None
    return c.UNIT - (c.UNIT - t) / (c.DIV_2 * (c.UNIT - s))


def _inv_hard_light(s: float, t: float) -> Optional[float]:
    low = None if s == 0 else t / (c.DIV_2 * s)
    high = None if s == 1 else c.UNIT - (c.UNIT - t) / (c.DIV_2 * (c.UNIT - s))
    return _pick_branch(
        (low, _finite(low) and low < c.HALF),
        (high, _finite(high) and high >= c.HALF),
    )


def _inv_soft_light(s: float, t: float) -> Optional[float]:
    if s == 0 or s == 1:
        return c.HALF if s == t else None
    return c.HALF * (c.UNIT - (s - t) / (s * (c.UNIT - s)))


def _inv_color_burn(s: float, t: float) -> Optional[float]:
    if s == 0:
        return c.HALF if t == 0 else None
    if s == 1:
        return c.HALF if t == 1 else None
    if t > s:
        return None
    if t == s:
        return c.UNIT
    if t == 1:
        return None
    return (c.UNIT - s) / (c.UNIT - t)


def _inv_linear_burn(s: float, t: float) -> Optional[float]:
    return t - s + c.UNIT


def _inv_color_dodge(s: float, t: float) -> Optional[float]:
    if s == 0:
        if t == 0:
            return c.HALF
        if t == 1:
            return c.UNIT
        return None
    if s == 1:
        return c.HALF if t == 1 else None
    if t == 0:
        return None
    if t == s:
        return 0.0
    if t < s:
        return None
    return c.UNIT - s / t


def _inv_linear_dodge(s: float, t: float) -> Optional[float]:
    return t - s


def _inv_vivid_light(s: float, t: float) -> Optional[float]:
    burn = None
    if t != 1:
        burn = (c.UNIT - s) / (c.DIV_2 * (c.UNIT - t))
    elif s == 1:
        burn = c.HARD_MIX_LOW_SEED

    dodge = None
    if t != 0:
        dodge = c.UNIT - s / (c.DIV_2 * t)
    elif s == 0:
        dodge = c.HARD_MIX_HIGH_SEED

    return _pick_branch(
        (burn, _finite(burn) and burn < c.HALF),
        (dodge, _finite(dodge) and dodge >= c.HALF),
    )


def _inv_linear_light(s: float, t: float) -> Optional[float]:
    return (t - s + c.UNIT) / c.DIV_2


def _inv_pin_light(s: float, t: float) -> Optional[float]:
    # When t == s any b inside the pass-through band works; aim for its middle
    low = None
    if t < s:
        low = t / c.DIV_2
    elif t == s:
        low = 0.499 if s == 1 else (s / c.DIV_2 + c.HALF) / c.DIV_2

    high = None
    if t > s:
        high = (t + c.UNIT) / c.DIV_2
    elif t == s:
        high = (c.HALF + (s + c.UNIT) / c.DIV_2) / c.DIV_2

    return _pick_branch(
        (low, _finite(low) and low < c.HALF),
        (high, _finite(high) and high >= c.HALF),
    )


def _inv_hard_mix(s: float, t: float) -> Optional[float]:
    if t == 0:
        return c.HARD_MIX_LOW_SEED
    if t == 1:
        return c.HARD_MIX_HIGH_SEED
    return None


# ==========================================
# Catalog
# ==========================================

BLEND_MODES: Tuple[BlendMode, ...] = (
    BlendMode("Normal", _normal, _inv_normal, "result = blend"),
    BlendMode("Multiply", _multiply, _inv_multiply, "result = source × blend"),
    BlendMode(
        "Screen", _screen, _inv_screen,
        "result = 1 − (1 − source) × (1 − blend)",
    ),
    BlendMode(
        "Subtract", _subtract, _inv_subtract,
        "result = source − blend (clamped to [0, 1])",
    ),
    BlendMode("Divide", _divide, _inv_divide, "result = source ÷ blend"),
    BlendMode("Difference", _difference, _inv_difference, "result = |source − blend|"),
    BlendMode(
        "Overlay", _overlay, _inv_overlay,
        "if source < 0.5: result = 2 × source × blend; "
        "else: result = 1 − 2 × (1 − source) × (1 − blend)",
    ),
    BlendMode(
        "Hard Light", _hard_light, _inv_hard_light,
        "if blend < 0.5: result = 2 × source × blend; "
        "else: result = 1 − 2 × (1 − source) × (1 − blend)",
    ),
    BlendMode(
        "Soft Light", _soft_light, _inv_soft_light,
        "result = (1 − 2 × blend) × source² + 2 × blend × source (Pegtop)",
    ),
    BlendMode(
        "Color Burn", _color_burn, _inv_color_burn,
        "if blend = 0: result = 0; else: result = 1 − (1 − source) ÷ blend",
    ),
    BlendMode(
        "Linear Burn", _linear_burn, _inv_linear_burn,
        "result = source + blend − 1 (clamped to [0, 1])",
    ),
    BlendMode(
        "Color Dodge", _color_dodge, _inv_color_dodge,
        "if blend = 1: result = 1; else: result = source ÷ (1 − blend)",
    ),
    BlendMode(
        "Linear Dodge (Add)", _linear_dodge, _inv_linear_dodge,
        "result = source + blend (clamped to [0, 1])",
    ),
    BlendMode(
        "Vivid Light", _vivid_light, _inv_vivid_light,
        "if blend < 0.5: result = 1 − (1 − source) ÷ (2 × blend); "
        "else: result = source ÷ (2 × (1 − blend))",
    ),
    BlendMode(
        "Linear Light", _linear_light, _inv_linear_light,
        "result = source + 2 × blend − 1 (clamped to [0, 1])",
    ),
    BlendMode(
        "Pin Light", _pin_light, _inv_pin_light,
        "if blend < 0.5: result = min(source, 2 × blend); "
        "else: result = max(source, 2 × blend − 1)",
    ),
    BlendMode(
        "Hard Mix", _hard_mix, _inv_hard_mix,
        "per channel: result = 0 if VividLight(source, blend) < 0.5; otherwise 1",
    ),
)


def _lookup_key(name: str) -> str:
    return "".join(re.findall(r"[a-z0-9]", str(name).lower()))


_MODES_BY_NAME = {m.name: m for m in BLEND_MODES}
_MODES_BY_KEY = {_lookup_key(m.name): m for m in BLEND_MODES}

# Extra spellings seen in image editors
_MODE_ALIASES = {
    "lineardodge": "Linear Dodge (Add)",
    "add": "Linear Dodge (Add)",
    "softlightpegtop": "Soft Light",
    "pegtop": "Soft Light",
}


def mode_names() -> Tuple[str, ...]:
    return tuple(m.name for m in BLEND_MODES)


def get_blend_mode(name: str) -> BlendMode:
    """
    Resolve a blend mode by name. Matching ignores case, spaces and
    punctuation, so 'linear-dodge', 'Linear Dodge (Add)' and 'lineardodgeadd'
    all resolve to the same entry. Raises ValueError for unknown names.
    """
    if isinstance(name, str) and name in _MODES_BY_NAME:
        return _MODES_BY_NAME[name]
    key = _lookup_key(name)
    mode = _MODES_BY_KEY.get(key)
    if mode is None and key in _MODE_ALIASES:
        mode = _MODES_BY_KEY[_lookup_key(_MODE_ALIASES[key])]
    if mode is None:
        raise ValueError(f"unknown blend mode: {name!r}")
    return mode


def apply_blend_channel(mode, s: float, b: float) -> float:
    """Forward-blend one channel; inputs and result are clamped to [0, 1]."""
    if not isinstance(mode, BlendMode):
        mode = get_blend_mode(mode)
    return _clamp01(mode.forward(_clamp01(s), _clamp01(b)))


def apply_blend(mode, rgb_norm: Sequence[float], blend_norm: Sequence[float]) -> Tuple[float, float, float]:
    """Forward-blend a normalized color with a normalized blend color."""
    if not isinstance(mode, BlendMode):
        mode = get_blend_mode(mode)
    return tuple(
        apply_blend_channel(mode, s, b) for s, b in zip(rgb_norm, blend_norm)
    )


def invert_channel(mode, s: float, t: float) -> Optional[float]:
    """
    Analytic blend value for one channel, or None when no blend value in
    [0, 1] produces t (e.g. Multiply cannot lighten past the source).
    """
    if not isinstance(mode, BlendMode):
        mode = get_blend_mode(mode)
    value = mode.inverse(s, t)
    if not _finite(value):
        return None
    if value < -c.INVERSE_EPS or value > c.UNIT + c.INVERSE_EPS:
        return None
    return _clamp01(value)
