#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/core/pairs.py

import math
from typing import Iterable, List, Mapping, Sequence, Tuple

from . import config as c
from .conversions import parse_hex, rgb_to_hex, rgb_to_lab, rgb_to_norm
from .difference import delta_e_ciede2000


def _coerce_weight(value) -> float:
    if value is None:
        return c.UNIT
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(weight) or weight < 0:
        return 0.0
    return weight


def prepare_pairs(pairs: Iterable[Mapping]) -> List[dict]:
    """
    Validate raw {source, target, weight} mappings into the numeric form the
    optimizers consume. Pairs with a missing or malformed color are dropped.
    When every surviving pair has zero weight, all pairs are weighted equally.
    """
    prepared = []
    for pair in pairs or ():
        if not isinstance(pair, Mapping):
            continue
        source_rgb = parse_hex(pair.get("source"))
        target_rgb = parse_hex(pair.get("target"))
        if source_rgb is None or target_rgb is None:
            continue
        prepared.append({
            "source": rgb_to_hex(*source_rgb),
            "target": rgb_to_hex(*target_rgb),
            "weight": _coerce_weight(pair.get("weight", c.UNIT)),
            "source_rgb": source_rgb,
            "target_rgb": target_rgb,
            "source_norm": rgb_to_norm(*source_rgb),
            "target_norm": rgb_to_norm(*target_rgb),
            "target_lab": rgb_to_lab(*target_rgb),
        })

    if prepared and all(p["weight"] == 0 for p in prepared):
        for p in prepared:
            p["weight"] = c.UNIT
    return prepared


def total_weight(prepared: Sequence[dict]) -> float:
    return sum(p["weight"] for p in prepared)


def color_error(rgb: Sequence[float], target_lab: Tuple[float, float, float]) -> float:
    """CIEDE2000 between an 8-bit color and a cached target Lab."""
    return delta_e_ciede2000(rgb_to_lab(*rgb), target_lab)


def summarize_errors(prepared: Sequence[dict], errors: Sequence[float]) -> dict:
    """Weighted total, weighted average and maximum of per-pair errors."""
    weight_sum = total_weight(prepared)
    total = sum(p["weight"] * e for p, e in zip(prepared, errors))
    return {
        "total_error": total,
        "avg_error": total / weight_sum if weight_sum > 0 else 0.0,
        "max_error": max(errors) if errors else 0.0,
    }


def classify_quality(avg_error: float) -> str:
    for name, bound in c.QUALITY_THRESHOLDS:
        if avg_error < bound:
            return name
    return c.QUALITY_FALLBACK


def quality_label(quality: str) -> str:
    return c.QUALITY_LABELS.get(quality, quality.title())
