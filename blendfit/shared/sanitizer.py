#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/sanitizer.py

import argparse
import re

from blendfit.core import config as c
from blendfit.core.blend_modes import get_blend_mode


def _sanitize_for_log(value) -> str:
    """
    Cleans up the input value for safe terminal logging by removing
    excessive whitespace and newlines.
    """
    if value is None:
        return ""
    return " ".join(str(value).split())


def normalize_hex(value: str) -> str:
    """
    Normalizes various formats of hex strings into a standard 6-character uppercase hex.
    Handles shorthand formats (e.g., 'F', 'FF', 'FFF') by repeating characters appropriately.
    """
    if value is None:
        return ""
    s = str(value).replace("#", "").replace(" ", "").upper()

    # Only valid hexadecimal characters survive
    extracted = "".join(re.findall(r"[0-9A-F]", s))

    if not extracted:
        return ""

    L = len(extracted)
    if L == 6:
        return extracted
    if L == 3:
        # e.g., 'ABC' becomes 'AABBCC'
        return "".join([ch * 2 for ch in extracted])
    if L == 1:
        return extracted * 6
    if L == 2:
        return extracted * 3
    if L == 4:
        return extracted + "00"
    if L == 5:
        return extracted + "0"

    return extracted[:6]


_STRICT_HEX = re.compile(r"^#?([0-9a-fA-F]{6})$")


def strict_hex(value) -> str:
    """Uppercase 'RRGGBB' when value is exactly '#rrggbb' or 'rrggbb', else ''."""
    if not isinstance(value, str):
        return ""
    m = _STRICT_HEX.match(value.strip())
    return m.group(1).upper() if m else ""


def _extract_signed_int(value: str) -> int:
    """
    Extracts an integer from a string while preserving its sign (+ or -).
    Ignores alphabetical characters mixed in the string.
    """
    if value is None:
        return None

    s = str(value)
    is_negative = s.strip().startswith("-")
    digits_only = "".join(re.findall(r"[0-9]", s))

    if not digits_only:
        return None

    try:
        val = int(digits_only)
        if is_negative:
            val = -val
        return val
    except ValueError:
        return None


def _extract_signed_float(value: str) -> float:
    """
    Extracts a floating-point number from a string, preserving the sign and
    keeping only the first decimal point encountered.
    """
    if value is None:
        return None

    s = str(value)
    is_negative = s.strip().startswith("-")

    raw_chars = re.findall(r"[0-9\.]", s)
    if not raw_chars:
        return None

    clean_str = ""
    dot_seen = False
    for char in raw_chars:
        if char == '.':
            if not dot_seen:
                clean_str += char
                dot_seen = True
        else:
            clean_str += char

    if not clean_str or clean_str == '.':
        return None

    try:
        val = float(clean_str)
        if is_negative:
            val = -val
        return val
    except ValueError:
        return None


# ==========================================
# CLI Argument Type Handlers (Validators)
# ==========================================

def handle_pair(v: str) -> dict:
    """
    Validator for source/target pairs written as SRC:TGT or SRC:TGT:WEIGHT.
    Colors must be full 6-digit hex; negative weights are clamped to zero.
    """
    raw = _sanitize_for_log(v)
    parts = [p.strip() for p in str(v).split(":")]
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"invalid pair: '{raw}' (expected SRC:TGT or SRC:TGT:WEIGHT)")

    source = strict_hex(parts[0])
    target = strict_hex(parts[1])
    if not source or not target:
        raise argparse.ArgumentTypeError(
            f"invalid pair colors: '{raw}' (expected 6-digit hex such as #FF8000)"
        )

    weight = 1.0
    if len(parts) == 3:
        weight = _extract_signed_float(parts[2])
        if weight is None:
            raise argparse.ArgumentTypeError(f"invalid pair weight: '{raw}'")
        weight = max(0.0, min(c.MAX_WEIGHT, weight))

    return {"source": source, "target": target, "weight": weight}


def handle_mode_name(v: str) -> str:
    """Validator resolving loose blend mode spellings to catalog names."""
    try:
        return get_blend_mode(v).name
    except ValueError:
        raw = _sanitize_for_log(v)
        raise argparse.ArgumentTypeError(
            f"unknown blend mode: '{raw}' (see 'blendfit modes')"
        )


def handle_int_range(min_v: int, max_v: int):
    """
    Factory function returning a validator that ensures an integer
    is clamped within a specific [min_v, max_v] range.
    """
    def validator(v: str) -> int:
        val = _extract_signed_int(v)

        if val is None:
            raw = _sanitize_for_log(v)
            raise argparse.ArgumentTypeError(f"invalid integer value: '{raw}'")

        if val < min_v:
            val = min_v
        elif val > max_v:
            val = max_v
        return val
    return validator


def handle_float_range(min_v: float, max_v: float):
    """
    Factory function returning a validator that ensures a float
    is clamped within a specific [min_v, max_v] range.
    """
    def validator(v: str) -> float:
        val = _extract_signed_float(v)

        if val is None:
            raw = _sanitize_for_log(v)
            raise argparse.ArgumentTypeError(f"invalid float value: '{raw}'")

        if val < min_v:
            val = min_v
        elif val > max_v:
            val = max_v
        return val
    return validator


# ==========================================
# Central Mapping for Argparse types
# ==========================================

INPUT_HANDLERS = {
    "pair": handle_pair,
    "mode": handle_mode_name,
    "steps": handle_int_range(1, c.MAX_STEPS),
    "opacity": handle_float_range(c.OPACITY_PERCENT_MIN, c.OPACITY_PERCENT_MAX),
    "seed": handle_int_range(0, 999_999_999_999_999_999),
    "budget_scale": handle_float_range(0.05, 10.0),
    "top": handle_int_range(1, c.MAX_TOP_SOLUTIONS),
}
