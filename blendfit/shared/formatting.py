#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/formatting.py

import json

from blendfit.core import config as c
from blendfit.core.pairs import quality_label


def format_params(kind: str, values) -> str:
    if kind == 'hsl':
        h, s, l = values
        return f"hue {h:+.1f}deg, saturation {s:+.1f}, lightness {l:+.1f}"
    elif kind == 'levels':
        return (
            f"input {values['input_black']:.0f}-{values['input_white']:.0f}, "
            f"gamma {values['gamma']:.2f}, "
            f"output {values['output_black']:.0f}-{values['output_white']:.0f}"
        )
    elif kind == 'opacity':
        return f"{values * 100:.0f}%"

    return ""


def format_quality(quality: str) -> str:
    color = c.QUALITY_COLORS.get(quality, c.BOLD_WHITE)
    return f"{color}{quality_label(quality)}{c.RESET}"


def format_error(value: float) -> str:
    return f"ΔE {value:.2f}"


def print_json(data, pretty: bool = True) -> None:
    print(json.dumps(data, indent=4 if pretty else None, ensure_ascii=False))
