#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/adjust/renderer.py

from blendfit.core import config as c
from blendfit.logic.blend.renderer import render_per_pair
from blendfit.shared.formatting import format_params, format_quality


def render_adjust_result(result: dict, verbose: bool = False) -> None:
    """Print a Hue/Saturation or Levels result with its parameters."""
    print()
    if result["mode"] == c.HSL_MODE_NAME:
        params = format_params("hsl", (result["hue"], result["saturation"], result["lightness"]))
    else:
        params = format_params("levels", result["params"])

    print(f"{c.BOLD_WHITE}{result['mode']}{c.RESET}")
    print(f"{'parameters':<18}{c.BOLD_WHITE}:{c.RESET}   {params}")
    print(
        f"{'quality':<18}{c.BOLD_WHITE}:{c.RESET}   {format_quality(result['quality'])}  "
        f"avg {result['avg_error']:.2f}  max {result['max_error']:.2f}"
    )
    if verbose:
        render_per_pair(result["per_pair_results"])
    print()
