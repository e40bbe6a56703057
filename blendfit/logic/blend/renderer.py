#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/blend/renderer.py

from typing import List

from blendfit.core import config as c
from blendfit.shared.formatting import format_error, format_quality
from blendfit.shared.preview import print_color_block, print_pair_row


def render_per_pair(per_pair_results: List[dict]) -> None:
    """Print each pair as source -> achieved -> target with its error."""
    print()
    for i, pr in enumerate(per_pair_results, 1):
        weight = f", w {pr['weight']:g}" if pr["weight"] != 1 else ""
        print(f"{c.MSG_COLORS['info']}pair {i}{c.RESET} ({format_error(pr['error'])}{weight})")
        print_pair_row(pr["source"], pr["achieved"], pr["target"])


def render_blend_result(result: dict, verbose: bool = False) -> None:
    """Print a single-mode result: blend swatch, errors and per-pair rows."""
    print()
    print_color_block(result["blend_hex"], f"{c.BOLD_WHITE}{result['mode']}{c.RESET}")
    print(
        f"{'quality':<18}{c.BOLD_WHITE}:{c.RESET}   {format_quality(result['quality'])}  "
        f"avg {result['avg_error']:.2f}  max {result['max_error']:.2f}"
    )
    if verbose:
        render_per_pair(result["per_pair_results"])
    print()


def render_mode_ranking(results: List[dict]) -> None:
    """Print every mode's blend color ranked by average error."""
    print()
    for rank, result in enumerate(results, 1):
        label = f"{c.MSG_BOLD_COLORS['info']}{rank:>2}.{c.RESET} {result['mode']}"
        note = f"{format_quality(result['quality'])} avg {result['avg_error']:.2f}"
        print_color_block(result["blend_hex"], label, note=note)
    print()
