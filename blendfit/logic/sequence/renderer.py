#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/renderer.py

from typing import List

from blendfit.core import config as c
from blendfit.core.pairs import classify_quality
from blendfit.shared.formatting import format_error, format_params, format_quality
from blendfit.shared.logger import log
from blendfit.shared.preview import print_color_block, print_pair_row


def render_progress(event: dict) -> None:
    if event["phase"] == "optimizing" and event["total"]:
        log("progress", f"[{event['current']}/{event['total']}] {' -> '.join(event['current_sequence'] or [])}")
    else:
        log("progress", event["message"])


def _render_step(index: int, step: dict) -> None:
    opacity = format_params("opacity", step["opacity"])
    error = format_error(step.get("step_error", 0.0))
    title = f"{c.MSG_BOLD_COLORS['info']}step {index}{c.RESET} {step['mode_name']}"
    if "blend_hex" in step:
        print_color_block(step["blend_hex"], title, note=f"@ {opacity}  {error}")
        return
    if "hsl_values" in step:
        v = step["hsl_values"]
        params = format_params("hsl", (v["h"], v["s"], v["l"]))
    else:
        params = format_params("levels", step["levels_values"])
    print(f"{title}  {params}  @ {opacity}  {error}")


def render_sequence_result(rank: int, result: dict, verbose: bool = False) -> None:
    quality = classify_quality(result["avg_error"])
    print(
        f"{c.BOLD_WHITE}#{rank}{c.RESET} {' -> '.join(result['mode_sequence'])}  "
        f"{format_quality(quality)} avg {result['avg_error']:.2f}  max {result['max_error']:.2f}"
    )
    for i, step in enumerate(result["steps"], 1):
        _render_step(i, step)

    single_mode = result.get("single_best_mode")
    if single_mode:
        print(
            f"{c.MSG_COLORS['info']}vs best single blend ({single_mode}, "
            f"avg {result['single_best_error']:.2f}): {result['improvement']:.1f}% better{c.RESET}"
        )

    if verbose:
        for i, pr in enumerate(result["per_pair_results"], 1):
            chain = " -> ".join(pr["intermediates"])
            print(f"{c.MSG_COLORS['info']}pair {i}{c.RESET} ({format_error(pr['error'])}) {chain}")
            print_pair_row(pr["source"], pr["achieved"], pr["target"])


def render_top_solutions(results: List[dict], limit: int, verbose: bool = False) -> None:
    print()
    for rank, result in enumerate(results[:limit], 1):
        render_sequence_result(rank, result, verbose=verbose)
        print()
