#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/candidates.py

import asyncio
import itertools
import random
from typing import List, Optional, Sequence, Tuple

from blendfit.core import config as c
from blendfit.core import conversions as conv
from blendfit.core.blend_modes import get_blend_mode
from blendfit.core.pairs import color_error, total_weight
from blendfit.core.simplex import nelder_mead
from blendfit.logic.blend.engine import optimize_prepared
from .steps import PSEUDO_MODES, apply_step, neutral_params, step_param_count


def generate_mode_sequences(
    num_steps: int, max_sequences: int, modes: Sequence[str], rng=None
) -> List[List[str]]:
    """
    Mode sequences of length `num_steps`: every mode for a single step, the full
    product when it fits in `max_sequences`, else a structured sample (uniform
    sequences, pairwise prefixes with random tails, then random fill).
    """
    rng = rng or random
    modes = list(modes)
    if num_steps < 1:
        raise ValueError("num_steps must be at least 1")
    if num_steps == 1:
        return [[m] for m in modes]
    if len(modes) ** num_steps <= max_sequences:
        return [list(seq) for seq in itertools.product(modes, repeat=num_steps)]

    sequences: List[List[str]] = []
    seen = set()

    def add(seq: List[str]) -> None:
        key = tuple(seq)
        if key not in seen and len(sequences) < max_sequences:
            seen.add(key)
            sequences.append(seq)

    for mode in modes:
        add([mode] * num_steps)

    for first, second in itertools.product(modes, repeat=2):
        if len(sequences) >= max_sequences:
            break
        seq = [first, second]
        while len(seq) < num_steps:
            seq.append(rng.choice(modes))
        add(seq)

    while len(sequences) < max_sequences:
        add([rng.choice(modes) for _ in range(num_steps)])

    return sequences


def _virtual_pairs(prepared: Sequence[dict], colors: Sequence[Sequence[float]]) -> List[dict]:
    """Treat the current achieved colors, rounded to 8-bit, as new sources."""
    virtual = []
    for pair, color in zip(prepared, colors):
        rgb = conv.norm_to_rgb(*color)
        virtual.append({
            **pair,
            "source": conv.rgb_to_hex(*rgb),
            "source_rgb": rgb,
            "source_norm": conv.rgb_to_norm(*rgb),
        })
    return virtual


def optimize_pseudo_step(mode_name: str, virtual: Sequence[dict]) -> Tuple[List[float], float]:
    """Fit one Hue/Saturation or Levels step in normalized space, starting neutral."""
    weight_sum = total_weight(virtual) or c.UNIT

    def objective(params: Sequence[float]) -> float:
        total = 0.0
        for pair in virtual:
            if pair["weight"] == 0:
                continue
            out = apply_step(mode_name, pair["source_norm"], params)
            total += pair["weight"] * color_error(conv.norm_to_rgb(*out), pair["target_lab"])
        return total

    count = step_param_count(mode_name)
    params, value = nelder_mead(
        objective,
        neutral_params(mode_name),
        ((0.0, 1.0),) * count,
        max_iterations=c.GREEDY_ADJUST_ITERATIONS,
    )
    return params, value / weight_sum


async def _best_step(
    mode_names: Sequence[str], virtual: Sequence[dict], token=None
) -> Tuple[Optional[str], Optional[List[float]], float]:
    best_mode, best_blend, best_error = None, None, float("inf")
    for mode_name in mode_names:
        if token is not None and token.cancelled:
            return None, None, float("inf")
        if mode_name in PSEUDO_MODES:
            blend, error = optimize_pseudo_step(mode_name, virtual)
        else:
            result = optimize_prepared(get_blend_mode(mode_name), virtual)
            if result is None:
                continue
            blend, error = list(result["blend"]), result["avg_error"]
        if error < best_error:
            best_mode, best_blend, best_error = mode_name, blend, error
        await asyncio.sleep(0)
    return best_mode, best_blend, best_error


async def greedy_search_sequences(
    prepared: Sequence[dict],
    num_steps: int,
    num_trials: int,
    max_opacity: float,
    modes: Sequence[str],
    rng=None,
    token=None,
) -> List[dict]:
    """
    Build sequences one step at a time, keeping the best mode at each position.
    Trial 0 walks the modes in order; later trials shuffle them, and the second
    half of the trials only looks at a truncated subset. Returns candidates
    {mode_sequence, initial_blends, greedy_error} sorted by greedy error,
    one per distinct mode sequence.
    Stops early once `token` is cancelled, ranking only the finished trials.
    """
    rng = rng or random
    if not prepared or num_steps < 1:
        return []

    modes = list(modes)
    subset_size = max(c.MIN_GREEDY_SUBSET, len(modes) // 2)
    candidates = []

    for trial in range(num_trials):
        if token is not None and token.cancelled:
            break
        colors = [pair["source_norm"] for pair in prepared]
        sequence, blends = [], []
        final_error = float("inf")

        for _ in range(num_steps):
            order = list(modes)
            if trial > 0:
                rng.shuffle(order)
            if trial > num_trials / 2:
                order = order[:subset_size]

            mode_name, blend, error = await _best_step(order, _virtual_pairs(prepared, colors), token)
            if mode_name is None:
                break
            sequence.append(mode_name)
            blends.append(blend)
            colors = [apply_step(mode_name, col, blend, max_opacity) for col in colors]
            final_error = error

        if len(sequence) == num_steps:
            candidates.append({
                "mode_sequence": sequence,
                "initial_blends": blends,
                "greedy_error": final_error,
            })

    candidates.sort(key=lambda cand: cand["greedy_error"])
    unique, seen = [], set()
    for cand in candidates:
        key = tuple(cand["mode_sequence"])
        if key not in seen:
            seen.add(key)
            unique.append(cand)
    return unique
