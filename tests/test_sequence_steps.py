"""Sequence steps, candidate generation and joint refinement."""

import asyncio
import math
import random

import pytest

from blendfit.core.pairs import prepare_pairs
from blendfit.core.simplex import nelder_mead
from blendfit.logic.sequence.candidates import generate_mode_sequences, greedy_search_sequences
from blendfit.logic.sequence.engine import CancelToken
from blendfit.logic.sequence.joint import joint_optimize_sequence, perturb, refine_with_hops
from blendfit.logic.sequence.steps import (
    apply_step,
    available_modes,
    build_steps,
    compute_sequence_error,
    describe_step,
    sequence_layout,
    step_signature,
)

PAIRS = [
    {"source": "C04020", "target": "602010"},
    {"source": "80A0E0", "target": "405070"},
]


def test_available_modes():
    assert len(available_modes()) == 17
    assert available_modes(allow_hsl=True)[-1] == "Hue/Saturation"
    assert available_modes(allow_hsl=True, allow_levels=True)[-2:] == ["Hue/Saturation", "Levels"]


def test_zero_opacity_leaves_color_unchanged():
    color = (0.2, 0.4, 0.6)
    assert apply_step("Multiply", color, (0.0, 0.0, 0.0), 0.0) == pytest.approx(color)


def test_partial_opacity_interpolates():
    out = apply_step("Normal", (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), 0.25)
    assert out == pytest.approx((0.25, 0.25, 0.25))


def test_neutral_pseudo_steps_are_near_identity():
    color = (200 / 255, 100 / 255, 50 / 255)
    assert apply_step("Hue/Saturation", color, (0.5, 0.5, 0.5)) == pytest.approx(color, abs=1 / 255)
    levels_neutral = (0.0, 1.0, (1.0 - 0.1) / 9.89, 0.0, 1.0)
    assert apply_step("Levels", color, levels_neutral) == pytest.approx(color, abs=1 / 255)


def test_layout_dimensions():
    bounds = sequence_layout(["Normal", "Levels", "Hue/Saturation"], 0.1, 1.0)
    assert len(bounds) == 4 + 6 + 4
    assert bounds[3] == (0.1, 1.0)
    assert bounds[9] == (0.1, 1.0)


def test_build_steps_clamps_and_describes():
    flat = [1.2, 0.5, -0.1, 2.0, 0.5, 0.5, 0.5, 0.05]
    steps = build_steps(["Screen", "Hue/Saturation"], flat, 0.1, 1.0)
    assert steps[0]["blend"] == (1.0, 0.5, 0.0)
    assert steps[0]["opacity"] == 1.0
    assert steps[0]["blend_hex"] == "FF8000"
    assert steps[1]["opacity"] == 0.1
    assert steps[1]["hsl_values"] == {"h": 0, "s": 0, "l": 0}


def test_step_signature_distinguishes_modes():
    a = describe_step("Multiply", (0.5, 0.5, 0.5), 1.0)
    b = describe_step("Screen", (0.5, 0.5, 0.5), 1.0)
    assert step_signature(a) != step_signature(b)
    assert step_signature(a) == step_signature(describe_step("Multiply", (0.5, 0.5, 0.5), 0.3))


def test_sequence_error_reports_intermediates():
    prepared = prepare_pairs(PAIRS)
    steps = [
        describe_step("Multiply", (0.5, 0.5, 0.5), 1.0),
        describe_step("Normal", (0.0, 0.0, 0.0), 0.5),
    ]
    result = compute_sequence_error(prepared, steps)
    first = result["per_pair_results"][0]
    assert len(first["intermediates"]) == 2
    assert first["intermediates"][1].endswith("@ 50%")
    assert result["avg_error"] > 0


def test_generate_single_step_lists_every_mode():
    modes = available_modes()
    assert generate_mode_sequences(1, 3, modes) == [[m] for m in modes]


def test_generate_full_product_when_small():
    sequences = generate_mode_sequences(2, 100, ["Normal", "Multiply", "Screen"])
    assert len(sequences) == 9
    assert len({tuple(s) for s in sequences}) == 9


def test_generate_sample_is_capped_and_unique():
    modes = available_modes()
    sequences = generate_mode_sequences(3, 50, modes, random.Random(3))
    assert len(sequences) == 50
    assert len({tuple(s) for s in sequences}) == 50
    assert sequences[0] == ["Normal"] * 3
    assert all(len(s) == 3 for s in sequences)


def test_generate_rejects_zero_steps():
    with pytest.raises(ValueError):
        generate_mode_sequences(0, 10, ["Normal"])


def test_greedy_candidates_are_sorted_and_distinct():
    prepared = prepare_pairs(PAIRS)
    candidates = asyncio.run(greedy_search_sequences(
        prepared, 2, 3, 1.0, ["Normal", "Multiply", "Screen", "Difference", "Hue/Saturation"], random.Random(1)
    ))
    assert candidates
    errors = [cand["greedy_error"] for cand in candidates]
    assert errors == sorted(errors)
    keys = [tuple(cand["mode_sequence"]) for cand in candidates]
    assert len(keys) == len(set(keys))
    for cand in candidates:
        assert len(cand["mode_sequence"]) == 2
        assert len(cand["initial_blends"]) == 2


def test_basin_hops_never_worsen():
    def objective(p):
        return sum(math.sin(12 * v) + (v - 0.6) ** 2 for v in p)

    bounds = [(0.0, 1.0)] * 2
    _, base = nelder_mead(objective, [0.1, 0.1], bounds, 400, 1e-8, 0.25)
    _, hopped = refine_with_hops(objective, [0.1, 0.1], bounds, 4, random.Random(7))
    assert hopped <= base


def test_perturb_stays_in_bounds():
    rng = random.Random(0)
    bounds = [(0.0, 1.0), (0.1, 0.2)]
    for _ in range(50):
        point = perturb([0.95, 0.15], 0.5, bounds, rng)
        assert 0.0 <= point[0] <= 1.0
        assert 0.1 <= point[1] <= 0.2


def test_joint_optimize_respects_opacity_bounds():
    prepared = prepare_pairs(PAIRS)
    result = joint_optimize_sequence(
        prepared, ["Multiply", "Screen"], num_restarts=2, basin_hops=1,
        min_opacity=0.3, max_opacity=0.8, rng=random.Random(2),
    )
    assert result["mode_sequence"] == ["Multiply", "Screen"]
    assert len(result["steps"]) == 2
    for step in result["steps"]:
        assert 0.3 <= step["opacity"] <= 0.8
        assert "step_error" in step
        assert all(0.0 <= v <= 1.0 for v in step["blend"])


def test_joint_optimize_from_exact_guess():
    prepared = prepare_pairs(PAIRS)
    result = joint_optimize_sequence(
        prepared, ["Multiply"], initial_blends=[(0.5, 0.5, 0.5)],
        num_restarts=1, basin_hops=0, min_opacity=0.1, max_opacity=1.0,
    )
    assert result["avg_error"] < 1.0


def test_joint_optimize_without_pairs():
    assert joint_optimize_sequence([], ["Normal"]) is None


def test_steps_resolve_modes_without_lookup(monkeypatch):
    from blendfit.logic.sequence import steps

    def fail(name):
        raise AssertionError(f"lookup for {name!r}")

    monkeypatch.setattr(steps, "get_blend_mode", fail)
    out = apply_step("Multiply", (0.5, 0.5, 0.5), (0.5, 0.5, 0.5))
    assert out == pytest.approx((0.25, 0.25, 0.25))


def test_greedy_search_honors_cancelled_token():
    token = CancelToken()
    token.cancel()
    candidates = asyncio.run(greedy_search_sequences(
        prepare_pairs(PAIRS), 2, 3, 1.0, ["Normal", "Multiply"], random.Random(1), token
    ))
    assert candidates == []
