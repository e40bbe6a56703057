"""Single-layer blend optimizer."""

import pytest

from blendfit.core.blend_modes import get_blend_mode, mode_names
from blendfit.core.pairs import prepare_pairs
from blendfit.logic.blend.engine import (
    blend_objective,
    compute_initial_guess,
    evaluate_blend,
    optimize_all_modes,
    optimize_blend,
)


def test_normal_mode_reaches_shared_target():
    pairs = [
        {"source": "FF0000", "target": "336699"},
        {"source": "00FF00", "target": "336699"},
        {"source": "101010", "target": "336699"},
    ]
    result = optimize_blend("Normal", pairs)
    assert result["mode"] == "Normal"
    assert result["blend_hex"] == "336699"
    assert result["avg_error"] == pytest.approx(0.0, abs=1e-9)
    assert result["quality"] == "exact"
    assert all(r["achieved"] == "336699" for r in result["per_pair_results"])


def test_multiply_finds_half_gray():
    pairs = [
        {"source": "FFFFFF", "target": "808080"},
        {"source": "808080", "target": "404040"},
    ]
    result = optimize_blend("multiply", pairs)
    assert result["mode"] == "Multiply"
    assert result["avg_error"] < 0.5
    r, g, b = result["blend_rgb"]
    assert abs(r - 128) <= 1 and abs(g - 128) <= 1 and abs(b - 128) <= 1


def test_no_valid_pairs_returns_none():
    assert optimize_blend("Normal", []) is None
    assert optimize_blend("Normal", [{"source": "zz", "target": "00FF00"}]) is None
    assert optimize_all_modes([]) == []


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        optimize_blend("Sparkle", [{"source": "FF0000", "target": "00FF00"}])


def test_initial_guess_is_weighted_mean_of_inverses():
    prepared = prepare_pairs([
        {"source": "000000", "target": "FFFFFF", "weight": 3},
        {"source": "000000", "target": "000000", "weight": 1},
    ])
    guess = compute_initial_guess(get_blend_mode("Normal"), prepared)
    assert guess == pytest.approx((0.75, 0.75, 0.75))


def test_initial_guess_falls_back_to_gray():
    prepared = prepare_pairs([{"source": "000000", "target": "808080"}])
    assert compute_initial_guess(get_blend_mode("Multiply"), prepared) == (0.5, 0.5, 0.5)


def test_evaluate_blend_clamps_and_reports():
    prepared = prepare_pairs([{"source": "000000", "target": "FFFFFF"}])
    result = evaluate_blend(get_blend_mode("Normal"), prepared, (1.2, 1.0, -0.1))
    assert result["blend"] == (1.0, 1.0, 0.0)
    assert result["blend_hex"] == "FFFF00"
    assert result["max_error"] > 0
    assert result["per_pair_results"][0]["achieved"] == "FFFF00"


def test_all_modes_ranked_by_error():
    pairs = [
        {"source": "C04020", "target": "602010"},
        {"source": "80A0E0", "target": "405070"},
    ]
    results = optimize_all_modes(pairs)
    assert sorted(r["mode"] for r in results) == sorted(mode_names())
    errors = [r["avg_error"] for r in results]
    assert errors == sorted(errors)
    assert results[0]["avg_error"] < 1.0


def test_restricting_modes():
    results = optimize_all_modes([{"source": "FF0000", "target": "800000"}], modes=["Screen", "Multiply"])
    assert [r["mode"] for r in results][0] == "Multiply"
    assert len(results) == 2


def test_initial_guess_skips_unreachable_pairs():
    # Multiply cannot lift 808080 to CCCCCC, so only the second pair seeds the guess
    prepared = prepare_pairs([
        {"source": "808080", "target": "CCCCCC"},
        {"source": "FFFFFF", "target": "404040"},
    ])
    guess = compute_initial_guess(get_blend_mode("Multiply"), prepared)
    assert guess == pytest.approx((64 / 255,) * 3)


def test_screen_black_to_white():
    result = optimize_blend("Screen", [{"source": "000000", "target": "FFFFFF"}])
    assert result["blend_hex"] == "FFFFFF"
    assert result["avg_error"] == pytest.approx(0.0, abs=1e-6)


def test_zero_weight_pair_is_reported_but_not_scored():
    pairs = [
        {"source": "000000", "target": "336699", "weight": 1},
        {"source": "000000", "target": "FF0000", "weight": 0},
    ]
    result = optimize_blend("Normal", pairs)
    assert len(result["per_pair_results"]) == 2
    assert result["blend_hex"] == "336699"
    assert result["total_error"] == pytest.approx(0.0, abs=1e-6)
    assert result["avg_error"] == pytest.approx(0.0, abs=1e-6)
    assert result["per_pair_results"][1]["error"] > 0
    assert result["max_error"] > 0

    objective = blend_objective(get_blend_mode("Normal"), prepare_pairs(pairs))
    assert objective(result["blend"]) == pytest.approx(0.0, abs=1e-6)
