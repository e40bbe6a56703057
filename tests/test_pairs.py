"""Pair validation, weighting and quality classification."""

import pytest

from blendfit.core.pairs import (
    classify_quality,
    prepare_pairs,
    quality_label,
    summarize_errors,
    total_weight,
)


def test_malformed_pairs_are_dropped():
    prepared = prepare_pairs([
        {"source": "#FF0000", "target": "00FF00"},
        {"source": "nothex", "target": "00FF00"},
        {"source": "FF0000"},
        "FF0000:00FF00",
        None,
    ])
    assert len(prepared) == 1
    assert prepared[0]["source"] == "FF0000"
    assert prepared[0]["target"] == "00FF00"
    assert prepared[0]["weight"] == 1.0


def test_prepared_pair_carries_numeric_forms():
    (pair,) = prepare_pairs([{"source": "ff8000", "target": "#000000", "weight": 2}])
    assert pair["source_rgb"] == (255, 128, 0)
    assert pair["source_norm"] == pytest.approx((1.0, 128 / 255, 0.0))
    assert pair["target_lab"] == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)
    assert pair["weight"] == 2.0


@pytest.mark.parametrize("weight", [-1, "heavy", float("nan")])
def test_bad_weights_become_zero(weight):
    prepared = prepare_pairs([
        {"source": "FF0000", "target": "00FF00", "weight": weight},
        {"source": "0000FF", "target": "00FF00", "weight": 3},
    ])
    assert [p["weight"] for p in prepared] == [0.0, 3.0]


def test_all_zero_weights_fall_back_to_uniform():
    prepared = prepare_pairs([
        {"source": "FF0000", "target": "00FF00", "weight": 0},
        {"source": "0000FF", "target": "00FF00", "weight": 0},
    ])
    assert [p["weight"] for p in prepared] == [1.0, 1.0]
    assert total_weight(prepared) == 2.0


def test_empty_input():
    assert prepare_pairs([]) == []
    assert prepare_pairs(None) == []


def test_summarize_errors_is_weighted():
    prepared = [{"weight": 1.0}, {"weight": 3.0}]
    summary = summarize_errors(prepared, [4.0, 0.0])
    assert summary["total_error"] == pytest.approx(4.0)
    assert summary["avg_error"] == pytest.approx(1.0)
    assert summary["max_error"] == pytest.approx(4.0)


@pytest.mark.parametrize("avg, expected", [
    (0.0, "exact"),
    (0.99, "exact"),
    (1.0, "good"),
    (2.99, "good"),
    (3.0, "approx"),
    (5.99, "approx"),
    (6.0, "poor"),
    (40.0, "poor"),
])
def test_quality_thresholds(avg, expected):
    assert classify_quality(avg) == expected


def test_quality_label():
    assert quality_label("approx") == "Approx"


def test_unhashable_colors_are_dropped():
    prepared = prepare_pairs([
        {"source": ["#FFFFFF"], "target": "000000"},
        {"source": "FFFFFF", "target": {"hex": "000000"}},
        {"source": "FFFFFF", "target": "000000"},
    ])
    assert len(prepared) == 1
    assert prepared[0]["source_rgb"] == (255, 255, 255)
