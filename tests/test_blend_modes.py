"""Blend catalog: forward ranges, analytic inverses and name lookup."""

import pytest

from blendfit.core import config as c
from blendfit.core.blend_modes import (
    BLEND_MODES,
    apply_blend,
    apply_blend_channel,
    get_blend_mode,
    invert_channel,
    mode_names,
)

GRID = [i / 10 for i in range(11)]

EXACT_INVERSE_MODES = [
    "Normal", "Multiply", "Screen", "Subtract", "Divide", "Difference",
    "Overlay", "Hard Light", "Soft Light", "Color Burn", "Linear Burn",
    "Color Dodge", "Linear Dodge (Add)", "Linear Light",
]


def test_catalog_order():
    assert mode_names() == (
        "Normal", "Multiply", "Screen", "Subtract", "Divide", "Difference",
        "Overlay", "Hard Light", "Soft Light", "Color Burn", "Linear Burn",
        "Color Dodge", "Linear Dodge (Add)", "Vivid Light", "Linear Light",
        "Pin Light", "Hard Mix",
    )


@pytest.mark.parametrize("mode", BLEND_MODES, ids=lambda m: m.name)
def test_forward_stays_in_unit_range(mode):
    for s in GRID:
        for b in GRID:
            assert 0.0 <= apply_blend_channel(mode, s, b) <= 1.0


@pytest.mark.parametrize("name", EXACT_INVERSE_MODES)
def test_inverse_reproduces_target(name):
    mode = get_blend_mode(name)
    for s in GRID:
        for t in GRID:
            b = invert_channel(mode, s, t)
            if b is None:
                continue
            assert 0.0 <= b <= 1.0
            assert apply_blend_channel(mode, s, b) == pytest.approx(t, abs=1e-6)


@pytest.mark.parametrize("mode", BLEND_MODES, ids=lambda m: m.name)
def test_inverse_never_leaves_unit_range(mode):
    for s in GRID:
        for t in GRID:
            b = invert_channel(mode, s, t)
            assert b is None or 0.0 <= b <= 1.0


def test_multiply_cannot_lighten_black():
    assert invert_channel("Multiply", 0.0, 0.5) is None
    assert invert_channel("Multiply", 0.0, 0.0) == 0.5


def test_multiply_cannot_lighten_past_source():
    assert invert_channel("Multiply", 0.5, 0.8) is None


def test_screen_cannot_darken_white():
    assert invert_channel("Screen", 1.0, 0.3) is None
    assert invert_channel("Screen", 0.5, 0.2) is None


def test_difference_uses_second_root():
    b = invert_channel("Difference", 0.2, 0.5)
    assert b == pytest.approx(0.7)
    assert apply_blend_channel("Difference", 0.2, b) == pytest.approx(0.5)


def test_divide_cannot_lift_black():
    assert invert_channel("Divide", 0.0, 0.4) is None
    assert invert_channel("Divide", 0.0, 0.0) == 0.5


def test_color_burn_and_dodge_directions():
    assert invert_channel("Color Burn", 0.4, 0.6) is None
    assert invert_channel("Color Burn", 0.4, 0.4) == 1.0
    assert invert_channel("Color Dodge", 0.6, 0.4) is None
    assert invert_channel("Color Dodge", 0.4, 0.4) == 0.0


def test_hard_mix_seeds():
    assert invert_channel("Hard Mix", 0.3, 0.0) == c.HARD_MIX_LOW_SEED
    assert invert_channel("Hard Mix", 0.3, 1.0) == c.HARD_MIX_HIGH_SEED
    assert invert_channel("Hard Mix", 0.3, 0.5) is None


def test_hard_light_prefers_consistent_branch():
    b = invert_channel("Hard Light", 0.2, 0.5)
    assert b >= 0.5
    assert apply_blend_channel("Hard Light", 0.2, b) == pytest.approx(0.5)


def test_pin_light_passthrough_seed():
    b = invert_channel("Pin Light", 0.3, 0.3)
    assert apply_blend_channel("Pin Light", 0.3, b) == pytest.approx(0.3)


@pytest.mark.parametrize("spelling", ["linear-dodge", "Linear Dodge (Add)", "lineardodgeadd", "ADD"])
def test_lookup_ignores_case_and_punctuation(spelling):
    assert get_blend_mode(spelling).name == "Linear Dodge (Add)"


def test_lookup_unknown_raises():
    with pytest.raises(ValueError):
        get_blend_mode("posterize")


def test_apply_blend_clamps_results():
    assert apply_blend("Linear Dodge (Add)", (0.8, 0.5, 0.1), (0.5, 0.2, 0.1)) == pytest.approx((1.0, 0.7, 0.2))
    assert apply_blend("Subtract", (0.2, 0.5, 0.9), (0.5, 0.5, 0.1)) == pytest.approx((0.0, 0.0, 0.8))


def test_catalog_names_skip_normalization(monkeypatch):
    from blendfit.core import blend_modes

    def fail(name):
        raise AssertionError(f"normalized lookup for {name!r}")

    monkeypatch.setattr(blend_modes, "_lookup_key", fail)
    for mode in BLEND_MODES:
        assert get_blend_mode(mode.name) is mode
