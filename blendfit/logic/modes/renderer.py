#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/modes/renderer.py

from blendfit.core import config as c
from blendfit.core.blend_modes import BLEND_MODES
from blendfit.shared.formatting import print_json


def render_modes(as_json: bool = False) -> None:
    """List the blend mode catalog with the equation of each mode."""
    if as_json:
        print_json([{"name": m.name, "equation": m.equation} for m in BLEND_MODES])
        return

    print()
    for i, mode in enumerate(BLEND_MODES, 1):
        print(f"{c.MSG_BOLD_COLORS['info']}{i:>2}. {mode.name:<20}{c.RESET}{mode.equation}")
    print()
    print(
        f"{c.MSG_COLORS['info']}sequence steps may also use '{c.HSL_MODE_NAME}' (--allow-hsl) "
        f"and '{c.LEVELS_MODE_NAME}' (--allow-levels){c.RESET}"
    )
    print()
