#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/preview.py

import re

from blendfit.core.conversions import hex_to_rgb
from blendfit.core import config as c

_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
TITLE_WIDTH = 18


def get_visible_len(s: str) -> int:
    return len(_ANSI_ESCAPE.sub('', s))


def swatch(hex_code: str, width: int = 16) -> str:
    r, g, b = hex_to_rgb(hex_code)
    return f"\033[48;2;{r};{g};{b}m{' ' * width}{c.RESET}"


def print_color_block(hex_code: str, title: str = "color", note: str = "", end: str = "\n") -> None:
    """One labelled swatch line: title, color block, hex and an optional note."""
    padding = " " * max(0, TITLE_WIDTH - get_visible_len(title))
    suffix = f"  {note}" if note else ""
    print(f"{title}{padding}{c.BOLD_WHITE}:{c.RESET}   {swatch(hex_code)}  {c.BOLD_WHITE}#{hex_code}{c.RESET}{suffix}", end=end)


def print_pair_row(source_hex: str, achieved_hex: str, target_hex: str) -> None:
    """Source, achieved and target swatches on one line."""
    cells = [f"{swatch(h, 8)} #{h}" for h in (source_hex, achieved_hex, target_hex)]
    print(f"   {'  ->  '.join(cells)}")
