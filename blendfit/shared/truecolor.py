#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/truecolor.py

import os
import sys


def ensure_truecolor() -> bool:
    """
    Advertise 24-bit color support for the swatches printed by the renderers.
    Leaves the environment alone when NO_COLOR is set or on Windows consoles,
    and returns whether truecolor output is enabled.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if sys.platform == "win32":
        return os.environ.get("COLORTERM") in ("truecolor", "24bit")
    if os.environ.get("COLORTERM") not in ("truecolor", "24bit"):
        os.environ["COLORTERM"] = "truecolor"
    return True
