#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/command_registry.py

from . import (
    blend,
    hsl,
    levels,
    sequence,
    modes
)

SUBCOMMANDS = {
    'blend': blend,
    'hsl': hsl,
    'levels': levels,
    'sequence': sequence,
    'modes': modes
}
