#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/adjust/resolver.py

import argparse

from blendfit.shared.formatting import print_json
from blendfit.shared.pair_input import collect_pairs_or_exit
from .engine import optimize_hsl, optimize_levels
from .renderer import render_adjust_result

OPTIMIZERS = {
    "hsl": optimize_hsl,
    "levels": optimize_levels,
}


def resolve_adjust_input(args: argparse.Namespace, kind: str) -> None:
    """Run the Hue/Saturation or Levels optimizer for the parsed pairs."""
    pairs = collect_pairs_or_exit(args)
    result = OPTIMIZERS[kind](pairs)

    if args.json:
        print_json(result)
        return
    render_adjust_result(result, verbose=args.verbose)
