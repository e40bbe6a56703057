#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/blend/resolver.py

import argparse

from blendfit.shared.formatting import print_json
from blendfit.shared.pair_input import collect_pairs_or_exit
from .engine import optimize_all_modes, optimize_blend
from .renderer import render_blend_result, render_mode_ranking


def resolve_blend_input(args: argparse.Namespace) -> None:
    """Orchestrate pair validation, blend optimization and output."""
    pairs = collect_pairs_or_exit(args)

    if args.all:
        results = optimize_all_modes(pairs)
        if args.json:
            print_json(results)
            return
        render_mode_ranking(results)
        return

    result = optimize_blend(args.mode, pairs)
    if args.json:
        print_json(result)
        return
    render_blend_result(result, verbose=args.verbose)
