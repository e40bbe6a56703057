#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/resolver.py

import argparse
import asyncio
import random
import signal
import sys

from blendfit.shared.formatting import print_json
from blendfit.shared.logger import log
from blendfit.shared.pair_input import collect_pairs_or_exit
from .engine import CancelToken, scale_budget, start_multi_step_search
from .renderer import render_progress, render_top_solutions


async def _run_search(pairs, args: argparse.Namespace, token: CancelToken):
    loop = asyncio.get_running_loop()
    if sys.platform != "win32":
        loop.add_signal_handler(signal.SIGINT, token.cancel)

    budget = None
    if args.budget_scale is not None:
        budget = scale_budget(args.budget_scale, extensive=args.extensive)

    try:
        return await start_multi_step_search(
            pairs,
            args.steps,
            on_progress=None if args.quiet else render_progress,
            token=token,
            min_opacity=args.min_opacity,
            max_opacity=args.max_opacity,
            allow_hsl=args.allow_hsl,
            allow_levels=args.allow_levels,
            extensive=args.extensive,
            budget=budget,
        )
    finally:
        if sys.platform != "win32":
            loop.remove_signal_handler(signal.SIGINT)


def resolve_sequence_input(args: argparse.Namespace) -> None:
    """Run the multi-step search and print the ranked solutions."""
    if args.seed is not None:
        random.seed(args.seed)

    pairs = collect_pairs_or_exit(args)
    token = CancelToken()
    results = asyncio.run(_run_search(pairs, args, token))

    if token.cancelled:
        log("warning", "search interrupted: showing the best solutions found so far")

    if isinstance(results, dict):
        results = [results]
    if not results:
        log("warning", "no sequence could be optimized")
        sys.exit(1)

    if args.json:
        print_json(results[:args.top])
        return
    render_top_solutions(results, args.top, verbose=args.verbose)
