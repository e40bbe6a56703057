#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/pair_input.py

import argparse
import sys
from typing import List

from blendfit.core import config as c
from blendfit.core.pairs import prepare_pairs
from blendfit.shared.logger import log


def collect_pairs_or_exit(args: argparse.Namespace) -> List[dict]:
    """Return the parsed pairs, exiting with status 1 when none are usable."""
    pairs = list(getattr(args, "pair", None) or [])
    if len(pairs) > c.MAX_PAIRS:
        log("warning", f"only the first {c.MAX_PAIRS} pairs are used")
        pairs = pairs[:c.MAX_PAIRS]
    if not prepare_pairs(pairs):
        log("warning", "no valid source/target pairs: nothing to compute")
        log("info", "use -p SOURCE:TARGET (optionally :WEIGHT) one or more times")
        sys.exit(1)
    return pairs
