#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/arguments.py

import argparse

from blendfit.core import config as c
from blendfit.shared.sanitizer import INPUT_HANDLERS


def add_pair_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every optimizer command."""
    parser.add_argument(
        "-p",
        "--pair",
        action="append",
        required=True,
        type=INPUT_HANDLERS["pair"],
        help=f"SOURCE:TARGET[:WEIGHT] hex pair, use -p multiple times (max: {c.MAX_PAIRS})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the result as JSON instead of color blocks",
    )
    parser.add_argument(
        "-V",
        "--verbose",
        action="store_true",
        help="show per-pair achieved colors and errors",
    )
