#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/sequence.py

import argparse
import sys

from blendfit.core import config as c
from blendfit.shared.logger import BlendfitArgumentParser
from blendfit.shared.sanitizer import INPUT_HANDLERS
from blendfit.shared.truecolor import ensure_truecolor
from blendfit.logic.sequence.resolver import resolve_sequence_input
from .arguments import add_pair_arguments


def get_sequence_parser() -> argparse.ArgumentParser:
    """Create argument parser for sequence command."""
    parser = BlendfitArgumentParser(
        prog="blendfit sequence",
        description="blendfit sequence: search stacks of blend layers that map sources onto targets",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_pair_arguments(parser)
    parser.add_argument(
        "-n",
        "--steps",
        type=INPUT_HANDLERS["steps"],
        default=2,
        help=f"number of layers in the sequence (default: 2, max: {c.MAX_STEPS})",
    )
    parser.add_argument(
        "--min-opacity",
        type=INPUT_HANDLERS["opacity"],
        default=c.DEFAULT_MIN_OPACITY,
        help=f"lowest layer opacity in percent (default: {c.DEFAULT_MIN_OPACITY:g})",
    )
    parser.add_argument(
        "--max-opacity",
        type=INPUT_HANDLERS["opacity"],
        default=c.DEFAULT_MAX_OPACITY,
        help=f"highest layer opacity in percent (default: {c.DEFAULT_MAX_OPACITY:g})",
    )
    parser.add_argument(
        "--allow-hsl",
        action="store_true",
        help=f"allow '{c.HSL_MODE_NAME}' adjustment steps",
    )
    parser.add_argument(
        "--allow-levels",
        action="store_true",
        help=f"allow '{c.LEVELS_MODE_NAME}' adjustment steps",
    )
    parser.add_argument(
        "-e",
        "--extensive",
        action="store_true",
        help="spend a much larger search budget",
    )
    parser.add_argument(
        "-b",
        "--budget-scale",
        type=INPUT_HANDLERS["budget_scale"],
        default=None,
        help="multiply every search budget by this factor (0.05 to 10)",
    )
    parser.add_argument(
        "-t",
        "--top",
        type=INPUT_HANDLERS["top"],
        default=3,
        help=f"number of solutions to show (default: 3, max: {c.MAX_TOP_SOLUTIONS})",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=INPUT_HANDLERS["seed"],
        default=None,
        help="seed for reproducibility of random",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="do not print search progress",
    )
    return parser


def main() -> None:
    """Main entry point for sequence command."""
    parser = get_sequence_parser()
    args = parser.parse_args(sys.argv[1:])
    ensure_truecolor()
    resolve_sequence_input(args)


if __name__ == "__main__":
    main()
