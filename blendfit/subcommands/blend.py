#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/blend.py

import argparse
import sys

from blendfit.shared.logger import BlendfitArgumentParser
from blendfit.shared.sanitizer import INPUT_HANDLERS
from blendfit.shared.truecolor import ensure_truecolor
from blendfit.logic.blend.resolver import resolve_blend_input
from .arguments import add_pair_arguments


def get_blend_parser() -> argparse.ArgumentParser:
    """Create argument parser for blend command."""
    parser = BlendfitArgumentParser(
        prog="blendfit blend",
        description="blendfit blend: find the solid blend color that maps sources onto targets",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_pair_arguments(parser)

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "-m",
        "--mode",
        type=INPUT_HANDLERS["mode"],
        default="Normal",
        help="blend mode name, see 'blendfit modes' (default: Normal)",
    )
    mode_group.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="optimize every blend mode and rank them",
    )
    return parser


def main() -> None:
    """Main entry point for blend command."""
    parser = get_blend_parser()
    args = parser.parse_args(sys.argv[1:])
    ensure_truecolor()
    resolve_blend_input(args)


if __name__ == "__main__":
    main()
