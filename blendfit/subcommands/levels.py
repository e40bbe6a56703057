#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/levels.py

import argparse
import sys

from blendfit.shared.logger import BlendfitArgumentParser
from blendfit.shared.truecolor import ensure_truecolor
from blendfit.logic.adjust.resolver import resolve_adjust_input
from .arguments import add_pair_arguments


def get_levels_parser() -> argparse.ArgumentParser:
    """Create argument parser for levels command."""
    parser = BlendfitArgumentParser(
        prog="blendfit levels",
        description="blendfit levels: find the Levels adjustment that maps sources onto targets",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_pair_arguments(parser)
    return parser


def main() -> None:
    """Main entry point for levels command."""
    parser = get_levels_parser()
    args = parser.parse_args(sys.argv[1:])
    ensure_truecolor()
    resolve_adjust_input(args, "levels")


if __name__ == "__main__":
    main()
