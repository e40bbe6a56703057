#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/hsl.py

import argparse
import sys

from blendfit.shared.logger import BlendfitArgumentParser
from blendfit.shared.truecolor import ensure_truecolor
from blendfit.logic.adjust.resolver import resolve_adjust_input
from .arguments import add_pair_arguments


def get_hsl_parser() -> argparse.ArgumentParser:
    """Create argument parser for hsl command."""
    parser = BlendfitArgumentParser(
        prog="blendfit hsl",
        description="blendfit hsl: find the Hue/Saturation adjustment that maps sources onto targets",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_pair_arguments(parser)
    return parser


def main() -> None:
    """Main entry point for hsl command."""
    parser = get_hsl_parser()
    args = parser.parse_args(sys.argv[1:])
    ensure_truecolor()
    resolve_adjust_input(args, "hsl")


if __name__ == "__main__":
    main()
