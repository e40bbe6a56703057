#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/subcommands/modes.py

import argparse
import sys

from blendfit.shared.logger import BlendfitArgumentParser
from blendfit.logic.modes.renderer import render_modes


def get_modes_parser() -> argparse.ArgumentParser:
    """Create argument parser for modes command."""
    parser = BlendfitArgumentParser(
        prog="blendfit modes",
        description="blendfit modes: list the supported blend modes and their equations",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the catalog as JSON",
    )
    return parser


def main() -> None:
    """Main entry point for modes command."""
    parser = get_modes_parser()
    args = parser.parse_args(sys.argv[1:])
    render_modes(as_json=args.json)


if __name__ == "__main__":
    main()
