#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/main.py

import argparse
import sys

from blendfit import __version__
from blendfit.subcommands.command_registry import SUBCOMMANDS
from blendfit.shared.logger import log, BlendfitArgumentParser
from blendfit.shared.truecolor import ensure_truecolor


def get_root_parser() -> argparse.ArgumentParser:
    """Create argument parser for the top-level blendfit command."""
    parser = BlendfitArgumentParser(
        prog="blendfit",
        description=(
            "blendfit: find blend layers that turn source colors into target colors\n\n"
            f"commands: {', '.join(SUBCOMMANDS)}"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
        add_help=False,
    )

    parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="show this help message and exit",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"blendfit {__version__}",
        help="show program version and exit",
    )
    parser.add_argument(
        "-hf",
        "--help-full",
        action="store_true",
        help="show full help message including subcommands",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help=argparse.SUPPRESS,
    )
    return parser


def handle_root_command(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Entry point when no subcommand was routed."""
    if args.help_full:
        parser.print_help()
        for name, module in SUBCOMMANDS.items():
            print("\n" * 2)
            try:
                getter = getattr(module, f"get_{name}_parser")
                getter().print_help()
            except AttributeError:
                log("info", f"help for '{name}' not available")
        sys.exit(0)

    if args.command:
        log("error", f"unrecognized command or argument: '{args.command}'")
        log("info", f"available commands: {', '.join(SUBCOMMANDS)}")
        sys.exit(2)

    parser.print_help()


def main() -> None:
    """Main entry point for blendfit CLI"""
    # Subcommand Routing
    if len(sys.argv) > 1:
        cmd = sys.argv[1].lower()
        if cmd in SUBCOMMANDS:
            sys.argv.pop(1)
            ensure_truecolor()
            SUBCOMMANDS[cmd].main()
            sys.exit(0)

    parser = get_root_parser()
    args = parser.parse_args()
    handle_root_command(args, parser)


if __name__ == "__main__":
    main()
