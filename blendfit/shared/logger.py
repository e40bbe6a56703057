#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/shared/logger.py

import os
import sys
import argparse

from blendfit.core import config as c

# Results go to stdout; diagnostics and search progress go to stderr
_STDOUT_LEVELS = ("info", "success")


def _use_color() -> bool:
    return not os.environ.get("NO_COLOR")


def log(level: str, message: str) -> None:
    level = str(level).lower()
    stream = sys.stdout if level in _STDOUT_LEVELS else sys.stderr
    if not _use_color():
        print(f"[{level}] {message}", file=stream)
        return
    tag_color = c.MSG_BOLD_COLORS.get(level, c.RESET)
    msg_color = c.MSG_COLORS.get(level, c.RESET)
    print(f"{tag_color}[{level}]{c.RESET} {msg_color}{message}{c.RESET}", file=stream, flush=level == "progress")


class BlendfitArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        """
        Report argument errors through the color logger, point at the
        command's help, and exit with the standard CLI error code 2.
        """
        log('error', message)
        log('info', f"see '{self.prog} -h' for usage")
        sys.exit(2)
