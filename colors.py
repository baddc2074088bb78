#!/usr/bin/env python3

import os
import sys

import colorama

LOG_LEVEL = str.upper(os.environ.get("LOG") or "")
LOG_DEBUG = LOG_LEVEL == "DEBUG"
LOG_INFO = LOG_LEVEL in ("DEBUG", "INFO")


def hibold(text):
    return colorama.Style.BRIGHT + str(text) + colorama.Style.RESET_ALL


def hi_primary(text):
    return (
        colorama.Fore.MAGENTA + colorama.Style.BRIGHT + str(text) + colorama.Style.RESET_ALL
    )


def hi_secondary(text):
    return (
        colorama.Fore.RED + colorama.Style.BRIGHT + str(text) + colorama.Style.RESET_ALL
    )


def blank_cell():
    """A single highlighted space, used where a byte has no printable glyph."""
    return colorama.Back.RED + " " + colorama.Style.RESET_ALL


def log_debug(*args):
    if LOG_DEBUG:
        print(hi_secondary(" ".join(str(x) for x in args)), file=sys.stderr)


def log_info(*args):
    if LOG_INFO:
        print(hi_primary(" ".join(str(x) for x in args)), file=sys.stderr)
