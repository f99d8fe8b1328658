"""
Command-line configuration.

``parse_config`` turns argv into a ``Config`` and never exits the process:
help and version requests come back as ``Config.action`` and bad input raises
``ConfigurationError``.
"""

from __future__ import annotations

import argparse
from typing import NoReturn, Optional, Sequence

from pydantic import ValidationError

from . import __version__
from .errors import ConfigurationError
from .models import Action, Config, Mode
from .rules import DEFAULT_TAB_WIDTH

PROG = "tabify"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def _positive_int(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid tab width: {value!r}") from None
    if width <= 0:
        raise argparse.ArgumentTypeError(f"tab width must be positive, got {width}")
    return width


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog=PROG,
        add_help=False,
        description="Convert leading whitespace between tabs and spaces. "
                    "With no files, read stdin and write stdout; otherwise rewrite each file in place.",
    )
    p.add_argument("files", nargs="*", metavar="FILE",
                   help="Files to rewrite in place")
    p.add_argument("-t", "--tabify", dest="mode", action="store_const", const=Mode.TABIFY,
                   default=Mode.TABIFY, help="Convert leading spaces to tabs (default)")
    p.add_argument("-u", "--untabify", dest="mode", action="store_const", const=Mode.UNTABIFY,
                   help="Convert leading tabs to spaces")
    p.add_argument("-w", "--width", type=_positive_int, default=DEFAULT_TAB_WIDTH, metavar="WIDTH",
                   help=f"Tab width in spaces (default: {DEFAULT_TAB_WIDTH})")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log every file that is rewritten")
    p.add_argument("-h", "--help", action="store_true",
                   help="Print this help message and exit")
    p.add_argument("-V", "--version", action="store_true",
                   help="Display version information")
    return p


def parse_config(argv: Optional[Sequence[str]] = None) -> Config:
    ns = build_parser().parse_args(argv)

    if ns.help:
        action = Action.HELP
    elif ns.version:
        action = Action.VERSION
    else:
        action = Action.RUN

    try:
        return Config(action=action, mode=ns.mode, width=ns.width,
                      files=ns.files, verbose=ns.verbose)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def format_help() -> str:
    return build_parser().format_help()


def format_version() -> str:
    return f"{PROG} {__version__}\n"
