# tabify/cli.py
# ------------------------------------------------------------
# Command-line entry point
#   $ tabify -u -w 8 src/*.c
#   $ tabify < in.txt > out.txt
# ------------------------------------------------------------
from __future__ import annotations

import logging
import sys
import warnings
from typing import Optional, Sequence, TextIO

from .config import format_help, format_version, parse_config
from .convert import convert_stream
from .errors import ConfigurationError, TabifyError
from .models import Action, Config
from .rewrite import rewrite
from .rules import DECODE_ERRORS

_LOG = logging.getLogger(__name__)


def _line_feed_only(stream: TextIO) -> TextIO:
    # "\r" must pass through as an ordinary character on both ends
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(newline="\n", errors=DECODE_ERRORS)
    return stream


def run_stdio(cfg: Config, stdin: TextIO, stdout: TextIO) -> int:
    try:
        convert_stream(_line_feed_only(stdin), _line_feed_only(stdout), cfg.mode, cfg.width)
        stdout.flush()
    except OSError as exc:
        _LOG.error("%s", exc)
        return 1
    return 0


def run_files(cfg: Config) -> int:
    for name in cfg.files:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                result = rewrite(name, cfg.mode, cfg.width)
            except TabifyError as exc:
                _LOG.error("%s: %s", name, exc)
            else:
                _LOG.debug("%s: %d of %d lines changed (%s)", name, result.stats.changed_lines,
                           result.stats.lines, result.strategy.value)
        for w in caught:
            _LOG.warning("%s", w.message)

    # per-file failures are reported above, not through the exit code
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        cfg = parse_config(argv)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print("See tabify --help for usage info", file=sys.stderr)
        return 2

    if cfg.action is Action.HELP:
        sys.stdout.write(format_help())
        return 0
    if cfg.action is Action.VERSION:
        sys.stdout.write(format_version())
        return 0

    logging.basicConfig(
        level=logging.DEBUG if cfg.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if not cfg.files:
        return run_stdio(cfg, sys.stdin, sys.stdout)
    return run_files(cfg)
