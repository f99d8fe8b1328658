"""
Leading-whitespace conversion.

Responsibilities:
- per-line tabify / untabify state machine
- streaming a text reader into a writer line by line
- encoding detection + byte-level conversion for the HTTP service
"""

from __future__ import annotations

import base64
import hashlib
import io
from typing import Any, Dict, TextIO

from charset_normalizer import from_bytes

from .errors import ConfigurationError
from .models import ConversionStats, Mode, ParseState
from .rules import DECODE_ERRORS, DEFAULT_ENCODING, OUTPUT_NEWLINE, UTF8_BOM


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def check_width(width: int) -> int:
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ConfigurationError(f"tab width must be a positive integer, got {width!r}")
    return width


def tabify_line(line: str, width: int) -> str:
    """
    Collapse every ``width`` leading spaces into one tab.

    Spaces left over when the leading run ends are kept as spaces, and nothing
    after the first non-space character is touched.
    """
    out: list[str] = []
    spaces = 0
    state = ParseState.LEADER

    for ch in line:
        if state is ParseState.REMAINDER:
            out.append(ch)
        elif ch == " ":
            spaces += 1
            if spaces == width:
                spaces = 0
                out.append("\t")
        else:
            # end of leading spaces
            out.append(" " * spaces)
            out.append(ch)
            state = ParseState.REMAINDER

    if state is ParseState.LEADER:
        # whitespace-only line
        out.append(" " * spaces)

    return "".join(out)


def untabify_line(line: str, width: int) -> str:
    """Expand each leading tab into ``width`` spaces."""
    out: list[str] = []
    state = ParseState.LEADER

    for ch in line:
        if state is ParseState.LEADER and ch == "\t":
            out.append(" " * width)
            continue
        state = ParseState.REMAINDER
        out.append(ch)

    return "".join(out)


def transform(line: str, width: int, mode: Mode) -> str:
    if Mode(mode) is Mode.UNTABIFY:
        return untabify_line(line, width)
    return tabify_line(line, width)


def convert_stream(reader: TextIO, writer: TextIO, mode: Mode, width: int) -> ConversionStats:
    """
    Transform every line of ``reader`` into ``writer``.

    Only ``"\\n"`` ends a line. Each output line is followed by exactly one
    ``"\\n"``, including a last line that had none.
    """
    check_width(width)
    stats = ConversionStats()

    for raw_line in reader:
        line = raw_line[:-1] if raw_line.endswith("\n") else raw_line
        new_line = transform(line, width, mode)
        writer.write(new_line)
        writer.write(OUTPUT_NEWLINE)

        stats.lines += 1
        if new_line != line:
            stats.changed_lines += 1

    return stats


def detect_encoding(raw: bytes) -> str:
    """
    Best-effort encoding guess via charset-normalizer.

    UTF-8 input that starts with a BOM is read as utf-8-sig so the BOM is
    written back exactly once.
    """
    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else DEFAULT_ENCODING

    if raw.startswith(UTF8_BOM) and encoding.lower().replace("-", "_") in ("utf_8", "utf8"):
        encoding = "utf-8-sig"

    return encoding


def convert_bytes(raw: bytes, mode: Mode, width: int) -> Dict[str, Any]:
    """
    Convert an uploaded document.
    Returns a dict matching the API's response envelope.
    """
    encoding = detect_encoding(raw)
    text = raw.decode(encoding, errors=DECODE_ERRORS)

    inp = io.StringIO(text, newline="\n")
    outp = io.StringIO(newline="\n")
    stats = convert_stream(inp, outp, mode, width)

    converted = outp.getvalue().encode(encoding, errors=DECODE_ERRORS)

    return {
        "converted": {
            "sha256": _sha256_hex(converted),
            "encoding": encoding,
            "content_b64": base64.b64encode(converted).decode("ascii"),
        },
        "report": {
            "mode": mode,
            "width": width,
            "lines": stats.lines,
            "changed_lines": stats.changed_lines,
        },
    }
