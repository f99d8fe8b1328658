"""
In-place file rewriting.

The converted text goes to a temp file next to the source, which is then
renamed over it. Only when that rename fails is the temp copied byte for byte
into the source. That copy is the one step that can leave the source
truncated if it is interrupted; the temp file is kept whenever it fails.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import warnings
from pathlib import Path
from typing import Optional, Union

from .convert import check_width, convert_stream, detect_encoding
from .errors import CleanupWarning, NotAFileError, NotFoundError, RewriteIOError
from .models import ConversionStats, Mode, RewriteResult, RewriteStage, SwapStrategy
from .rules import DECODE_ERRORS, ENCODING_SAMPLE_SIZE, TEMP_SUFFIX

_LOG = logging.getLogger(__name__)


def sniff_file_encoding(path: Path) -> str:
    with open(path, "rb") as fh:
        sample = fh.read(ENCODING_SAMPLE_SIZE)
    if len(sample) == ENCODING_SAMPLE_SIZE:
        # never cut a multibyte character in half
        end = sample.rfind(b"\n")
        if end > 0:
            sample = sample[:end + 1]
    return detect_encoding(sample)


def _discard(tmp_path: Path) -> None:
    try:
        os.remove(tmp_path)
    except OSError as exc:
        _LOG.warning("could not remove temporary file %s: %s", tmp_path, exc)


def _write_temp(path: Path, mode: Mode, width: int, encoding: str) -> tuple[Path, ConversionStats]:
    """Write the converted content of ``path`` to a new sibling temp file."""
    try:
        fd, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX)
    except OSError as exc:
        raise RewriteIOError(path, exc, stage=RewriteStage.WRITING) from exc

    tmp_path = Path(name)
    try:
        # both handles are closed before any swap is attempted
        with os.fdopen(fd, "w", encoding=encoding, errors=DECODE_ERRORS, newline="\n") as dst, \
                open(path, "r", encoding=encoding, errors=DECODE_ERRORS, newline="\n") as src:
            stats = convert_stream(src, dst, mode, width)
            dst.flush()
            os.fsync(dst.fileno())
        shutil.copymode(path, tmp_path)
    except (OSError, UnicodeError) as exc:
        _discard(tmp_path)
        raise RewriteIOError(path, exc, stage=RewriteStage.WRITING) from exc
    except BaseException:
        _discard(tmp_path)
        raise

    return tmp_path, stats


def _copy_back(path: Path, tmp_path: Path) -> Optional[Path]:
    """
    Copy ``tmp_path`` over ``path`` and remove it.

    Returns the temp path if it could not be removed afterwards.
    """
    # until the destination is opened for writing the original is untouched
    try:
        src = open(tmp_path, "rb")
    except OSError as exc:
        raise RewriteIOError(path, exc, stage=RewriteStage.SWAPPING, temp_path=tmp_path) from exc

    with src:
        try:
            dst = open(path, "wb")
        except OSError as exc:
            raise RewriteIOError(path, exc, stage=RewriteStage.SWAPPING, temp_path=tmp_path) from exc

        try:
            with dst:
                shutil.copyfileobj(src, dst)
        except OSError as exc:
            raise RewriteIOError(
                path, exc, stage=RewriteStage.FALLBACK_COPYING, temp_path=tmp_path
            ) from exc

    try:
        os.remove(tmp_path)
    except OSError as exc:
        warnings.warn(
            CleanupWarning(f"{path}: rewritten, but temporary file {tmp_path} could not be removed: {exc}"),
            stacklevel=3,
        )
        return tmp_path

    return None


def rewrite(path: Union[str, os.PathLike], mode: Mode, width: int) -> RewriteResult:
    """
    Convert the leading whitespace of ``path`` in place.

    Raises NotFoundError / NotAFileError if ``path`` is not a regular file and
    RewriteIOError for any I/O failure. Every error raised before the
    fallback copy leaves the original untouched and removes the temp file.
    """
    check_width(width)
    mode = Mode(mode)
    path = Path(path)

    # --- Validating ---
    if not path.exists():
        raise NotFoundError(path)
    if not path.is_file():
        raise NotAFileError(path)
    # a symlink is followed, the file it points to is rewritten
    path = Path(os.path.realpath(path))

    try:
        encoding = sniff_file_encoding(path)
    except OSError as exc:
        raise RewriteIOError(path, exc, stage=RewriteStage.VALIDATING) from exc

    # --- Writing ---
    tmp_path, stats = _write_temp(path, mode, width, encoding)

    # --- Swapping ---
    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        _LOG.info("%s: rename failed (%s), copying content back instead", path, exc)
    else:
        _LOG.debug("%s: swapped in by rename (%d lines, %d changed)", path, stats.lines, stats.changed_lines)
        return RewriteResult(path=path, strategy=SwapStrategy.RENAME, encoding=encoding, stats=stats)

    # --- Fallback copying ---
    leftover = _copy_back(path, tmp_path)
    _LOG.debug("%s: copied back from %s (%d lines, %d changed)", path, tmp_path, stats.lines, stats.changed_lines)
    return RewriteResult(
        path=path,
        strategy=SwapStrategy.COPY,
        encoding=encoding,
        stats=stats,
        leftover_temp=leftover,
    )
