"""Exceptions raised by configuration parsing and the file rewriter."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .models import RewriteStage


class TabifyError(Exception):
    pass


class ConfigurationError(TabifyError):
    """Bad command line or width. Raised before any file is touched."""


class RewriteError(TabifyError):
    """
    A single file could not be rewritten.

    ``stage`` tells how far the rewrite got. Only a failure while copying the
    temp file back over the original (``fallback-copying``) can leave the
    original truncated; in that case ``temp_path`` holds the new content.
    """

    def __init__(
        self,
        path: Path,
        message: str,
        *,
        stage: RewriteStage,
        temp_path: Optional[Path] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.stage = stage
        self.temp_path = temp_path

    @property
    def original_intact(self) -> bool:
        return self.stage is not RewriteStage.FALLBACK_COPYING


class NotFoundError(RewriteError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "file not found", stage=RewriteStage.VALIDATING)


class NotAFileError(RewriteError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, "path does not refer to a file", stage=RewriteStage.VALIDATING)


class RewriteIOError(RewriteError):
    def __init__(
        self,
        path: Path,
        cause: BaseException,
        *,
        stage: RewriteStage,
        temp_path: Optional[Path] = None,
    ) -> None:
        message = f"{stage.value} failed: {cause}"
        if temp_path is not None and stage is RewriteStage.FALLBACK_COPYING:
            message += f" (original may be incomplete; new content kept in {temp_path})"
        elif temp_path is not None:
            message += f" (original unchanged; new content kept in {temp_path})"
        super().__init__(path, message, stage=stage, temp_path=temp_path)


class CleanupWarning(UserWarning):
    """The file was rewritten but its temp file could not be removed."""
