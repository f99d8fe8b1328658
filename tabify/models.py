from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .rules import DEFAULT_TAB_WIDTH


class Mode(str, Enum):
    TABIFY = "tabify"
    UNTABIFY = "untabify"


class ParseState(Enum):
    LEADER = "leader"
    REMAINDER = "remainder"


class Action(str, Enum):
    RUN = "run"
    HELP = "help"
    VERSION = "version"


class RewriteStage(str, Enum):
    VALIDATING = "validating"
    WRITING = "writing"
    SWAPPING = "swapping"
    FALLBACK_COPYING = "fallback-copying"


class SwapStrategy(str, Enum):
    RENAME = "rename"
    COPY = "copy"


class Config(BaseModel):
    action: Action = Action.RUN
    mode: Mode = Mode.TABIFY
    width: int = Field(default=DEFAULT_TAB_WIDTH, gt=0)
    files: List[str] = Field(default_factory=list)
    verbose: bool = False


class ConversionStats(BaseModel):
    lines: int = 0
    changed_lines: int = 0


class RewriteResult(BaseModel):
    path: Path
    strategy: SwapStrategy
    encoding: str
    stats: ConversionStats
    leftover_temp: Optional[Path] = None


class ConvertedText(BaseModel):
    sha256: str
    encoding: str
    content_b64: str


class ConversionReport(BaseModel):
    mode: Mode
    width: int
    lines: int = 0
    changed_lines: int = 0


class ConvertResponse(BaseModel):
    converted: ConvertedText
    report: ConversionReport

class HealthResponse(BaseModel):
    ok: bool = True
