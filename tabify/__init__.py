"""
tabify: convert leading whitespace between tabs and spaces.

Works on stdin/stdout or rewrites files in place through a temp file in the
same directory, swapped over the original by rename.
"""

__version__ = "0.1.0"

from .convert import transform, tabify_line, untabify_line, convert_stream
from .models import Mode
from .rewrite import rewrite

__all__ = [
    "__version__",
    "Mode",
    "transform",
    "tabify_line",
    "untabify_line",
    "convert_stream",
    "rewrite",
]
