"""
Deterministic conversion rules.

Everything the transform and the rewriter treat as a fixed policy lives here.
"""

DEFAULT_TAB_WIDTH = 4
OUTPUT_NEWLINE = "\n"  # always LF, whatever the input used

DEFAULT_ENCODING = "utf-8"
UTF8_BOM = b"\xef\xbb\xbf"
ENCODING_SAMPLE_SIZE = 64 * 1024
# undecodable bytes survive the round trip untouched
DECODE_ERRORS = "surrogateescape"

TEMP_SUFFIX = ".tabify.tmp"
