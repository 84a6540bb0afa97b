"""The one-line-per-file manifest format: ``<path> <signed decimal checksum>``.

Paths are not escaped. A line is split on its last space, so paths may hold
spaces but never a newline.
"""

from __future__ import annotations

import re

from crcdiff.errors import MalformedLineError
from crcdiff.models import ChecksumEntry

MANIFEST_ENCODING = "utf-8"
MANIFEST_ERRORS = "surrogateescape"

SEPARATOR = " "
REASON_NO_SEPARATOR = "missing separator"
REASON_BAD_CHECKSUM = "invalid checksum"

_CHECKSUM_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def format_manifest_line(entry: ChecksumEntry) -> str:
    if "\n" in entry.path or "\r" in entry.path:
        raise ValueError(f"Manifest paths cannot contain line breaks: {entry.path!r}")
    return f"{entry.path}{SEPARATOR}{entry.checksum}\n"


def parse_manifest_line(line: str) -> ChecksumEntry:
    """Parse one line (without its newline).

    Raises ``MalformedLineError`` when the separator is missing or the suffix
    is not a signed 32-bit decimal integer.
    """

    path, separator, suffix = line.rpartition(SEPARATOR)
    if not separator:
        raise MalformedLineError(line, REASON_NO_SEPARATOR)
    if not _CHECKSUM_RE.fullmatch(suffix):
        raise MalformedLineError(line, REASON_BAD_CHECKSUM)
    checksum = int(suffix)
    if not _INT32_MIN <= checksum <= _INT32_MAX:
        raise MalformedLineError(line, REASON_BAD_CHECKSUM)
    return ChecksumEntry(path=path, checksum=checksum)
