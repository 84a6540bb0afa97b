"""Defaults and environment-driven settings for crcdiff."""

from __future__ import annotations

import os

MANIFEST_FILENAME = "checksum.txt"
CHUNK_SIZE = 8192
GROUPING_THRESHOLD = 20
MAX_EXIT_CHANGES = 255

CRC_BACKENDS = ("zlib", "table")
DEFAULT_CRC_BACKEND = "zlib"

ENV_CRC_BACKEND = "CRCDIFF_CRC_BACKEND"
ENV_MANIFEST_NAME = "CRCDIFF_MANIFEST_NAME"

_PATTERN_TRIM = " \t"


def resolve_crc_backend(value: str | None = None) -> str:
    """Return the CRC backend name, falling back to the environment."""

    backend = value or os.getenv(ENV_CRC_BACKEND) or DEFAULT_CRC_BACKEND
    backend = backend.strip().lower()
    if backend not in CRC_BACKENDS:
        raise ValueError(f"Unknown CRC backend {backend!r}; expected one of {', '.join(CRC_BACKENDS)}")
    return backend


def resolve_manifest_name(value: str | None = None) -> str:
    name = value or os.getenv(ENV_MANIFEST_NAME) or MANIFEST_FILENAME
    if not name.strip() or "/" in name or "\\" in name or name in {".", ".."}:
        raise ValueError(f"Manifest name must be a plain file name, got {name!r}")
    return name


def parse_exclude_patterns(text: str) -> list[str]:
    """Split comma separated exclude patterns as typed in the interactive menu.

    Tokens are trimmed of spaces and tabs; empty tokens are dropped.
    """

    patterns: list[str] = []
    for token in text.split(","):
        cleaned = token.strip(_PATTERN_TRIM)
        if cleaned:
            patterns.append(cleaned)
    return patterns
