"""Manifest creation and parsing."""

from .format import format_manifest_line, parse_manifest_line
from .reader import parse_manifest_lines, read_manifest, resolve_manifest_path
from .writer import create_manifest, is_excluded, iter_checksum_entries, write_manifest

__all__ = [
    "create_manifest",
    "format_manifest_line",
    "is_excluded",
    "iter_checksum_entries",
    "parse_manifest_line",
    "parse_manifest_lines",
    "read_manifest",
    "resolve_manifest_path",
    "write_manifest",
]
