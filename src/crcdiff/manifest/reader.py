"""Best-effort manifest parsing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from crcdiff.config import MANIFEST_FILENAME
from crcdiff.errors import MalformedLineError, ManifestMissingError, PathNotFoundError, UnreadableFileError
from crcdiff.manifest.format import MANIFEST_ENCODING, MANIFEST_ERRORS, parse_manifest_line
from crcdiff.models import MalformedLine, ManifestReadResult

logger = logging.getLogger(__name__)


def resolve_manifest_path(location: str | Path, manifest_name: str = MANIFEST_FILENAME) -> Path:
    """Return the manifest file for ``location`` (a manifest or a folder holding one)."""

    path = Path(location)
    if not path.exists():
        raise PathNotFoundError(location)
    if path.is_dir():
        candidate = path / manifest_name
        if not candidate.is_file():
            raise ManifestMissingError(path, manifest_name)
        return candidate
    return path


def parse_manifest_lines(lines: Iterable[str], source: str | None = None) -> ManifestReadResult:
    """Parse manifest lines into a path -> checksum mapping.

    Blank lines are ignored. Malformed lines are recorded and skipped; a later
    line for the same path replaces an earlier one.
    """

    result = ManifestReadResult(source=source)
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line:
            continue
        try:
            entry = parse_manifest_line(line)
        except MalformedLineError as exc:
            logger.warning("Malformed line in %s (line %d): %s: %r", source or "manifest", line_number, exc.reason, line)
            result.malformed.append(MalformedLine(line_number=line_number, text=line, reason=exc.reason))
            continue
        result.entries[entry.path] = entry.checksum
        result.valid_lines += 1
    return result


def read_manifest(location: str | Path, *, manifest_name: str = MANIFEST_FILENAME) -> ManifestReadResult:
    """Read the manifest at ``location``.

    Raises ``PathNotFoundError`` or ``ManifestMissingError`` when no manifest can
    be located and ``UnreadableFileError`` when it cannot be opened. Malformed
    content never raises.
    """

    manifest_path = resolve_manifest_path(location, manifest_name)
    try:
        with manifest_path.open("r", encoding=MANIFEST_ENCODING, errors=MANIFEST_ERRORS) as handle:
            result = parse_manifest_lines(handle, source=str(manifest_path))
    except OSError as exc:
        raise UnreadableFileError(manifest_path, exc.strerror or str(exc)) from exc

    logger.info(
        "Read %s: %d valid entries, %d malformed lines",
        manifest_path,
        result.valid_lines,
        result.error_count,
    )
    return result
