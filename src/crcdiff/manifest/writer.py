"""Walk a directory tree and write its checksum manifest."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

from crcdiff.checksum import compute_checksum
from crcdiff.config import MANIFEST_FILENAME, resolve_crc_backend
from crcdiff.errors import ManifestWriteError, PathNotFoundError, UnreadableFileError
from crcdiff.manifest.format import MANIFEST_ENCODING, MANIFEST_ERRORS, format_manifest_line
from crcdiff.models import ChecksumEntry, ScanStatistics

logger = logging.getLogger(__name__)

EntryCallback = Callable[[ChecksumEntry, ScanStatistics], None]


def is_excluded(path: str, exclude_patterns: Iterable[str]) -> bool:
    """Literal, case-sensitive substring match against the traversal path."""

    return any(pattern and pattern in path for pattern in exclude_patterns)


def iter_candidate_files(root: str | Path, stats: ScanStatistics | None = None) -> Iterator[str]:
    """Yield every regular file under ``root`` in a stable order.

    Directory symlinks are not followed; file symlinks count as regular files
    when their target is one.
    """

    def _on_error(exc: OSError) -> None:
        logger.warning("Unable to list directory: %s (%s)", exc.filename, exc.strerror or exc)
        if stats is not None:
            stats.directories_unreadable += 1

    for dirpath, dirnames, filenames in os.walk(os.fspath(root), onerror=_on_error):
        dirnames.sort()
        for name in sorted(filenames):
            full_path = os.path.join(dirpath, name)
            if os.path.isfile(full_path):
                yield full_path


def iter_checksum_entries(
    root: str | Path,
    exclude_patterns: Iterable[str] = (),
    *,
    manifest_name: str = MANIFEST_FILENAME,
    relative_paths: bool = False,
    backend: str | None = None,
    stats: ScanStatistics | None = None,
) -> Iterator[ChecksumEntry]:
    """Checksum each candidate file, skipping the manifest and excluded paths.

    Unreadable files are counted in ``stats`` and skipped.
    """

    stats = stats if stats is not None else ScanStatistics()
    patterns = [pattern for pattern in exclude_patterns if pattern]
    root_str = os.fspath(root)

    for full_path in iter_candidate_files(root_str, stats):
        if os.path.basename(full_path) == manifest_name:
            continue
        if is_excluded(full_path, patterns):
            stats.files_excluded += 1
            continue
        if "\n" in full_path or "\r" in full_path:
            logger.warning("Skipping path with a line break, it cannot be stored in a manifest: %r", full_path)
            stats.files_excluded += 1
            continue
        try:
            checksum = compute_checksum(full_path, backend=backend)
        except UnreadableFileError:
            stats.files_unreadable += 1
            continue

        stats.files_processed += 1
        path = os.path.relpath(full_path, root_str) if relative_paths else full_path
        yield ChecksumEntry(path=path, checksum=checksum)


def _open_manifest(path: Path) -> TextIO:
    return path.open("w", encoding=MANIFEST_ENCODING, errors=MANIFEST_ERRORS)


def write_manifest(entries: Iterable[ChecksumEntry], path: str | Path) -> int:
    """Write ``entries`` to ``path`` (truncating it) and return the line count.

    Any ``OSError`` from the file, including the flush on close, is raised
    as ``ManifestWriteError``.
    """

    path = Path(path)
    written = 0
    try:
        with _open_manifest(path) as handle:
            for entry in entries:
                handle.write(format_manifest_line(entry))
                written += 1
    except OSError as exc:
        raise ManifestWriteError(path, exc.strerror or str(exc)) from exc
    return written


def create_manifest(
    root_dir: str | Path,
    exclude_patterns: Iterable[str] = (),
    *,
    manifest_name: str = MANIFEST_FILENAME,
    relative_paths: bool = False,
    backend: str | None = None,
    on_entry: EntryCallback | None = None,
) -> tuple[Path, ScanStatistics]:
    """Create ``<root_dir>/<manifest_name>`` for every file under ``root_dir``.

    The manifest is truncated before the scan starts and written one line at
    a time. Raises ``PathNotFoundError`` for a missing or non-directory root
    and ``ManifestWriteError`` when the manifest cannot be written. An unknown
    CRC backend raises ``ValueError`` before the manifest is touched.
    """

    root = Path(root_dir)
    if not root.exists():
        raise PathNotFoundError(root_dir)
    if not root.is_dir():
        raise PathNotFoundError(root_dir, f"Path is not a directory: {root_dir}")

    backend = resolve_crc_backend(backend)
    manifest_path = root / manifest_name
    stats = ScanStatistics()
    patterns = list(exclude_patterns)
    logger.info("Calculating checksums for files in %s (exclude=%s)", root_dir, patterns)

    entries = iter_checksum_entries(
        root_dir,
        patterns,
        manifest_name=manifest_name,
        relative_paths=relative_paths,
        backend=backend,
        stats=stats,
    )
    if on_entry is not None:
        entries = _notify(entries, stats, on_entry)
    write_manifest(entries, manifest_path)

    logger.info(
        "Checksum file created: %s (processed=%d unreadable=%d excluded=%d)",
        manifest_path,
        stats.files_processed,
        stats.files_unreadable,
        stats.files_excluded,
    )
    return manifest_path, stats


def _notify(entries: Iterable[ChecksumEntry], stats: ScanStatistics, callback: EntryCallback) -> Iterator[ChecksumEntry]:
    for entry in entries:
        callback(entry, stats)
        yield entry
