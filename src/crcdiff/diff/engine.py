"""Classify the differences between two path -> checksum mappings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from crcdiff.config import MANIFEST_FILENAME
from crcdiff.manifest.reader import read_manifest
from crcdiff.models import ChangeKind, ChangeRecord, DiffResult, ManifestReadResult

logger = logging.getLogger(__name__)


def diff(old: Mapping[str, int], new: Mapping[str, int]) -> DiffResult:
    """Compare two mappings by exact checksum equality.

    Added and changed paths come first, in path order, followed by deleted
    paths in path order.
    """

    changes: list[ChangeRecord] = []
    for path in sorted(new):
        if path not in old:
            changes.append(ChangeRecord(path, ChangeKind.ADDED))
        elif old[path] != new[path]:
            changes.append(ChangeRecord(path, ChangeKind.CHANGED))

    for path in sorted(old):
        if path not in new:
            changes.append(ChangeRecord(path, ChangeKind.DELETED))

    return DiffResult(changes=tuple(changes), old_count=len(old), new_count=len(new))


@dataclass(frozen=True)
class ManifestComparison:
    current: ManifestReadResult
    new: ManifestReadResult
    result: DiffResult

    @property
    def parse_errors(self) -> int:
        return self.current.error_count + self.new.error_count


def compare_manifests(
    current_location: str | Path,
    new_location: str | Path,
    *,
    manifest_name: str = MANIFEST_FILENAME,
) -> ManifestComparison:
    """Read two manifests (files or folders holding one) and diff them."""

    current = read_manifest(current_location, manifest_name=manifest_name)
    new = read_manifest(new_location, manifest_name=manifest_name)
    result = diff(current.entries, new.entries)
    logger.info(
        "Compared %s with %s: %d changes (equal=%s)",
        current.source,
        new.source,
        len(result.changes),
        result.are_equal,
    )
    return ManifestComparison(current=current, new=new, result=result)
