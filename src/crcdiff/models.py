from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ChecksumEntry:
    path: str
    checksum: int


@dataclass
class ScanStatistics:
    files_processed: int = 0
    files_unreadable: int = 0
    files_excluded: int = 0
    directories_unreadable: int = 0


class ChangeKind(str, Enum):
    ADDED = "ADDED"
    DELETED = "DELETED"
    CHANGED = "CHANGED"


@dataclass(frozen=True)
class ChangeRecord:
    path: str
    kind: ChangeKind

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "kind": self.kind.value}


@dataclass(frozen=True)
class MalformedLine:
    line_number: int
    text: str
    reason: str


@dataclass
class ManifestReadResult:
    """Best-effort parse of one manifest: the mapping plus what was skipped."""

    source: str | None = None
    entries: dict[str, int] = field(default_factory=dict)
    valid_lines: int = 0
    malformed: list[MalformedLine] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.malformed)


@dataclass(frozen=True)
class DiffResult:
    changes: tuple[ChangeRecord, ...]
    old_count: int
    new_count: int

    @property
    def are_equal(self) -> bool:
        return not self.changes

    def paths(self, kind: ChangeKind) -> list[str]:
        return [change.path for change in self.changes if change.kind is kind]
