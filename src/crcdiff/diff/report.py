"""Change report views and emitters.

Everything here is derived from a ``DiffResult`` and can be recomputed at any
time; nothing feeds back into the comparison itself.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from crcdiff.config import GROUPING_THRESHOLD
from crcdiff.errors import ReportWriteError
from crcdiff.models import ChangeKind, ChangeRecord, DiffResult

KIND_ORDER = (ChangeKind.ADDED, ChangeKind.DELETED, ChangeKind.CHANGED)
KIND_TITLES = {
    ChangeKind.ADDED: "Added Files",
    ChangeKind.DELETED: "Deleted Files",
    ChangeKind.CHANGED: "Modified Files",
}


@dataclass(frozen=True)
class ChangeSummary:
    added: int
    deleted: int
    changed: int
    total: int
    change_percentage: float


def summarize(result: DiffResult) -> ChangeSummary:
    counts = {kind: 0 for kind in KIND_ORDER}
    for change in result.changes:
        counts[change.kind] += 1
    total = len(result.changes)
    base = max(result.old_count, result.new_count, 1)
    return ChangeSummary(
        added=counts[ChangeKind.ADDED],
        deleted=counts[ChangeKind.DELETED],
        changed=counts[ChangeKind.CHANGED],
        total=total,
        change_percentage=total / base * 100.0,
    )


def group_by_kind(changes: Iterable[ChangeRecord]) -> dict[ChangeKind, list[str]]:
    grouped: dict[ChangeKind, list[str]] = {kind: [] for kind in KIND_ORDER}
    for change in changes:
        grouped[change.kind].append(change.path)
    return grouped


def should_group(changes: Iterable[ChangeRecord], threshold: int = GROUPING_THRESHOLD) -> bool:
    return len(list(changes)) > threshold


def _build_markdown_report(current: str, new: str, result: DiffResult) -> str:
    summary = summarize(result)
    status = "MATCH" if result.are_equal else "CHANGED"
    lines = [
        "# Checksum comparison",
        "",
        f"- Current: `{current}`",
        f"- New: `{new}`",
        f"- Status: **{status}**",
        f"- Generated: `{datetime.now(timezone.utc).isoformat()}`",
        "",
        "## Summary",
        f"- added: `{summary.added}`",
        f"- deleted: `{summary.deleted}`",
        f"- changed: `{summary.changed}`",
        f"- change percentage: `{summary.change_percentage:.2f}%`",
    ]

    grouped = group_by_kind(result.changes)
    for kind in KIND_ORDER:
        paths = grouped[kind]
        if not paths:
            continue
        lines.extend(["", f"## {KIND_TITLES[kind]} ({len(paths)})"])
        lines.extend(f"- `{path}`" for path in paths)

    return "\n".join(lines) + "\n"


def _build_json_report(current: str, new: str, result: DiffResult) -> dict[str, Any]:
    summary = summarize(result)
    return {
        "current": current,
        "new": new,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "are_equal": result.are_equal,
        "file_counts": {"current": result.old_count, "new": result.new_count},
        "summary": {
            "added": summary.added,
            "deleted": summary.deleted,
            "changed": summary.changed,
            "total": summary.total,
            "change_percentage": round(summary.change_percentage, 4),
        },
        "changes": [change.to_dict() for change in result.changes],
    }


def write_change_report(
    result: DiffResult,
    *,
    current: str,
    new: str,
    json_path: Path | None = None,
    markdown_path: Path | None = None,
) -> dict[str, Any]:
    """Write the JSON and/or Markdown report and return the JSON payload.

    Raises ``ReportWriteError`` when a report file cannot be written.
    """

    payload = _build_json_report(current, new, result)
    if json_path is not None:
        _write_report(json_path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    if markdown_path is not None:
        _write_report(markdown_path, _build_markdown_report(current, new, result))
    return payload


def _write_report(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise ReportWriteError(path, exc.strerror or str(exc)) from exc
