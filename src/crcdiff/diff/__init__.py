"""Manifest comparison and change reporting."""

from .engine import ManifestComparison, compare_manifests, diff
from .report import ChangeSummary, group_by_kind, should_group, summarize, write_change_report

__all__ = [
    "ChangeSummary",
    "ManifestComparison",
    "compare_manifests",
    "diff",
    "group_by_kind",
    "should_group",
    "summarize",
    "write_change_report",
]
