"""Colored console output for scans and comparisons."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text

from crcdiff.diff.engine import ManifestComparison
from crcdiff.diff.report import KIND_ORDER, KIND_TITLES, group_by_kind, should_group, summarize
from crcdiff.errors import ChecksumError
from crcdiff.models import ChangeKind, DiffResult, ScanStatistics

KIND_STYLES = {
    ChangeKind.ADDED: "bold green",
    ChangeKind.DELETED: "bold red",
    ChangeKind.CHANGED: "bold yellow",
}
RULE = "-" * 25


def display_text(value: object) -> str:
    """Render ``value`` for the terminal.

    File names that are not valid UTF-8 reach us as lone surrogates; they are
    shown as ``\\xNN`` escapes instead of failing the write to stdout.
    """

    return str(value).encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def make_console() -> Console:
    return Console(soft_wrap=True, highlight=False, emoji=False)


def scan_progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        TextColumn("{task.completed:.0f} files"),
        console=console,
        transient=True,
    )


def print_heading(console: Console, title: str) -> None:
    console.print(Text(title, style="bold blue"))


def print_error(console: Console, exc: Exception) -> None:
    kind = exc.kind if isinstance(exc, ChecksumError) else "error"
    console.print(Text.assemble((f"Error [{kind}]: ", "bold red"), (display_text(exc), "red")))


def print_scan_result(console: Console, manifest_path: Path, stats: ScanStatistics) -> None:
    console.print(Text.assemble(("Checksum File Created: ", "bold green"), display_text(manifest_path)))
    line = Text(f"Processed {stats.files_processed} files", style="bold green")
    if stats.files_unreadable:
        line.append(f" ({stats.files_unreadable} files could not be read)")
    if stats.files_excluded:
        line.append(f" ({stats.files_excluded} excluded)")
    console.print(line)
    if stats.directories_unreadable:
        console.print(Text(f"Warning: {stats.directories_unreadable} directories could not be listed", style="bold yellow"))


def print_file_statistics(console: Console, comparison: ManifestComparison) -> None:
    console.print()
    console.print(Text("File Statistics:", style="bold cyan"))
    console.print(f"Current file: {comparison.current.valid_lines} valid entries")
    console.print(f"New file: {comparison.new.valid_lines} valid entries")
    if comparison.parse_errors:
        console.print(f"Errors: {comparison.parse_errors} lines had parsing issues")
    for label, read in (("current", comparison.current), ("new", comparison.new)):
        for bad in read.malformed:
            console.print(
                Text(f"Warning: Malformed line in {label} checksum file (line {bad.line_number}, {bad.reason}): {display_text(bad.text)}", style="yellow")
            )


def print_change_report(console: Console, result: DiffResult) -> None:
    """Print changes line by line, or grouped by kind for large change sets."""

    console.print()
    if result.are_equal:
        console.print(Text("Checksum Files Match - No Changes Detected", style="bold green"))
        return

    console.print(Text("Changes Detected:", style="bold yellow"))
    console.print(RULE)
    if should_group(result.changes):
        grouped = group_by_kind(result.changes)
        for kind in KIND_ORDER:
            paths = grouped[kind]
            if not paths:
                continue
            console.print()
            console.print(Text(f"{KIND_TITLES[kind]} ({len(paths)}):", style=KIND_STYLES[kind]))
            for path in paths:
                console.print(Text(f"  {display_text(path)}"))
    else:
        for change in result.changes:
            console.print(Text.assemble((f"[{change.kind.value}]", KIND_STYLES[change.kind]), " ", display_text(change.path)))

    summary = summarize(result)
    console.print(RULE)
    console.print(f"Summary: {summary.added} added, {summary.deleted} deleted, {summary.changed} changed")
    console.print(f"Change percentage: {summary.change_percentage:.2f}% of files affected")
