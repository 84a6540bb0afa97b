"""Command line interface for crcdiff."""


import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from crcdiff.config import CRC_BACKENDS, MAX_EXIT_CHANGES, parse_exclude_patterns, resolve_crc_backend, resolve_manifest_name
from crcdiff.console import (
    display_text,
    make_console,
    print_change_report,
    print_error,
    print_file_statistics,
    print_heading,
    print_scan_result,
    scan_progress,
)
from crcdiff.diff import compare_manifests, write_change_report
from crcdiff.errors import ChecksumError
from crcdiff.logging import configure_logger
from crcdiff.manifest import create_manifest
from crcdiff.models import DiffResult

COMMANDS = ("create", "validate", "verify", "changes", "help")
VALUE_OPTIONS = ("--log-file", "--crc-backend", "--manifest-name")
MENU_OPTIONS = (
    ("1", "Create Checksum File", "bold yellow"),
    ("2", "Validate Checksum", "bold yellow"),
    ("3", "Detailed Changes", "bold green"),
    ("4", "Exit", "bold red"),
)

logger = logging.getLogger("crcdiff.cli")

InputFn = Callable[[str], str]


def _run_create(
    console: Console,
    path: str,
    exclude_patterns: list[str],
    *,
    backend: str,
    manifest_name: str,
    relative_paths: bool = False,
) -> int:
    logger.info("Creating checksum file for %s", path)
    try:
        with scan_progress(console) as progress:
            task = progress.add_task(f"Calculating checksums for files in {escape(display_text(path))}", total=None)
            manifest_path, stats = create_manifest(
                path,
                exclude_patterns,
                manifest_name=manifest_name,
                relative_paths=relative_paths,
                backend=backend,
                on_entry=lambda entry, stats: progress.advance(task),
            )
    except ChecksumError as exc:
        logger.error("Create failed: %s", exc)
        print_error(console, exc)
        return 1

    print_scan_result(console, manifest_path, stats)
    return 0


def _run_compare(
    console: Console,
    current: str,
    new: str,
    *,
    manifest_name: str,
    json_report: str | None = None,
    markdown_report: str | None = None,
) -> DiffResult | None:
    console.print()
    console.print("Validating Files...")
    try:
        comparison = compare_manifests(current, new, manifest_name=manifest_name)
    except ChecksumError as exc:
        logger.error("Comparison failed: %s", exc)
        print_error(console, exc)
        return None

    print_file_statistics(console, comparison)
    print_change_report(console, comparison.result)

    if json_report or markdown_report:
        try:
            write_change_report(
                comparison.result,
                current=comparison.current.source or current,
                new=comparison.new.source or new,
                json_path=Path(json_report) if json_report else None,
                markdown_path=Path(markdown_report) if markdown_report else None,
            )
        except ChecksumError as exc:
            logger.error("Report failed: %s", exc)
            print_error(console, exc)
            return None
    return comparison.result


def changes_exit_code(result: DiffResult) -> int:
    return min(len(result.changes), MAX_EXIT_CHANGES)


def cmd_create(args: argparse.Namespace) -> int:
    console = make_console()
    backend, manifest_name = args.crc_backend, args.manifest_name
    print_heading(console, "Command: Create checksum file")
    console.print(f"Path: {display_text(args.path)}", markup=False)
    if args.exclude:
        console.print(f"Exclude patterns: {display_text(' '.join(args.exclude))}", markup=False)
    return _run_create(
        console,
        args.path,
        list(args.exclude),
        backend=backend,
        manifest_name=manifest_name,
        relative_paths=args.relative,
    )


def cmd_validate(args: argparse.Namespace) -> int:
    console = make_console()
    manifest_name = args.manifest_name
    print_heading(console, "Command: Validate checksums")
    console.print(f"Current Path: {display_text(args.current)}", markup=False)
    console.print(f"New Path: {display_text(args.new)}", markup=False)
    result = _run_compare(
        console,
        args.current,
        args.new,
        manifest_name=manifest_name,
        json_report=args.json_report,
        markdown_report=args.markdown_report,
    )
    if result is None:
        return 1
    return 0 if result.are_equal else 1


def cmd_changes(args: argparse.Namespace) -> int:
    console = make_console()
    manifest_name = args.manifest_name
    print_heading(console, "Command: Show detailed changes")
    console.print(f"Current Path: {display_text(args.current)}", markup=False)
    console.print(f"New Path: {display_text(args.new)}", markup=False)
    result = _run_compare(
        console,
        args.current,
        args.new,
        manifest_name=manifest_name,
        json_report=args.json_report,
        markdown_report=args.markdown_report,
    )
    if result is None:
        return 1
    return changes_exit_code(result)


def cmd_help(args: argparse.Namespace) -> int:
    args.parser.print_help()
    return 0


def _prompt(console: Console, input_fn: InputFn, message: str) -> str:
    console.print(message, end="", markup=False)
    return input_fn("").strip()


def run_menu(args: argparse.Namespace, input_fn: InputFn | None = None) -> int:
    """Interactive loop used when no command is given."""

    input_fn = input_fn or input
    console = make_console()
    backend, manifest_name = args.crc_backend, args.manifest_name
    while True:
        if console.is_terminal:
            console.clear()
        print_heading(console, "Checksum Handler")
        for key, label, style in MENU_OPTIONS:
            console.print(f"[{key}] [{style}]{label}[/]")
        try:
            choice = _prompt(console, input_fn, "\nEnter Option: ")
            if choice == "1":
                path = _prompt(console, input_fn, "\nEnter Folder Path: ")
                patterns = parse_exclude_patterns(
                    _prompt(console, input_fn, "Enter exclude patterns (comma separated, or press Enter for none): ")
                )
                _run_create(console, path, patterns, backend=backend, manifest_name=manifest_name)
            elif choice in {"2", "3"}:
                current = _prompt(console, input_fn, "\nEnter Current Checksum Path: ")
                new = _prompt(console, input_fn, "\nEnter New Checksum Path: ")
                result = _run_compare(console, current, new, manifest_name=manifest_name)
                if choice == "2" and result is not None and result.are_equal:
                    console.print()
                    console.print("[bold green]Validation completed successfully - Files match![/]")
                if choice == "3" and result is not None:
                    console.print()
                    console.print(f"Found {len(result.changes)} total changes.")
            elif choice == "4":
                return 0
            else:
                console.print(Text.assemble(("Invalid Choice: ", "bold red"), f"'{display_text(choice)}'"))
                console.print("Please enter 1, 2, 3, or 4.")
            _prompt(console, input_fn, "\nPress Enter to continue...")
        except EOFError:
            console.print()
            return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crcdiff", description="CRC-32 checksum manifests for directory trees")
    parser.add_argument("--log-file", help="Append run logs to this file")
    parser.add_argument("--crc-backend", choices=CRC_BACKENDS, help="CRC-32 implementation (default: zlib)")
    parser.add_argument("--manifest-name", help="Manifest file name (default: checksum.txt)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    parser.set_defaults(func=run_menu, parser=parser)
    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a checksum file in a folder")
    create.add_argument("path")
    create.add_argument("exclude", nargs="*", help="Skip files whose path contains any of these substrings")
    create.add_argument("--relative", action="store_true", help="Record paths relative to the folder")
    create.set_defaults(func=cmd_create)

    for name, aliases, func, help_text in (
        ("validate", ["verify"], cmd_validate, "Validate checksums between two paths and report changes"),
        ("changes", [], cmd_changes, "Show detailed changes; exit code is the change count"),
    ):
        compare = subparsers.add_parser(name, aliases=aliases, help=help_text)
        compare.add_argument("current", help="Current checksum file or folder holding one")
        compare.add_argument("new", help="New checksum file or folder holding one")
        compare.add_argument("--json-report", help="Write a JSON change report")
        compare.add_argument("--markdown-report", help="Write a Markdown change report")
        compare.set_defaults(func=func)

    help_cmd = subparsers.add_parser("help", help="Show usage")
    help_cmd.set_defaults(func=cmd_help)

    return parser


def _normalize_command(argv: list[str]) -> list[str]:
    """Lower-case the command word so ``CREATE`` and ``Verify`` are accepted."""

    skip_value = False
    for index, token in enumerate(argv):
        if skip_value:
            skip_value = False
            continue
        if token.startswith("-"):
            skip_value = token in VALUE_OPTIONS
            continue
        if token.lower() in COMMANDS:
            return [*argv[:index], token.lower(), *argv[index + 1 :]]
        break
    return argv


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_normalize_command(list(sys.argv[1:] if argv is None else argv)))
    try:
        args.crc_backend = resolve_crc_backend(args.crc_backend)
        args.manifest_name = resolve_manifest_name(args.manifest_name)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logger(Path(args.log_file) if args.log_file else None, logging.DEBUG if args.verbose else logging.INFO)
    logger.debug("Running command=%s backend=%s manifest=%s", args.command, args.crc_backend, args.manifest_name)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
