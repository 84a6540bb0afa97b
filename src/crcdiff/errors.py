"""Error taxonomy for checksum scans, manifest parsing and comparisons."""

from __future__ import annotations

from pathlib import Path


class ChecksumError(Exception):
    """Base class for every error raised by crcdiff."""

    kind = "error"


class PathNotFoundError(ChecksumError, FileNotFoundError):
    """Raised when a scan root or manifest location does not exist."""

    kind = "path-not-found"

    def __init__(self, path: str | Path, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Path does not exist: {path}")


class ManifestMissingError(ChecksumError, FileNotFoundError):
    """Raised when a directory was given but holds no manifest file."""

    kind = "manifest-missing"

    def __init__(self, directory: str | Path, manifest_name: str) -> None:
        self.directory = Path(directory)
        self.manifest_name = manifest_name
        super().__init__(f"{manifest_name} not found in folder: {directory}")


class UnreadableFileError(ChecksumError):
    """Raised when a file cannot be opened or read to the end."""

    kind = "unreadable"

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Unable to read file: {path}{detail}")


class ManifestWriteError(ChecksumError):
    """Raised when the manifest file cannot be created or written."""

    kind = "write-failure"

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Unable to write checksum file: {path}{detail}")


class ReportWriteError(ChecksumError):
    """Raised when a JSON or Markdown change report cannot be written."""

    kind = "write-failure"

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Unable to write report: {path}{detail}")


class MalformedLineError(ChecksumError, ValueError):
    """A manifest line that does not parse.

    The reader records these as ``MalformedLine`` values and keeps going;
    only ``parse_manifest_line`` raises it.
    """

    kind = "malformed-line"

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")
