"""Streaming CRC-32 checksums for files.

The checksum is the reflected CRC-32 used by zip and gzip (polynomial
0xEDB88320, register seeded with 0xFFFFFFFF, complemented at the end). Values
are stored as signed 32-bit integers, so every public helper that returns a
file checksum returns the signed form.
"""

from __future__ import annotations

import logging
import zlib
from functools import lru_cache
from pathlib import Path
from typing import Callable

from crcdiff.config import CHUNK_SIZE, resolve_crc_backend
from crcdiff.errors import UnreadableFileError

logger = logging.getLogger(__name__)

CRC32_POLYNOMIAL = 0xEDB88320
_MASK32 = 0xFFFFFFFF


@lru_cache(maxsize=None)
def crc32_table() -> tuple[int, ...]:
    """Return the 256-entry lookup table, built once per process."""

    table = []
    for index in range(256):
        value = index
        for _ in range(8):
            value = (CRC32_POLYNOMIAL ^ (value >> 1)) if value & 1 else (value >> 1)
        table.append(value)
    return tuple(table)


def _table_update(data: bytes, value: int = 0) -> int:
    table = crc32_table()
    crc = value ^ _MASK32
    for byte in data:
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK32


def _zlib_update(data: bytes, value: int = 0) -> int:
    return zlib.crc32(data, value) & _MASK32


_BACKENDS: dict[str, Callable[[bytes, int], int]] = {
    "table": _table_update,
    "zlib": _zlib_update,
}


def crc32_update(value: int, data: bytes, backend: str | None = None) -> int:
    """Continue an unsigned CRC-32 over ``data``; start from 0."""

    return _BACKENDS[resolve_crc_backend(backend)](data, value & _MASK32)


def crc32_bytes(data: bytes, backend: str | None = None) -> int:
    return crc32_update(0, data, backend)


def to_signed32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def to_unsigned32(value: int) -> int:
    return value & _MASK32


def compute_checksum(path: str | Path, *, backend: str | None = None, chunk_size: int = CHUNK_SIZE) -> int:
    """Return the signed CRC-32 of the file at ``path``.

    Raises ``UnreadableFileError`` when the file cannot be opened or read.
    """

    update = _BACKENDS[resolve_crc_backend(backend)]
    crc = 0
    try:
        with Path(path).open("rb") as handle:
            for chunk in iter(lambda: handle.read(chunk_size), b""):
                crc = update(chunk, crc)
    except OSError as exc:
        logger.warning("Unable to open file for checksum: %s (%s)", path, exc.strerror or exc)
        raise UnreadableFileError(path, exc.strerror or str(exc)) from exc
    return to_signed32(crc)
