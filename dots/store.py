"""String-keyed blob stores.

The rest of Dots only needs get/set/remove on byte blobs. FileStore keeps
one file per key in a directory and writes atomically; MemoryStore is the
in-process variant used by tests and throwaway sessions.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from dots.errors import InvalidKeyError
from dots.fileio import read_bytes, write_bytes_atomic

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def check_key(key: str) -> str:
    if not _KEY_RE.match(key) or key.startswith("."):
        raise InvalidKeyError(f"Invalid store key: {key!r}")
    return key


class KeyValueStore(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...


class FileStore:
    """One file per key under *directory*."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, key: str) -> Path:
        return self.directory / check_key(key)

    def get(self, key: str) -> bytes | None:
        data = read_bytes(self._path(key))
        logger.debug("get %s -> %s", key, "miss" if data is None else f"{len(data)} bytes")
        return data

    def set(self, key: str, value: bytes) -> None:
        write_bytes_atomic(self._path(key), value)
        logger.debug("set %s (%d bytes)", key, len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
        logger.debug("remove %s", key)

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(
            p.name for p in self.directory.iterdir()
            if p.is_file() and not p.name.startswith(".")
        )


class MemoryStore:
    def __init__(self, data: dict[str, bytes] | None = None) -> None:
        self.data: dict[str, bytes] = dict(data or {})

    def get(self, key: str) -> bytes | None:
        return self.data.get(check_key(key))

    def set(self, key: str, value: bytes) -> None:
        self.data[check_key(key)] = bytes(value)

    def remove(self, key: str) -> None:
        self.data.pop(check_key(key), None)

    def keys(self) -> list[str]:
        return sorted(self.data)
