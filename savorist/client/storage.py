"""On-device key-value storage for client preferences."""

import asyncio
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path

from savorist.errors import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """Async string key-value storage.

    Implementations raise CacheReadError / CacheWriteError on failure and
    return None for keys that were never written.
    """

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError


class FileKeyValueStore(KeyValueStore):
    """Stores each key as a JSON text file in one directory.

    File I/O runs in a worker thread, so every call yields to the event loop.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize the store.

        Args:
            directory: Folder holding one file per key (created on first write)
        """
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError(f"Cannot read {path}: {e}") from e

    def _write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise CacheWriteError(f"Cannot write {path}: {e}") from e
        logger.debug(f"Stored {len(value)} chars under {key}")

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)
