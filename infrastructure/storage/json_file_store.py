"""
JSON file implementation of RecordStore.

Each collection key is stored as `<data_dir>/<key>.json` holding one JSON
array. Writes go to a temporary file that atomically replaces the target,
so a crash mid-write never leaves a truncated collection behind.
"""
import asyncio
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from application.exceptions import StorageError

logger = logging.getLogger(__name__)

# Keys become file names
KEY_PATTERN = re.compile(r"^[a-z0-9_]+$")


class JsonFileRecordStore:
    """
    File-backed implementation of the RecordStore protocol.

    Blocking file I/O runs in a worker thread so callers on the event loop
    are never blocked.
    """

    def __init__(self, data_dir: Union[str, Path]):
        """
        Initialize with the directory holding collection files.

        Args:
            data_dir: Directory for `<key>.json` files (created on first write)
        """
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, key: str) -> Path:
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Invalid record store key: {key!r}")
        return self._data_dir / f"{key}.json"

    async def get(self, key: str) -> Optional[List[Any]]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: List[Any]) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def remove(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)

    def _read(self, key: str) -> Optional[List[Any]]:
        path = self._path(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Failed to read collection '{key}': {e}")
            raise StorageError(f"Failed to read '{key}'", key=key) from e

        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Collection '{key}' is not valid JSON: {e}")
            raise StorageError(f"Stored data for '{key}' is corrupt", key=key) from e

        if not isinstance(value, list):
            raise StorageError(f"Stored data for '{key}' is not an array", key=key)
        return value

    def _write(self, key: str, value: List[Any]) -> None:
        path = self._path(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON-serializable", key=key) from e

        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write collection '{key}': {e}")
            raise StorageError(f"Failed to write '{key}'", key=key) from e

        logger.debug(f"Wrote {len(value)} records to '{key}'")

    def _delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}'", key=key) from e
