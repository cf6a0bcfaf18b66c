from __future__ import annotations

import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """Named slots holding opaque string blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None when the slot is empty."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the blob under `key` in one step."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Empty the slot; deleting an empty slot is a no-op."""


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and throwaway games."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """One `<key>.json` file per slot under a base directory, replaced atomically."""

    def __init__(self, base_dir: Path):
        """Ensure the backing directory exists."""
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def slot_path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.slot_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.slot_path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self.slot_path(key).unlink(missing_ok=True)
