"""Key-value persistence for oracle config and registry entries."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Get/set-by-key store. Every ``set`` is applied atomically or not at all."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or ``None``."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...

    @abstractmethod
    def range(self, prefix: str) -> Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` pairs whose key starts with ``prefix``, in key order."""
        ...


class MemoryStore(KeyValueStore):
    def __init__(self, data: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def range(self, prefix: str) -> Iterator[tuple[str, str]]:
        for key in sorted(k for k in self._data if k.startswith(prefix)):
            yield key, self._data[key]


class JsonFileStore(MemoryStore):
    """Store persisted as a single JSON object on disk.

    Each ``set`` rewrites the file through a temporary sibling and
    ``os.replace``, so readers only ever see a complete snapshot.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open() as f:
            data = json.load(f)
        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ValueError(f"State file {self.path} is not a JSON object of strings")
        logger.debug("Loaded %d key(s) from %s", len(data), self.path)
        return data

    def set(self, key: str, value: str) -> None:
        updated = {**self._data, key: value}
        self._write(updated)
        self._data = updated

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
