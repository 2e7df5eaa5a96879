"""Key/value stores for remembering the chosen language.

Both stores implement the KeyValueStore protocol.

Components:
    MemoryStore   - Process-local dict store (tests, ephemeral sessions)
    JsonFileStore - JSON object persisted to a single file

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock

__all__ = ["JsonFileStore", "MemoryStore"]

logger = logging.getLogger(__name__)


class MemoryStore:
    """KeyValueStore backed by a dict.

    Example:
        >>> store = MemoryStore({"ls-ln": "fa"})
        >>> store.get("ls-ln")
        'fa'
    """

    __slots__ = ("_values",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """KeyValueStore persisted as a JSON object in one file.

    The file is read on every get() and rewritten on every set(), so several
    processes sharing the file see each other's latest choice. A missing or
    unreadable file behaves as an empty store; a write failure propagates.

    Attributes:
        path: Location of the JSON file
    """

    __slots__ = ("_lock", "path")

    def __init__(self, path: str | Path) -> None:
        """Initialize store.

        Args:
            path: JSON file location; parent directories are created on first write
        """
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top level is not an object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
