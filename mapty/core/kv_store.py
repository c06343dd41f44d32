"""Key-value persistence medium: string values under string keys."""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from mapty.core.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store (tests, throwaway sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """All keys in one JSON object file; the whole file is rewritten on each change."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self._path} does not contain a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(data, indent=2))
            tmp.replace(self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            # Non-string value: hand it over as JSON text so the codec decides
            return json.dumps(value)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug("Stored %d chars under %r", len(value), key)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)
