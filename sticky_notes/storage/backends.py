from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings

from sticky_notes.app_settings import SettingsKeys
from sticky_notes.storage.filesystem import atomic_write_text

log = logging.getLogger(__name__)


class KeyValueStorage:
    """
    Synchronous string key -> string value store
    (the desktop counterpart of a browser's localStorage).
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class MemoryStorage(KeyValueStorage):
    """In-memory stand-in, used by tests."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    All keys live in one JSON object on disk; every write rewrites the
    file atomically. A missing or unreadable file starts empty.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log.warning("Storage file unreadable, starting empty: %s", self.path, exc_info=True)
            return {}
        if not isinstance(raw, dict):
            log.warning("Storage file is not a JSON object, starting empty: %s", self.path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _write(self) -> None:
        text = json.dumps(self._data, ensure_ascii=False, indent=2, sort_keys=True)
        atomic_write_text(self.path, text + "\n", encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._write()


class QSettingsStorage(KeyValueStorage):
    """Values kept under the storage/ group of the application's QSettings."""

    def __init__(self, settings: QSettings, *, prefix: str = SettingsKeys.STORAGE_PREFIX):
        self._settings = settings
        self._prefix = prefix

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        val = self._settings.value(self._full_key(key))
        return str(val) if val is not None else None

    def set_item(self, key: str, value: str) -> None:
        self._settings.setValue(self._full_key(key), value)
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise OSError(f"QSettings write failed: status={self._settings.status()!r}")

    def remove_item(self, key: str) -> None:
        self._settings.remove(self._full_key(key))
        self._settings.sync()

    def close(self) -> None:
        self._settings.sync()
