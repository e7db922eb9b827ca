from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    STORAGE_PREFIX: str = "storage/"
    STORAGE_KEY: str = "notes/storage_key"
    SAVE_DEBOUNCE_MS: str = "notes/save_debounce_ms"


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_int(settings: QSettings, key: str, default: int) -> int:
    try:
        return int(settings.value(key, default))
    except Exception:
        return default
