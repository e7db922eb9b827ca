from __future__ import annotations
from pathlib import Path

APP_NAME = "sticky-notes"
ORG_NAME = "sticky-notes"
LOG_DIR = Path.home() / f".{APP_NAME}" / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = Path.home() / f".{APP_NAME}" / "recovery"

STORAGE_KEY = "notes-app-data"
SAVE_DEBOUNCE_MS = 500
UI_STATE_DEBOUNCE_MS = 400
