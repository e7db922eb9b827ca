from __future__ import annotations

import argparse
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from sticky_notes.app_settings import SettingsKeys, get_int, get_str
from sticky_notes.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from sticky_notes.settings import APP_NAME, ORG_NAME, SAVE_DEBOUNCE_MS, STORAGE_KEY
from sticky_notes.storage.backends import JsonFileStorage, KeyValueStorage, QSettingsStorage
from sticky_notes.store.autosave import AutosaveController
from sticky_notes.store.note_store import NoteStore
from sticky_notes.ui.main_window import StickyNotesWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Sticky notes on your desktop")
    p.add_argument(
        "--storage-file",
        type=Path,
        default=None,
        help="Keep notes in this JSON file instead of the platform settings store",
    )
    p.add_argument(
        "--storage-key",
        default=None,
        help=f"Key holding the notes array (default: {STORAGE_KEY})",
    )
    p.add_argument("--debug", action="store_true", help="Verbose console logging")
    return p.parse_args(argv)


def build_storage(args: argparse.Namespace, settings: QSettings) -> KeyValueStorage:
    if args.storage_file is not None:
        log.info("Storage backend: json file=%s", args.storage_file)
        return JsonFileStorage(args.storage_file)
    log.info("Storage backend: QSettings file=%s", settings.fileName())
    return QSettingsStorage(settings)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug)
    install_global_exception_hooks()

    app = QApplication([])
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)
    settings = QSettings()

    key = args.storage_key or get_str(settings, SettingsKeys.STORAGE_KEY, STORAGE_KEY)
    debounce_ms = get_int(settings, SettingsKeys.SAVE_DEBOUNCE_MS, SAVE_DEBOUNCE_MS)

    store = NoteStore(build_storage(args, settings), key=key)
    store.open()
    autosave = AutosaveController(store, debounce_ms=debounce_ms)

    win = StickyNotesWindow(store=store, autosave=autosave, settings=settings)
    win.show()
    log.info("Application started, SID=%s notes=%d", SESSION_ID, len(store))
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
