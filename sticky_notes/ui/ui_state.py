import logging

from PySide6.QtCore import QTimer, QSettings
from PySide6.QtWidgets import QMainWindow

from sticky_notes.app_settings import SettingsKeys
from sticky_notes.settings import UI_STATE_DEBOUNCE_MS


log = logging.getLogger(__name__)


def default_window_size(*, columns: int, card_width: int, card_height: int,
                        spacing: int, margin: int, rows: int = 2) -> tuple[int, int]:
    """First-run size that fits `columns` x `rows` cards plus the top bar."""
    columns = max(1, int(columns))
    rows = max(1, int(rows))
    width = columns * card_width + (columns - 1) * spacing + 2 * margin + 24  # + scrollbar
    height = rows * card_height + (rows - 1) * spacing + 2 * margin + 56      # + top bar
    return width, height


class UiStateStore:
    """
    Remembers where the notes window was and how big it was.
    Geometry goes to QSettings a short while after the last move/resize,
    so dragging the window does not hammer the settings file.
    """

    def __init__(self, *, owner: QMainWindow, settings: QSettings,
                 default_size: tuple[int, int], debounce_ms: int = UI_STATE_DEBOUNCE_MS):
        self._owner = owner
        self._settings = settings
        self._default_size = default_size
        self._restoring = False
        self._pending = QTimer(owner)
        self._pending.setSingleShot(True)
        self._pending.setInterval(int(debounce_ms))
        self._pending.timeout.connect(self.save)

    def schedule_save(self) -> None:
        if not self._restoring:
            self._pending.start()

    def restore(self) -> bool:
        """Apply saved geometry; fall back to the grid-sized default. True if restored."""
        self._restoring = True
        try:
            saved = self._settings.value(SettingsKeys.UI_GEOMETRY)
            if saved and self._owner.restoreGeometry(saved):
                return True
            self._owner.resize(*self._default_size)
            return False
        except Exception:
            log.exception("Window geometry restore failed; using default size")
            self._owner.resize(*self._default_size)
            return False
        finally:
            self._restoring = False

    def save(self) -> None:
        if self._pending.isActive():
            self._pending.stop()
        try:
            self._settings.setValue(SettingsKeys.UI_GEOMETRY, self._owner.saveGeometry())
        except Exception:
            log.exception("Window geometry save failed")
