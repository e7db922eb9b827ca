from __future__ import annotations

from PySide6.QtCore import QSettings, Qt
from PySide6.QtWidgets import (
    QGridLayout, QHBoxLayout, QLineEdit, QMainWindow, QMessageBox,
    QPushButton, QScrollArea, QVBoxLayout, QWidget,
)

from sticky_notes.core.palette import PALETTE
from sticky_notes.logging_setup import log
from sticky_notes.storage.filesystem import write_recovery_copy
from sticky_notes.store.autosave import AutosaveController
from sticky_notes.store.note_store import NoteStore
from sticky_notes.ui.note_card import CARD_HEIGHT, CARD_WIDTH, NoteCard
from sticky_notes.ui.projection import project_cards
from sticky_notes.ui.ui_state import UiStateStore, default_window_size

GRID_COLUMNS = 4
GRID_SPACING = 12
WINDOW_MARGIN = 12


class StickyNotesWindow(QMainWindow):
    def __init__(self, *, store: NoteStore, autosave: AutosaveController, settings: QSettings):
        super().__init__()
        self.setWindowTitle("Sticky Notes")

        self.store = store
        self.autosave = autosave
        self.autosave.on_error = self._on_autosave_failed
        self._cards: dict[str, NoteCard] = {}
        self._fresh_ids: set[str] = set()

        # ---- top bar: add + palette + search ----
        self.add_btn = QPushButton("+")
        self.add_btn.setCheckable(True)
        self.add_btn.setFixedSize(36, 36)
        self.add_btn.setToolTip("Nueva nota")
        self.add_btn.toggled.connect(self._set_palette_visible)

        self.palette_box = QWidget()
        palette_layout = QHBoxLayout(self.palette_box)
        palette_layout.setContentsMargins(0, 0, 0, 0)
        for color in PALETTE:
            btn = QPushButton()
            btn.setFixedSize(24, 24)
            btn.setToolTip(color.name)
            btn.setStyleSheet(
                f"background-color: {color.token}; border-radius: 12px; border: 1px solid #888;"
            )
            btn.clicked.connect(lambda _=False, token=color.token: self.create_note(token))
            palette_layout.addWidget(btn)
        self.palette_box.setVisible(False)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Buscar notas…")
        self.search.setClearButtonEnabled(True)
        self.search.textChanged.connect(self._on_search_changed)

        top = QHBoxLayout()
        top.addWidget(self.add_btn)
        top.addWidget(self.palette_box)
        top.addStretch(1)
        top.addWidget(self.search)

        # ---- notes grid ----
        self.grid_host = QWidget()
        self.grid = QGridLayout(self.grid_host)
        self.grid.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        self.grid.setSpacing(GRID_SPACING)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.grid_host)

        root = QWidget()
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(WINDOW_MARGIN, WINDOW_MARGIN, WINDOW_MARGIN, WINDOW_MARGIN)
        root_layout.addLayout(top)
        root_layout.addWidget(scroll, 1)
        self.setCentralWidget(root)

        self.ui_state = UiStateStore(
            owner=self,
            settings=settings,
            default_size=default_window_size(
                columns=GRID_COLUMNS,
                card_width=CARD_WIDTH,
                card_height=CARD_HEIGHT,
                spacing=GRID_SPACING,
                margin=WINDOW_MARGIN,
            ),
        )
        self.ui_state.restore()

        self._unsubscribe = self.store.subscribe(lambda _store: self.render())
        self.render()

    # ---- projection ----

    def render(self) -> None:
        """Rebuild the grid from the store; the widgets never feed back into it."""
        views = project_cards(
            self.store.list(),
            self.search.text(),
            self.autosave.drafts(),
            keep_visible=self._fresh_ids,
        )

        live_ids = {v.note_id for v in views}
        for note_id in list(self._cards):
            if note_id not in live_ids:
                card = self._cards.pop(note_id)
                self.grid.removeWidget(card)
                card.deleteLater()

        while self.grid.count():
            self.grid.takeAt(0)

        pos = 0
        for view in views:
            card = self._cards.get(view.note_id)
            if card is None:
                card = self._make_card(view)
            card.apply(view)
            if view.visible:
                self.grid.addWidget(card, pos // GRID_COLUMNS, pos % GRID_COLUMNS)
                pos += 1

        log.debug("Rendered notes: total=%d visible=%d", len(views), pos)

    def _make_card(self, view) -> NoteCard:
        card = NoteCard(view, parent=self.grid_host)
        card.edited.connect(self.autosave.on_edited)
        card.editFinished.connect(self._on_edit_finished)
        card.deleteRequested.connect(self.delete_note)
        self._cards[view.note_id] = card
        return card

    # ---- intents ----

    def _set_palette_visible(self, visible: bool) -> None:
        self.palette_box.setVisible(visible)

    def create_note(self, color: str) -> None:
        self.add_btn.setChecked(False)
        known = {n.id for n in self.store.list()}
        try:
            self.store.create(color)
        except Exception as e:
            self._report_save_failure("create", e)
        # stays on screen until the query changes, even when it does not match
        self._fresh_ids |= {n.id for n in self.store.list()} - known
        self.render()

    def _on_search_changed(self, _text: str) -> None:
        self._fresh_ids.clear()
        self.render()

    def _on_edit_finished(self, note_id: str, text: str) -> None:
        self._guarded("save", lambda: self.autosave.commit(note_id, text))

    def delete_note(self, note_id: str) -> None:
        self.autosave.discard(note_id)
        self._fresh_ids.discard(note_id)
        self._guarded("delete", lambda: self.store.delete(note_id))

    # ---- error boundary ----

    def _guarded(self, action: str, fn) -> None:
        try:
            fn()
        except Exception as e:
            self._report_save_failure(action, e)
        self.render()

    def _on_autosave_failed(self, note_id: str, exc: Exception) -> None:
        self._report_save_failure(f"autosave id={note_id}", exc)

    def _report_save_failure(self, action: str, exc: Exception) -> None:
        log.exception("Storage write failed: action=%s", action, exc_info=exc)
        detail = str(exc)
        try:
            rec = write_recovery_copy(self.store.key, self.store.snapshot())
            log.warning("Recovery copy written: %s", rec)
            detail += f"\n\nCopia de recuperación: {rec}"
        except Exception:
            log.exception("Recovery copy failed")
        QMessageBox.critical(self, "Error al guardar", detail)

    # ---- window lifecycle ----

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        self.ui_state.schedule_save()

    def moveEvent(self, event):  # type: ignore[override]
        super().moveEvent(event)
        self.ui_state.schedule_save()

    def closeEvent(self, event):  # type: ignore[override]
        """Persist pending edits before the store is torn down."""
        try:
            self.autosave.flush_all()
        except Exception:
            log.exception("Failed to flush notes on close")
        self.ui_state.save()
        self._unsubscribe()
        self.store.close()
        super().closeEvent(event)
