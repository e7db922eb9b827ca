from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout,
)

from sticky_notes.qt_utils import blocked_signals
from sticky_notes.ui.projection import CardView

CARD_WIDTH = 220
CARD_HEIGHT = 200


class NoteCard(QFrame):
    """One sticky note. Emits intents; never touches the store itself."""

    edited = Signal(str, str)         # note_id, text
    editFinished = Signal(str, str)   # note_id, text
    deleteRequested = Signal(str)     # note_id

    def __init__(self, view: CardView, parent=None):
        super().__init__(parent)
        self.note_id = view.note_id
        self._editing = False

        self.setObjectName("noteCard")
        self.setFixedSize(CARD_WIDTH, CARD_HEIGHT)
        self.setStyleSheet(
            f"#noteCard {{ background-color: {view.color}; border-radius: 8px; }}"
            "QPlainTextEdit { background: transparent; border: none; }"
        )

        self.text = QPlainTextEdit()
        self.text.setPlaceholderText("Escribe tu nota aquí...")
        self.text.setReadOnly(True)
        self.text.textChanged.connect(self._on_text_changed)

        self.date_label = QLabel()
        self.edit_btn = QPushButton("Edit")
        self.edit_btn.setFlat(True)
        self.edit_btn.clicked.connect(self.toggle_edit)
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.setFlat(True)
        self.delete_btn.clicked.connect(lambda: self.deleteRequested.emit(self.note_id))

        footer = QHBoxLayout()
        footer.addWidget(self.date_label)
        footer.addStretch(1)
        footer.addWidget(self.edit_btn)
        footer.addWidget(self.delete_btn)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 6)
        layout.addWidget(self.text, 1)
        layout.addLayout(footer)

        self.apply(view)

    @property
    def editing(self) -> bool:
        return self._editing

    def apply(self, view: CardView) -> None:
        """Project a view model onto the widget without echoing textChanged."""
        if self.text.toPlainText() != view.content and not self._editing:
            with blocked_signals(self.text):
                self.text.setPlainText(view.content)
        self.date_label.setText(view.date_label)
        self.setVisible(view.visible)

    def toggle_edit(self) -> None:
        self._editing = not self._editing
        self.text.setReadOnly(not self._editing)
        if self._editing:
            self.edit_btn.setText("Save")
            self.text.setFocus()
        else:
            self.edit_btn.setText("Edit")
            self.editFinished.emit(self.note_id, self.text.toPlainText())

    def _on_text_changed(self) -> None:
        if self._editing:
            self.edited.emit(self.note_id, self.text.toPlainText())
