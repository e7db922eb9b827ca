from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QTimer

from sticky_notes.settings import SAVE_DEBOUNCE_MS
from sticky_notes.store.note_store import NoteStore

log = logging.getLogger(__name__)


def _qt_timer(interval_ms: int) -> QTimer:
    timer = QTimer()
    timer.setSingleShot(True)
    timer.setInterval(int(interval_ms))
    return timer


class AutosaveController:
    """
    Debounced content saves, one pending single-shot timer per note.

    on_edited()  -> remember draft, (re)start the note's timer
    timer fires  -> store.update(note_id, draft)
    commit()     -> stop the timer, write now (leaving edit mode)
    discard()    -> stop the timer, forget the draft (note deleted)
    """

    def __init__(
        self,
        store: NoteStore,
        *,
        debounce_ms: int = SAVE_DEBOUNCE_MS,
        timer_factory: Callable[[int], QTimer] = _qt_timer,
    ):
        self.store = store
        self.debounce_ms = int(debounce_ms)
        self._timer_factory = timer_factory
        self._timers: dict[str, QTimer] = {}
        self._drafts: dict[str, str] = {}
        # Reported to the caller's error boundary; None means "re-raise".
        self.on_error: Optional[Callable[[str, Exception], None]] = None

    def _timer_for(self, note_id: str) -> QTimer:
        timer = self._timers.get(note_id)
        if timer is None:
            timer = self._timer_factory(self.debounce_ms)
            timer.timeout.connect(lambda nid=note_id: self._on_timeout(nid))
            self._timers[note_id] = timer
        return timer

    def on_edited(self, note_id: str, content: str) -> None:
        self._drafts[note_id] = content
        timer = self._timer_for(note_id)
        # start() on an active single-shot timer restarts it
        timer.start()

    def has_pending(self, note_id: str) -> bool:
        timer = self._timers.get(note_id)
        return timer is not None and timer.isActive()

    def draft_for(self, note_id: str) -> Optional[str]:
        return self._drafts.get(note_id)

    def drafts(self) -> dict[str, str]:
        return dict(self._drafts)

    def _stop(self, note_id: str) -> None:
        timer = self._timers.get(note_id)
        if timer is not None and timer.isActive():
            timer.stop()

    def _on_timeout(self, note_id: str) -> None:
        content = self._drafts.pop(note_id, None)
        if content is None:
            return
        log.debug("Autosave fired: id=%s", note_id)
        self._write(note_id, content)

    def commit(self, note_id: str, content: Optional[str] = None) -> None:
        self._stop(note_id)
        draft = self._drafts.pop(note_id, None)
        if content is None:
            content = draft
        if content is None:
            return
        self._write(note_id, content)

    def discard(self, note_id: str) -> None:
        self._stop(note_id)
        self._drafts.pop(note_id, None)
        timer = self._timers.pop(note_id, None)
        if timer is not None:
            timer.deleteLater()

    def flush_all(self) -> None:
        pending = list(self._drafts)
        if pending:
            log.info("Flushing pending edits: count=%d", len(pending))
        for note_id in pending:
            self.commit(note_id)

    def _write(self, note_id: str, content: str) -> None:
        try:
            self.store.update(note_id, content)
        except Exception as e:
            if self.on_error is None:
                raise
            self.on_error(note_id, e)
