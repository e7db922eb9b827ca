from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from sticky_notes.core.dates import utc_now
from sticky_notes.core.ids import NoteIdGenerator
from sticky_notes.core.models import Note
from sticky_notes.core.search import matches_query
from sticky_notes.settings import STORAGE_KEY
from sticky_notes.storage.backends import KeyValueStorage

log = logging.getLogger(__name__)

Listener = Callable[["NoteStore"], None]


def serialize_notes(notes: Iterable[Note]) -> str:
    """Deterministic JSON array of note records, in the given order."""
    return json.dumps([n.to_record() for n in notes], ensure_ascii=False, separators=(",", ":"))


def deserialize_notes(raw: Optional[str]) -> list[Note]:
    """
    Missing or malformed data -> [].
    Malformed records and duplicate ids are skipped (first one wins).
    """
    if not raw:
        return []
    try:
        records = json.loads(raw)
    except ValueError:
        log.warning("Stored notes are not valid JSON; starting with an empty collection")
        return []
    if not isinstance(records, list):
        log.warning("Stored notes are not a JSON array (%s); starting empty", type(records).__name__)
        return []

    notes: list[Note] = []
    seen: set[str] = set()
    for i, record in enumerate(records):
        try:
            note = Note.from_record(record)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Skipping malformed note record #%d: %s", i, e)
            continue
        if note.id in seen:
            log.warning("Skipping duplicate note id=%s", note.id)
            continue
        seen.add(note.id)
        notes.append(note)
    return notes


class NoteStore:
    """
    In-memory list of notes (newest first) mirrored to a single storage key.
    The list is the source of truth; every mutation rewrites the whole key.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = utc_now,
        id_generator: NoteIdGenerator | None = None,
    ):
        self.storage = storage
        self.key = key
        self._clock = clock
        self._ids = id_generator or NoteIdGenerator()
        self._notes: list[Note] = []
        self._listeners: list[Listener] = []

    # ---- lifecycle ----

    def open(self) -> list[Note]:
        notes = deserialize_notes(self.storage.get_item(self.key))
        notes.sort(key=lambda n: n.date, reverse=True)
        self._notes = notes
        self._ids.seed(n.id for n in notes)
        log.info("Notes loaded: key=%s count=%d", self.key, len(notes))
        return self.list()

    def close(self) -> None:
        self._listeners.clear()
        self.storage.close()
        log.debug("Note store closed: key=%s", self.key)

    # ---- queries ----

    def list(self) -> list[Note]:
        return list(self._notes)

    def get(self, note_id: str) -> Optional[Note]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def search(self, query: str) -> list[Note]:
        return [n for n in self._notes if matches_query(n.content, query)]

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return any(n.id == note_id for n in self._notes)

    # ---- mutations ----

    def create(self, color: str) -> Note:
        note_id = self._ids.next_id()
        while note_id in self:
            note_id = self._ids.next_id()
        note = Note(id=note_id, content="", color=color, date=self._clock())
        self._notes.insert(0, note)
        log.info("Note created: id=%s color=%s", note.id, color)
        self.persist()
        self._notify()
        return note

    def update(self, note_id: str, content: str) -> None:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                break
        else:
            # Unknown ids are ignored without error.
            log.debug("Update ignored, unknown note id=%s", note_id)
            return

        self._notes[i] = note.with_content(content)
        log.debug("Note updated: id=%s len=%d", note_id, len(content))
        self.persist()
        self._notify()

    def delete(self, note_id: str) -> None:
        remaining = [n for n in self._notes if n.id != note_id]
        if len(remaining) == len(self._notes):
            log.debug("Delete ignored, unknown note id=%s", note_id)
            return
        self._notes = remaining
        log.info("Note deleted: id=%s", note_id)
        self.persist()
        self._notify()

    def persist(self) -> None:
        """Overwrite the storage key with the full current collection."""
        self.storage.set_item(self.key, self.snapshot())

    def snapshot(self) -> str:
        return serialize_notes(self._notes)

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
