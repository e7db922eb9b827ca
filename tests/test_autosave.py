import sys
import os
import json

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from sticky_notes.settings import SAVE_DEBOUNCE_MS, STORAGE_KEY
from sticky_notes.store.autosave import AutosaveController
from sticky_notes.store.note_store import NoteStore
from sticky_notes.ui.projection import project_cards


@pytest.fixture
def store(storage, clock):
    s = NoteStore(storage, clock=clock)
    s.open()
    return s


@pytest.fixture
def autosave(store, timers):
    return AutosaveController(store, timer_factory=timers)


def _contents(storage):
    return [r["content"] for r in json.loads(storage.data[STORAGE_KEY])]


def test_keystrokes_reschedule_a_single_timer(store, autosave, timers, storage):
    a = store.create("red")
    writes = storage.writes

    autosave.on_edited(a.id, "h")
    autosave.on_edited(a.id, "he")
    autosave.on_edited(a.id, "hello")

    assert len(timers.created) == 1
    timer = timers.created[0]
    assert timer.interval_ms == SAVE_DEBOUNCE_MS
    assert timer.starts == 3
    assert autosave.has_pending(a.id)
    assert storage.writes == writes


def test_timer_fire_commits_latest_draft(store, autosave, timers, storage):
    a = store.create("red")
    autosave.on_edited(a.id, "hel")
    autosave.on_edited(a.id, "hello")

    timers.created[0].fire()

    assert _contents(storage) == ["hello"]
    assert autosave.draft_for(a.id) is None
    assert not autosave.has_pending(a.id)


def test_commit_cancels_pending_and_writes_now(store, autosave, timers, storage):
    a = store.create("red")
    autosave.on_edited(a.id, "draft")

    autosave.commit(a.id, "final")
    writes = storage.writes
    timers.created[0].fire()

    assert _contents(storage) == ["final"]
    assert storage.writes == writes


def test_commit_without_content_uses_draft(store, autosave):
    a = store.create("red")
    autosave.on_edited(a.id, "typed")
    autosave.commit(a.id)
    assert store.get(a.id).content == "typed"


def test_commit_with_nothing_pending_is_noop(store, autosave, storage):
    a = store.create("red")
    writes = storage.writes
    autosave.commit(a.id)
    assert storage.writes == writes


def test_discard_drops_draft(store, autosave, timers, storage):
    a = store.create("red")
    autosave.on_edited(a.id, "never saved")
    autosave.discard(a.id)
    store.delete(a.id)

    timers.created[0].fire()

    assert timers.created[0].deleted
    assert _contents(storage) == []


def test_timers_are_per_note(store, autosave, timers):
    a = store.create("red")
    b = store.create("blue")
    autosave.on_edited(a.id, "A")
    autosave.on_edited(b.id, "B")

    timers.created[1].fire()

    assert store.get(b.id).content == "B"
    assert store.get(a.id).content == ""
    assert autosave.has_pending(a.id)


def test_flush_all_commits_every_draft(store, autosave):
    a = store.create("red")
    b = store.create("blue")
    autosave.on_edited(a.id, "A")
    autosave.on_edited(b.id, "B")

    autosave.flush_all()

    assert {n.content for n in store.list()} == {"A", "B"}
    assert autosave.drafts() == {}


def test_write_errors_go_to_handler(store, autosave, timers, storage):
    a = store.create("red")

    def _fail(key, value):
        raise OSError("disk full")

    storage.set_item = _fail
    seen = []
    autosave.on_error = lambda note_id, exc: seen.append((note_id, str(exc)))

    autosave.on_edited(a.id, "x")
    timers.created[0].fire()

    assert seen == [(a.id, "disk full")]


def test_write_errors_propagate_without_handler(store, autosave, storage):
    a = store.create("red")

    def _fail(key, value):
        raise OSError("disk full")

    storage.set_item = _fail
    autosave.on_edited(a.id, "x")
    with pytest.raises(OSError):
        autosave.commit(a.id)


def test_sticky_notes_walkthrough(store, autosave, timers, storage, clock):
    a = store.create("red")
    assert a.content == ""
    assert store.list()[0].id == a.id

    autosave.on_edited(a.id, "hell")
    autosave.on_edited(a.id, "hello")
    timers.created[0].fire()
    assert json.loads(storage.data[STORAGE_KEY]) == [a.with_content("hello").to_record()]

    b = store.create("blue")
    assert [n.id for n in store.list()] == [b.id, a.id]
    assert [r["id"] for r in json.loads(storage.data[STORAGE_KEY])] == [b.id, a.id]

    reloaded = NoteStore(storage, clock=clock)
    assert [n.id for n in reloaded.open()] == [b.id, a.id]

    visible = {c.note_id: c.visible for c in project_cards(store.list(), "hell")}
    assert visible == {a.id: True, b.id: False}

    store.delete(b.id)
    assert [r["id"] for r in json.loads(storage.data[STORAGE_KEY])] == [a.id]
