from .core.models import Note
from .storage.backends import KeyValueStorage, MemoryStorage, JsonFileStorage, QSettingsStorage
from .store.note_store import NoteStore
from .store.autosave import AutosaveController

__all__ = ["Note",
           "KeyValueStorage",
           "MemoryStorage",
           "JsonFileStorage",
           "QSettingsStorage",
           "NoteStore",
           "AutosaveController",
           ]
