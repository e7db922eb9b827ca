from .note_store import NoteStore, serialize_notes, deserialize_notes
from .autosave import AutosaveController

__all__ = ["NoteStore",
           "serialize_notes",
           "deserialize_notes",
           "AutosaveController",
           ]
