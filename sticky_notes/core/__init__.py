from .models import Note
from .ids import NoteIdGenerator
from .search import matches_query
from .palette import PALETTE, PaletteColor

__all__ = ["Note",
           "NoteIdGenerator",
           "matches_query",
           "PALETTE",
           "PaletteColor",
           ]
