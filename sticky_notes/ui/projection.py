from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterable, Mapping, Optional

from sticky_notes.core.dates import format_note_date
from sticky_notes.core.models import Note
from sticky_notes.core.search import matches_query


@dataclass(frozen=True)
class CardView:
    note_id: str
    content: str
    color: str
    date_label: str
    visible: bool


def project_cards(
    notes: Iterable[Note],
    query: str = "",
    drafts: Optional[Mapping[str, str]] = None,
    keep_visible: Collection[str] = (),
) -> list[CardView]:
    """
    Notes (in display order) -> card view models.
    Live text is the pending draft when there is one; search hides, never drops.
    Ids in keep_visible are shown whatever the query.
    """
    drafts = drafts or {}
    cards: list[CardView] = []
    for note in notes:
        content = drafts.get(note.id, note.content)
        cards.append(
            CardView(
                note_id=note.id,
                content=content,
                color=note.color,
                date_label=format_note_date(note.date),
                visible=note.id in keep_visible or matches_query(content, query),
            )
        )
    return cards
